"""
Pydantic models for responses and internal data transfer.
Pure data, no I/O.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.domain.enums import ExtractionFailure


# ── Credentials ───────────────────────────────────────────────


class ServiceCredentials(BaseModel):
    """Basic auth pair sent with every request to the extraction server."""

    model_config = ConfigDict(frozen=True)

    username: str
    password: str = Field(repr=False)

    def as_auth(self) -> tuple[str, str]:
        """Return the pair in the shape requests expects for `auth=`."""
        return (self.username, self.password)


# ── Extraction ────────────────────────────────────────────────


class ExtractionResult(BaseModel):
    """
    Outcome of submitting one file for text extraction.

    Exactly one of `text` / `failure` is set. On HTTP failures the status,
    reason phrase and body (which may hold a server-side stack trace) are
    kept so callers can tell "service down" apart from "file rejected".
    """

    file_path: str
    text: str | None = None
    failure: ExtractionFailure | None = None
    status_code: int | None = None
    reason: str | None = None
    body: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.text is not None


class ServerStatus(BaseModel):
    """Whether the extraction server is usable, and the version it reported."""

    available: bool
    version: str | None = None


# ── API responses ─────────────────────────────────────────────


class ServiceStatusResponse(BaseModel):
    """Response for GET /extraction/status."""

    available: bool
    version: float
    endpoint: str


class MimeTypesResponse(BaseModel):
    """Response for GET /extraction/mime-types."""

    count: int
    mime_types: dict[str, Any]


class ExtractionResponse(BaseModel):
    """Response after a successful upload-and-extract."""

    file_name: str
    characters: int
    text: str
