"""
Abstract interface for a remote document text extraction service.
"""

from abc import ABC, abstractmethod
from typing import Any

from app.domain.models import ExtractionResult


class ExtractionPort(ABC):
    """
    Port for talking to a text extraction server.

    Implementations never raise past this boundary: failures are logged
    and returned as sentinels (False, 0.0, empty mapping, None) or as a
    failed ExtractionResult.
    """

    @abstractmethod
    def is_available(self) -> bool:
        """Return True if the server root answers with status 200."""
        ...

    @abstractmethod
    def get_version_string(self) -> str | None:
        """Return the dotted server version ("2.9.1"), or None if unknown."""
        ...

    @abstractmethod
    def get_version(self) -> float:
        """Return the server version, or 0.0 if it cannot be determined."""
        ...

    @abstractmethod
    def get_supported_mimes(self) -> dict[str, Any]:
        """
        Return supported MIME types mapped to their metadata.

        The mapping may include aliased types under each entry's
        "alias" key.
        """
        ...

    @abstractmethod
    def extract(self, file_path: str) -> ExtractionResult:
        """Submit a local file and return the tagged extraction outcome."""
        ...

    @abstractmethod
    def extract_text(self, file_path: str) -> str | None:
        """Submit a local file and return its plain text, or None on failure."""
        ...
