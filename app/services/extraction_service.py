"""
Extraction service: decides whether a file can be sent to the extraction
server and fetches its text content.
Depends on ports only (Dependency Inversion).
"""

import logging
import mimetypes
import os
from typing import Any

from app.domain.models import ExtractionResult, ServerStatus
from app.domain.versions import version_tuple
from app.ports.extraction_port import ExtractionPort

logger = logging.getLogger(__name__)

# Oldest Tika server whose REST API matches what the adapter sends
DEFAULT_MIN_VERSION = "1.7"


def normalize_mime(mime: str) -> str:
    """Drop parameters and lower-case, e.g. "Application/PDF; q=1" → "application/pdf"."""
    return mime.split(";", 1)[0].strip().lower()


class TextExtractionService:
    """Orchestrates availability and MIME checks around the extraction port."""

    def __init__(
        self,
        extractor: ExtractionPort,
        min_version: str = DEFAULT_MIN_VERSION,
    ) -> None:
        self._extractor = extractor
        self._min_version = min_version

    def status(self) -> ServerStatus:
        """
        Check the server root, then its version.

        Versions are compared segment by segment as integers, so 1.24 and
        1.10 both count as newer than 1.7.
        """
        if not self._extractor.is_available():
            return ServerStatus(available=False)

        version = self._extractor.get_version_string()
        if version_tuple(version) < version_tuple(self._min_version):
            logger.warning(
                "Tika server version %s is older than required %s",
                version,
                self._min_version,
            )
            return ServerStatus(available=False, version=version)
        return ServerStatus(available=True, version=version)

    def is_available(self) -> bool:
        """The server answers and is recent enough."""
        return self.status().available

    def supported_mimes(self) -> dict[str, Any]:
        return self._extractor.get_supported_mimes()

    def supports_mime(self, mime: str | None) -> bool:
        """
        True if the server lists `mime` either as a type of its own or as
        an alias of another type.
        """
        if not mime:
            return False
        mime = normalize_mime(mime)

        supported = self._extractor.get_supported_mimes()
        if mime in supported:
            return True

        for info in supported.values():
            if isinstance(info, dict) and mime in (info.get("alias") or []):
                return True
        return False

    def supports_extension(self, extension: str) -> bool:
        """Check a bare extension ("pdf" or ".pdf") via its guessed MIME type."""
        ext = extension.lower().lstrip(".")
        if not ext:
            return False
        mime, _ = mimetypes.guess_type(f"file.{ext}")
        return self.supports_mime(mime)

    def supports(self, file_path: str, mime: str | None = None) -> bool:
        """Check an explicit MIME type, falling back to the path's extension."""
        if mime and self.supports_mime(mime):
            return True
        return self.supports_extension(os.path.splitext(file_path)[1])

    def extract(self, file_path: str) -> ExtractionResult:
        result = self._extractor.extract(file_path)
        if result.ok:
            logger.info(
                "Extracted %d characters from %s", len(result.text), file_path
            )
        return result

    def get_content(self, file_path: str) -> str | None:
        """Plain text of the file, or None if the server couldn't parse it."""
        return self.extract(file_path).text
