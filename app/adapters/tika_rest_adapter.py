"""
Concrete implementation of ExtractionPort for an Apache Tika server (REST API).

Every failure is logged and turned into a sentinel; nothing raises past
this adapter:
  - transport errors   → ERROR log,  False / 0.0 / {} / None
  - non-2xx on /tika   → NOTICE log with path, status, reason, body
"""

import logging
import re
import threading
from typing import Any

import requests

from app.config import Settings
from app.domain.enums import ExtractionFailure
from app.domain.models import ExtractionResult, ServiceCredentials
from app.domain.versions import version_to_float
from app.ports.extraction_port import ExtractionPort

# "notice": normal but significant events, between INFO and WARNING
NOTICE = logging.INFO + 5
logging.addLevelName(NOTICE, "NOTICE")

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"Apache Tika (?P<version>[.\d]+)")
_CHARSET_RE = re.compile(r"charset=[\"']?([\w.:-]+)", re.IGNORECASE)

_UNSET: Any = object()


class TikaRestAdapter(ExtractionPort):
    """Talks to a Tika server over HTTP(S) with optional basic auth."""

    def __init__(
        self,
        base_url: str,
        credentials: ServiceCredentials | None = _UNSET,
        timeout: float | None = None,
        session: requests.Session | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/") + "/"
        # Credentials are read from the environment once, at construction
        if credentials is _UNSET:
            credentials = Settings().tika_credentials()
        self._credentials = credentials
        self._timeout = timeout
        self._session = session or requests.Session()
        self._log = log or logger

        self._mimes: dict[str, Any] = {}
        self._mimes_lock = threading.Lock()

    @property
    def has_credentials(self) -> bool:
        return self._credentials is not None

    # ── Transport ─────────────────────────────────────────────

    def _url(self, path: str) -> str:
        return self._base_url + path.lstrip("/")

    def _send(
        self,
        method: str,
        path: str,
        headers: dict[str, str] | None = None,
        data: bytes | None = None,
    ) -> requests.Response:
        """Issue one request with the configured credentials attached."""
        return self._session.request(
            method,
            self._url(path),
            headers=headers,
            data=data,
            auth=self._credentials.as_auth() if self._credentials else None,
            timeout=self._timeout,
        )

    # ── ExtractionPort ────────────────────────────────────────

    def is_available(self) -> bool:
        """Detect if the service is available."""
        try:
            response = self._send("GET", "")
        except requests.RequestException as e:
            self._log.error("Tika unavailable - %s", e)
            return False

        return response.status_code == 200

    def get_version_string(self) -> str | None:
        """
        Return the dotted version from GET /version, e.g. "2.9.1".

        The body reads like "Apache Tika 2.9.1". None on a non-200 status,
        a body that doesn't match, or a transport error.
        """
        try:
            response = self._send("GET", "version")
        except requests.RequestException as e:
            self._log.error("Tika unavailable - %s", e)
            return None

        if response.status_code != 200:
            return None

        match = _VERSION_RE.search(_decode_text(response))
        if not match:
            return None
        return match.group("version")

    def get_version(self) -> float:
        """Return the server version as a float, 0.0 if it can't be parsed."""
        return version_to_float(self.get_version_string())

    def get_supported_mimes(self) -> dict[str, Any]:
        """
        Return the MIME types the server can parse.

        Fetched once per adapter instance; later calls return the same
        mapping object. A failed fetch returns {} and is not cached.
        """
        if self._mimes:
            return self._mimes

        with self._mimes_lock:
            if self._mimes:
                return self._mimes

            try:
                response = self._send(
                    "GET", "mime-types", headers={"Accept": "application/json"}
                )
            except requests.RequestException as e:
                self._log.error("Tika unavailable - %s", e)
                return {}

            if response.status_code != 200:
                self._log.warning(
                    "Tika mime-types request returned %s %s",
                    response.status_code,
                    response.reason,
                )
                return {}

            try:
                mimes = response.json()
            except ValueError as e:
                self._log.warning("Tika mime-types response is not valid JSON: %s", e)
                return {}

            if not isinstance(mimes, dict):
                self._log.warning(
                    "Tika mime-types response is a %s, expected an object",
                    type(mimes).__name__,
                )
                return {}

            self._mimes = mimes
            return self._mimes

    def extract(self, file_path: str) -> ExtractionResult:
        """
        PUT the file's bytes to /tika and return the plain text.

        Failures are logged at NOTICE level. The response body is only
        non-empty on errors if tika-server was started with --includeStack.
        """
        try:
            with open(file_path, "rb") as f:
                payload = f.read()
        except OSError as e:
            self._log.log(NOTICE, "Tika was not able to read %s: %s", file_path, e)
            return ExtractionResult(
                file_path=file_path,
                failure=ExtractionFailure.FILE_UNREADABLE,
                error=str(e),
            )

        try:
            response = self._send(
                "PUT", "tika", headers={"Accept": "text/plain"}, data=payload
            )
            response.raise_for_status()
        except requests.RequestException as e:
            # HTTPError carries the response; connection errors don't
            return self._extraction_failed(file_path, e.response, e)

        return ExtractionResult(file_path=file_path, text=_decode_text(response))

    def extract_text(self, file_path: str) -> str | None:
        """Extract text content from a file, or None if it can't be parsed."""
        return self.extract(file_path).text

    # ── Helpers ───────────────────────────────────────────────

    def _extraction_failed(
        self,
        file_path: str,
        response: requests.Response | None,
        exc: requests.RequestException,
    ) -> ExtractionResult:
        if response is None:
            self._log.log(
                NOTICE,
                "Tika was not able to process %s. Response: %s.",
                file_path,
                exc,
            )
            return ExtractionResult(
                file_path=file_path,
                failure=ExtractionFailure.TRANSPORT,
                error=str(exc),
            )

        body = _decode_text(response)
        msg = "Tika was not able to process %s. Response: %s %s." % (
            file_path,
            response.status_code,
            response.reason,
        )
        if body:
            msg += " Body: " + body

        self._log.log(NOTICE, msg)
        return ExtractionResult(
            file_path=file_path,
            failure=ExtractionFailure.HTTP_STATUS,
            status_code=response.status_code,
            reason=response.reason,
            body=body or None,
            error=str(exc),
        )


def _decode_text(response: requests.Response) -> str:
    """Decode the body with the declared charset, UTF-8 when none is given."""
    content_type = response.headers.get("Content-Type", "")
    match = _CHARSET_RE.search(content_type)
    encoding = match.group(1) if match else "utf-8"
    try:
        return response.content.decode(encoding, errors="replace")
    except LookupError:
        return response.content.decode("utf-8", errors="replace")
