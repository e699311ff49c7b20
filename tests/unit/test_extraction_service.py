from unittest.mock import MagicMock

import pytest

from app.domain.enums import ExtractionFailure
from app.domain.models import ExtractionResult
from app.ports.extraction_port import ExtractionPort
from app.services.extraction_service import TextExtractionService, normalize_mime

MIMES = {
    "application/pdf": {"alias": ["application/x-pdf"], "supertype": "application/octet-stream"},
    "text/plain": {"supertype": "application/octet-stream"},
    "application/vnd.ms-excel": {"alias": ["application/msexcel", "application/x-msexcel"]},
}


@pytest.fixture
def extractor():
    port = MagicMock(spec=ExtractionPort)
    port.is_available.return_value = True
    port.get_version_string.return_value = "1.24"
    port.get_supported_mimes.return_value = MIMES
    return port


@pytest.fixture
def service(extractor):
    return TextExtractionService(extractor)


def test_available_when_server_answers_and_is_recent(service):
    assert service.is_available() is True


def test_unavailable_when_server_down(service, extractor):
    extractor.is_available.return_value = False

    assert service.is_available() is False
    extractor.get_version_string.assert_not_called()


@pytest.mark.parametrize("version", ["1.7", "1.10", "1.24", "2.9.1", "3.0"])
def test_versions_compared_segment_by_segment(extractor, version):
    extractor.get_version_string.return_value = version
    service = TextExtractionService(extractor, min_version="1.7")

    assert service.is_available() is True


@pytest.mark.parametrize("version", ["1.6", "1.6.9", "0.10", None])
def test_unavailable_when_server_too_old_or_unknown(extractor, version):
    extractor.get_version_string.return_value = version
    service = TextExtractionService(extractor, min_version="1.7")

    assert service.is_available() is False


def test_status_reports_version_string(service, extractor):
    extractor.get_version_string.return_value = "2.9.1"

    server = service.status()

    assert server.available is True
    assert server.version == "2.9.1"
    extractor.get_version_string.assert_called_once_with()


@pytest.mark.parametrize(
    "mime",
    ["application/pdf", "application/x-pdf", "APPLICATION/PDF", "text/plain; charset=utf-8", "application/x-msexcel"],
)
def test_supports_known_and_aliased_mimes(service, mime):
    assert service.supports_mime(mime) is True


@pytest.mark.parametrize("mime", ["image/x-unknown", "", None])
def test_rejects_unknown_mimes(service, mime):
    assert service.supports_mime(mime) is False


def test_supports_mime_with_empty_server_list(service, extractor):
    extractor.get_supported_mimes.return_value = {}

    assert service.supports_mime("application/pdf") is False


@pytest.mark.parametrize("ext, expected", [("pdf", True), (".PDF", True), ("txt", True), ("", False)])
def test_supports_extension(service, ext, expected):
    assert service.supports_extension(ext) is expected


def test_supports_falls_back_to_path(service):
    assert service.supports("/uploads/report.pdf", "application/x-unknown") is True
    assert service.supports("/uploads/report", "application/x-pdf") is True
    assert service.supports("/uploads/report", None) is False


def test_get_content_delegates(service, extractor):
    extractor.extract.return_value = ExtractionResult(file_path="/tmp/a.pdf", text="hello")

    assert service.get_content("/tmp/a.pdf") == "hello"
    extractor.extract.assert_called_once_with("/tmp/a.pdf")


def test_get_content_none_on_failure(service, extractor):
    extractor.extract.return_value = ExtractionResult(
        file_path="/tmp/a.pdf",
        failure=ExtractionFailure.HTTP_STATUS,
        status_code=422,
        reason="Unprocessable Entity",
    )

    assert service.get_content("/tmp/a.pdf") is None


def test_normalize_mime():
    assert normalize_mime(" Text/HTML ; charset=ISO-8859-1") == "text/html"
