"""
Extraction endpoints. Thin HTTP layer, delegates all logic to the
extraction service.
"""

import logging
import os
import tempfile

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status

from app.config import settings
from app.dependencies import get_extraction_service
from app.domain.enums import ExtractionFailure
from app.domain.models import ExtractionResponse, MimeTypesResponse, ServiceStatusResponse
from app.domain.versions import version_to_float
from app.services.extraction_service import TextExtractionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/extraction", tags=["Extraction"])

# Uploads with these types carry no information; guess from the filename
_GENERIC_MIMES = {"application/octet-stream", "binary/octet-stream"}


# Plain `def` endpoints: the adapter blocks on HTTP, so FastAPI runs
# them in its threadpool instead of on the event loop.


@router.get("/status", response_model=ServiceStatusResponse)
def get_status(
    svc: TextExtractionService = Depends(get_extraction_service),
):
    """Report whether the extraction server is reachable and its version."""
    server = svc.status()
    return ServiceStatusResponse(
        available=server.available,
        version=version_to_float(server.version),
        endpoint=settings.tika_url,
    )


@router.get("/mime-types", response_model=MimeTypesResponse)
def list_mime_types(
    svc: TextExtractionService = Depends(get_extraction_service),
):
    """List the MIME types the extraction server can parse."""
    mimes = svc.supported_mimes()
    if not mimes:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Extraction server did not return its MIME types",
        )
    return MimeTypesResponse(count=len(mimes), mime_types=mimes)


@router.post(
    "/extract",
    response_model=ExtractionResponse,
    status_code=status.HTTP_200_OK,
)
def extract_upload(
    file: UploadFile,
    svc: TextExtractionService = Depends(get_extraction_service),
):
    """Upload a document → send to the extraction server → return plain text."""
    if not file.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Filename is required",
        )

    file_bytes = file.file.read()
    if not file_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Empty file uploaded",
        )

    # No MIME list means the server never answered
    if not svc.supported_mimes():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Extraction server is unavailable",
        )

    mime = file.content_type
    if mime in _GENERIC_MIMES:
        mime = None
    if not svc.supports(file.filename, mime):
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=f"Unsupported file type: {mime or file.filename}",
        )

    # The adapter reads from disk, so park the upload in a temp file
    suffix = os.path.splitext(file.filename)[1]
    fd, tmp_path = tempfile.mkstemp(suffix=suffix)
    try:
        with os.fdopen(fd, "wb") as tmp:
            tmp.write(file_bytes)
        result = svc.extract(tmp_path)
    finally:
        os.remove(tmp_path)

    if result.failure == ExtractionFailure.TRANSPORT:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Extraction server is unavailable",
        )
    if not result.ok:
        logger.warning(
            "Extraction failed for upload %s: %s %s",
            file.filename,
            result.status_code,
            result.reason,
        )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Extraction server could not process the file "
            f"({result.status_code} {result.reason})",
        )

    return ExtractionResponse(
        file_name=file.filename,
        characters=len(result.text),
        text=result.text,
    )
