"""
Dependency Injection container.

Wires abstract ports → concrete adapters. To point at a different
extraction backend, change the adapter instantiation here.
Nothing else in the codebase changes  (Open/Closed Principle).
"""

from functools import lru_cache

from fastapi import Depends

from app.adapters.tika_rest_adapter import TikaRestAdapter
from app.config import settings
from app.ports.extraction_port import ExtractionPort
from app.services.extraction_service import TextExtractionService


# ── Singletons (cached) ──────────────────────────────────────


@lru_cache(maxsize=1)
def _get_tika_adapter() -> TikaRestAdapter:
    # One adapter per process, so the MIME list is fetched only once
    return TikaRestAdapter(base_url=settings.tika_url, timeout=settings.tika_timeout)


# ── FastAPI Dependencies (return abstract types) ──────────────


def get_extractor() -> ExtractionPort:
    """Inject the text extraction adapter."""
    return _get_tika_adapter()


# ── Domain Services ───────────────────────────────────────────


def get_extraction_service(
    extractor: ExtractionPort = Depends(get_extractor),
) -> TextExtractionService:
    """Injects the extraction adapter into the extraction domain service."""
    return TextExtractionService(
        extractor=extractor, min_version=settings.tika_min_version
    )
