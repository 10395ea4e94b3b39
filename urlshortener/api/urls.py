from typing import Optional
import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from urlshortener.api.deps import get_mapping_service
from urlshortener.core.config import settings
from urlshortener.schemas.page import PagedResult
from urlshortener.schemas.url import MappingRecord, URLCreateRequest, URLCreateResponse
from urlshortener.services.shortener import MappingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/url", tags=["urls"])
legacy_router = APIRouter(prefix="/api/shorturl", tags=["urls"])


@router.post("", response_model=URLCreateResponse)
def create_short_url_endpoint(url_request: URLCreateRequest, service: MappingService = Depends(get_mapping_service)):
    logger.info(f"Received request to create short URL for: {url_request.long_url[:50]}")
    short_url = service.create_and_save(url_request.long_url)
    logger.info(f"API success: Shortened {url_request.long_url[:50]} to {short_url}")
    return URLCreateResponse(short_url=short_url)


@router.get("", response_model=PagedResult[MappingRecord])
def list_urls_endpoint(
    page: int = Query(0, ge=0),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    service: MappingService = Depends(get_mapping_service),
):
    """Paginated listing of all mappings, newest first."""
    return service.list(page, size)


@router.get("/search", response_model=PagedResult[MappingRecord])
def search_urls_endpoint(
    q: Optional[str] = None,
    page: int = Query(0, ge=0),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    service: MappingService = Depends(get_mapping_service),
):
    """Case-insensitive search over long URLs and short codes."""
    return service.search(q, page, size)


@router.delete("/{mapping_id}")
def delete_url_endpoint(mapping_id: str, service: MappingService = Depends(get_mapping_service)):
    service.delete(mapping_id)
    return None


@legacy_router.post("", response_class=PlainTextResponse)
def legacy_create_short_url_endpoint(url: str, service: MappingService = Depends(get_mapping_service)):
    """Older variant: takes the URL as a query parameter and returns the bare code."""
    return service.shorten(url).short_code
