import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from urlshortener.api.deps import get_mapping_service
from urlshortener.services.shortener import MappingService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["redirect"])


@router.get("/", include_in_schema=False)
def index():
    return RedirectResponse(url="/docs")


@router.get("/{short_code}")
def redirect_to_url_endpoint(short_code: str, service: MappingService = Depends(get_mapping_service)):
    """
    Access the shortened URL and get redirected to the original long URL.
    """
    long_url = service.resolve(short_code)
    logger.info(f"Redirecting {short_code} -> {long_url[:50]}")
    return RedirectResponse(url=long_url, status_code=status.HTTP_302_FOUND)
