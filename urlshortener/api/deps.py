from fastapi import Depends
from sqlalchemy.orm import Session

from urlshortener.core.config import settings
from urlshortener.db import database
from urlshortener.db.repository import SqlAlchemyMappingStore
from urlshortener.services.cache import MappingCache
from urlshortener.services.shortener import MappingService


def get_cache():
    if database.redis_client is None:
        return None
    return MappingCache(database.redis_client)


def get_mapping_service(
    db: Session = Depends(database.get_db),
    cache=Depends(get_cache),
) -> MappingService:
    return MappingService(
        SqlAlchemyMappingStore(db),
        base_url=settings.BASE_URL,
        max_attempts=settings.CODE_GENERATION_MAX_ATTEMPTS,
        cache=cache,
    )
