import logging
from typing import Optional

import redis.exceptions

from urlshortener.core.config import settings

logger = logging.getLogger(__name__)


class MappingCache:
    """Redis read-through cache of short code -> long URL.

    Every operation fails open: a Redis outage degrades to store lookups and
    never fails the request.
    """

    KEY_PREFIX = "url:"

    def __init__(self, client, ttl: int = settings.CACHE_TTL_SECONDS):
        self.client = client
        self.ttl = ttl

    def _key(self, short_code: str) -> str:
        return f"{self.KEY_PREFIX}{short_code}"

    def get(self, short_code: str) -> Optional[str]:
        try:
            cached_url = self.client.get(self._key(short_code))
        except redis.exceptions.RedisError:
            logger.warning(f"Redis lookup failed for {short_code}")
            return None

        if cached_url is None:
            return None
        if isinstance(cached_url, (bytes, bytearray)):
            cached_url = cached_url.decode()
        logger.debug(f"Resolve cache HIT for {short_code}")
        return cached_url

    def put(self, short_code: str, long_url: str) -> None:
        try:
            self.client.setex(self._key(short_code), self.ttl, long_url)
            logger.debug(f"Cached {short_code} -> {long_url[:50]}")
        except redis.exceptions.RedisError:
            logger.warning(f"Failed to cache {short_code}, Redis unavailable")

    def evict(self, short_code: str) -> None:
        try:
            self.client.delete(self._key(short_code))
        except redis.exceptions.RedisError:
            logger.warning(f"Failed to evict {short_code}, Redis unavailable")
