from contextlib import contextmanager
from typing import Callable, Optional
import logging

from urlshortener.core.exceptions import (
    ConflictError,
    DuplicateKeyError,
    MappingError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from urlshortener.db.models import LONG_URL_MAX_LENGTH
from urlshortener.db.repository import MappingStore
from urlshortener.schemas.page import PagedResult
from urlshortener.schemas.url import MappingRecord
from urlshortener.services.cache import MappingCache
from urlshortener.utils.encoding import generate_short_code

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 5


@contextmanager
def _classified(operation: str):
    """Let service errors through and wrap everything else as StorageError."""
    try:
        yield
    except MappingError:
        raise
    except Exception as e:
        logger.exception("%s failed on the mapping store", operation)
        raise StorageError(f"{operation} failed") from e


class MappingService:
    """Creates, resolves, lists, searches and deletes URL mappings."""

    def __init__(
        self,
        store: MappingStore,
        base_url: str,
        generate_code: Callable[[], str] = generate_short_code,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        cache: Optional[MappingCache] = None,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.store = store
        self.base_url = base_url.rstrip("/")
        self.generate_code = generate_code
        self.max_attempts = max_attempts
        self.cache = cache

    def build_short_url(self, short_code: str) -> str:
        return f"{self.base_url}/{short_code}"

    def create_and_save(self, long_url: Optional[str]) -> str:
        """Return the short URL for ``long_url``, creating the mapping on first sight."""
        mapping = self.shorten(long_url)
        return self.build_short_url(mapping.short_code)

    def shorten(self, long_url: Optional[str]) -> MappingRecord:
        trimmed = long_url.strip() if long_url is not None else ""
        if not trimmed:
            raise ValidationError("longUrl", "Long URL cannot be empty")
        if len(trimmed) > LONG_URL_MAX_LENGTH:
            raise ValidationError("longUrl", f"Long URL must be at most {LONG_URL_MAX_LENGTH} characters")

        with _classified("shorten"):
            # Idempotency: return existing mapping if present
            existing = self.store.find_by_long_url(trimmed)
            if existing:
                logger.debug("Existing short code '%s' found for: %s", existing.short_code, trimmed[:50])
                return MappingRecord.model_validate(existing)

            mapping = self._insert_with_fresh_code(trimmed)

        if self.cache is not None:
            self.cache.put(mapping.short_code, mapping.long_url)
        return mapping

    def _insert_with_fresh_code(self, long_url: str) -> MappingRecord:
        for attempt in range(self.max_attempts):
            short_code = self.generate_code()
            try:
                created = self.store.insert(long_url, short_code)
            except DuplicateKeyError as e:
                if e.field == "long_url":
                    # A concurrent request created it first; hand back the winner
                    winner = self.store.find_by_long_url(long_url)
                    if winner:
                        logger.info("Concurrent creation for %s, reusing '%s'", long_url[:50], winner.short_code)
                        return MappingRecord.model_validate(winner)
                    raise ConflictError("longUrl", long_url, "Mapping for this URL changed concurrently") from e
                logger.info(f"Short code collision on attempt {attempt + 1}/{self.max_attempts}")
                continue

            logger.info("Generated new short code '%s' for URL: %s", created.short_code, long_url[:50])
            return MappingRecord.model_validate(created)

        raise ConflictError(
            "shortCode",
            None,
            f"Failed to generate unique short code after {self.max_attempts} attempts",
        )

    def resolve(self, short_code: str) -> str:
        """Return the long URL for ``short_code`` and count the access."""
        cached_url = self.cache.get(short_code) if self.cache is not None else None

        with _classified("resolve"):
            if cached_url is not None:
                if self.store.increment_access_count(short_code):
                    return cached_url
                # Stale entry for a deleted mapping
                self.cache.evict(short_code)
                logger.warning(f"Resolve 404: Short code not found: {short_code}")
                raise NotFoundError(short_code)

            mapping = self.store.find_by_short_code(short_code)
            if mapping is None:
                logger.warning(f"Resolve 404: Short code not found: {short_code}")
                raise NotFoundError(short_code)

            long_url = mapping.long_url
            if not self.store.increment_access_count(short_code):
                logger.warning(f"Resolve 404: Short code deleted while resolving: {short_code}")
                raise NotFoundError(short_code)

        if self.cache is not None:
            self.cache.put(short_code, long_url)
        logger.debug("Long URL found for %s: %s", short_code, long_url[:50])
        return long_url

    def list(self, page: int, size: int) -> PagedResult[MappingRecord]:
        return self.search(None, page, size)

    def search(self, term: Optional[str], page: int, size: int) -> PagedResult[MappingRecord]:
        if page < 0:
            raise ValidationError("page", "Page index must not be negative")
        if size < 1:
            raise ValidationError("size", "Page size must be at least 1")

        term = term.strip() if term else None
        with _classified("search" if term else "list"):
            total, items = self.store.find_page(page * size, size, term or None)
            content = [MappingRecord.model_validate(item) for item in items]
        return PagedResult[MappingRecord].of(content, page, size, total)

    def delete(self, mapping_id: str) -> None:
        """Remove a mapping by id; unknown ids are ignored."""
        with _classified("delete"):
            mapping = self.store.find_by_id(mapping_id)
            if mapping is None:
                logger.debug("Delete of unknown mapping id %s ignored", mapping_id)
                return
            short_code = mapping.short_code
            self.store.delete_by_id(mapping_id)

        if self.cache is not None:
            self.cache.evict(short_code)
        logger.info("Deleted mapping %s (%s)", mapping_id, short_code)
