from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from urlshortener.core.exceptions import DuplicateKeyError
from urlshortener.db.models import URLMapping, utcnow

logger = logging.getLogger(__name__)

UNIQUE_FIELDS = ("short_code", "long_url")


class MappingStore(ABC):
    """Narrow query interface the mapping service needs from persistence.

    Implementations enforce uniqueness of ``long_url`` and ``short_code`` and
    report violations on insert as ``DuplicateKeyError``.
    """

    @abstractmethod
    def find_by_id(self, mapping_id: str) -> Optional[URLMapping]:
        ...

    @abstractmethod
    def find_by_long_url(self, long_url: str) -> Optional[URLMapping]:
        ...

    @abstractmethod
    def find_by_short_code(self, short_code: str) -> Optional[URLMapping]:
        ...

    @abstractmethod
    def insert(self, long_url: str, short_code: str) -> URLMapping:
        ...

    @abstractmethod
    def increment_access_count(self, short_code: str) -> bool:
        """Atomically add one to the counter; False when no row matched."""

    @abstractmethod
    def delete_by_id(self, mapping_id: str) -> bool:
        ...

    @abstractmethod
    def find_page(self, offset: int, limit: int, term: Optional[str] = None) -> Tuple[int, List[URLMapping]]:
        """Return (total matching, slice) ordered newest first."""


def _duplicate_field(error: IntegrityError) -> Optional[str]:
    message = str(error.orig) if getattr(error, "orig", None) is not None else str(error)
    for field in UNIQUE_FIELDS:
        # PostgreSQL names the constraint, SQLite names table.column
        if f"uq_url_mappings_{field}" in message or f"url_mappings.{field}" in message:
            return field
    return None


class SqlAlchemyMappingStore(MappingStore):

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, mapping_id: str) -> Optional[URLMapping]:
        return self.db.get(URLMapping, mapping_id)

    def find_by_long_url(self, long_url: str) -> Optional[URLMapping]:
        return self.db.query(URLMapping).filter(URLMapping.long_url == long_url).first()

    def find_by_short_code(self, short_code: str) -> Optional[URLMapping]:
        return self.db.query(URLMapping).filter(URLMapping.short_code == short_code).first()

    def insert(self, long_url: str, short_code: str) -> URLMapping:
        db_url = URLMapping(long_url=long_url, short_code=short_code, access_count=0)
        try:
            self.db.add(db_url)
            self.db.commit()
            self.db.refresh(db_url)
            return db_url
        except IntegrityError as e:
            self.db.rollback()
            field = _duplicate_field(e)
            logger.warning(
                "IntegrityError creating URLMapping short_code=%s long_url=%s: %s",
                short_code, long_url[:50], str(e.orig) if e.orig is not None else str(e)
            )
            if field == "short_code":
                raise DuplicateKeyError(field, short_code) from e
            if field == "long_url":
                raise DuplicateKeyError(field, long_url) from e
            raise
        except Exception:
            self.db.rollback()
            raise

    def increment_access_count(self, short_code: str) -> bool:
        try:
            updated = self.db.query(URLMapping).filter(URLMapping.short_code == short_code).update(
                {
                    URLMapping.access_count: URLMapping.access_count + 1,
                    URLMapping.updated_at: utcnow(),
                },
                synchronize_session=False,
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        # Drop stale identity-map state so later reads see the new counter
        self.db.expire_all()
        return updated > 0

    def delete_by_id(self, mapping_id: str) -> bool:
        try:
            deleted = self.db.query(URLMapping).filter(URLMapping.id == mapping_id).delete()
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return deleted > 0

    def find_page(self, offset: int, limit: int, term: Optional[str] = None) -> Tuple[int, List[URLMapping]]:
        query = self.db.query(URLMapping)
        if term:
            query = query.filter(
                or_(
                    URLMapping.long_url.icontains(term, autoescape=True),
                    URLMapping.short_code.icontains(term, autoescape=True),
                )
            )
        total = query.count()
        items = (
            query.order_by(URLMapping.created_at.desc(), URLMapping.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return total, items
