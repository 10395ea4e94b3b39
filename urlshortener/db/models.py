import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import declarative_base

Base = declarative_base()

LONG_URL_MAX_LENGTH = 2048
SHORT_CODE_MAX_LENGTH = 16


def _new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class URLMapping(Base):
    __tablename__ = "url_mappings"
    # Named so the store can tell which key a violation hit
    __table_args__ = (
        UniqueConstraint("long_url", name="uq_url_mappings_long_url"),
        UniqueConstraint("short_code", name="uq_url_mappings_short_code"),
    )

    id = Column(String(32), primary_key=True, default=_new_id)
    long_url = Column(String(LONG_URL_MAX_LENGTH), nullable=False)
    short_code = Column(String(SHORT_CODE_MAX_LENGTH), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    # Only touched when the access counter changes
    updated_at = Column(DateTime(timezone=True), nullable=True)
    access_count = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<URLMapping id={self.id} short_code={self.short_code}>"
