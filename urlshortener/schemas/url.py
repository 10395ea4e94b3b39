from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from urlshortener.db.models import LONG_URL_MAX_LENGTH


# Request DTOs
class URLCreateRequest(BaseModel):
    # long_url is the Python field, 'longUrl' is the JSON key
    long_url: str = Field(..., alias="longUrl")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator('long_url')
    def validate_long_url(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Long URL cannot be empty')
        if len(v) > LONG_URL_MAX_LENGTH:
            raise ValueError(f'Long URL must be at most {LONG_URL_MAX_LENGTH} characters')
        return v


# Response DTOs
class URLCreateResponse(BaseModel):
    short_url: str = Field(..., alias="shortUrl")

    model_config = ConfigDict(populate_by_name=True)


class MappingRecord(BaseModel):
    id: str
    long_url: str
    short_code: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    access_count: int = 0

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
