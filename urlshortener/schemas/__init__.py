# re-export common schemas for simpler imports
from .url import URLCreateRequest, URLCreateResponse, MappingRecord
from .page import PagedResult

__all__ = [
    "URLCreateRequest",
    "URLCreateResponse",
    "MappingRecord",
    "PagedResult",
]
