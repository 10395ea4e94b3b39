import math
from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class PagedResult(BaseModel, Generic[T]):
    """One page of results plus the totals needed to navigate the rest."""

    content: List[T]
    page: int
    size: int
    total_elements: int
    total_pages: int
    first: bool
    last: bool

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def of(cls, content: List[T], page: int, size: int, total: int) -> "PagedResult[T]":
        total_pages = math.ceil(total / size)
        return cls(
            content=content,
            page=page,
            size=size,
            total_elements=total,
            total_pages=total_pages,
            first=page == 0,
            last=page + 1 >= total_pages,
        )
