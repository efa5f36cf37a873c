from collections.abc import Callable
from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.domain.value_objects.pagination import Page

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for API bodies: camelCase on the wire, snake_case accepted on input"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PageResponse(CamelModel, Generic[T]):
    """One page of results in the shape list clients already page through"""

    content: list[T]
    page: int
    size: int
    total_elements: int
    total_pages: int
    sort_by: str
    direction: str
    first: bool
    last: bool

    @classmethod
    def from_page(cls, page: Page[Any], mapper: Callable[[Any], T]) -> "PageResponse[T]":
        mapped = page.map(mapper)
        return cls(
            content=mapped.items,
            page=mapped.page,
            size=mapped.size,
            total_elements=mapped.total_elements,
            total_pages=mapped.total_pages,
            sort_by=to_camel(mapped.sort_by),
            direction=mapped.direction.value,
            first=mapped.is_first,
            last=mapped.is_last,
        )


class ErrorResponse(CamelModel):
    timestamp: datetime
    status: int
    error: str
    message: str
    path: str
    validation_errors: list[str] | None = Field(default=None)
