"""Pagination value objects shared by services and store adapters."""

import math
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from src.domain.enums import SortDirection

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class PageRequest:
    """
    Zero-based page request.

    sort_by holds the entity attribute name (snake_case); translating API
    names happens before the request reaches the store.
    """

    page: int = 0
    size: int = 10
    sort_by: str = "id"
    direction: SortDirection = SortDirection.ASC

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValueError("Page index must not be negative")
        if self.size < 1:
            raise ValueError("Page size must be at least 1")

    @property
    def offset(self) -> int:
        return self.page * self.size

    @property
    def descending(self) -> bool:
        return self.direction == SortDirection.DESC


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the information needed to fetch the others."""

    items: list[T]
    page: int
    size: int
    total_elements: int
    sort_by: str
    direction: SortDirection
    total_pages: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "total_pages", math.ceil(self.total_elements / self.size) if self.size else 0
        )

    @classmethod
    def of(cls, items: list[T], request: PageRequest, total: int) -> "Page[T]":
        return cls(
            items=items,
            page=request.page,
            size=request.size,
            total_elements=total,
            sort_by=request.sort_by,
            direction=request.direction,
        )

    @property
    def is_first(self) -> bool:
        return self.page == 0

    @property
    def is_last(self) -> bool:
        return self.page >= self.total_pages - 1

    def map(self, fn: Callable[[T], U]) -> "Page[U]":
        return Page(
            items=[fn(item) for item in self.items],
            page=self.page,
            size=self.size,
            total_elements=self.total_elements,
            sort_by=self.sort_by,
            direction=self.direction,
        )
