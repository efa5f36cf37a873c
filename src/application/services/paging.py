"""Translate raw paging parameters into a validated PageRequest."""

from pydantic.alias_generators import to_snake

from src.domain.enums import SortDirection
from src.domain.exceptions import ValidationException
from src.domain.value_objects.pagination import PageRequest


def to_attribute_name(name: str) -> str:
    """eventDate -> event_date; snake_case passes through unchanged"""
    return to_snake(name.strip())


def build_page_request(
    page: int,
    size: int,
    sort_by: str,
    direction: str | SortDirection | None,
    *,
    sortable: frozenset[str],
    max_size: int,
) -> PageRequest:
    """
    Raises:
        ValidationException: negative page, size out of range, unknown sort field
    """
    if page < 0:
        raise ValidationException("Page index must not be negative", field="page")
    if size < 1 or size > max_size:
        raise ValidationException(f"Page size must be between 1 and {max_size}", field="size")

    attribute = to_attribute_name(sort_by)
    if attribute not in sortable:
        raise ValidationException(f"Cannot sort by '{sort_by}'", field="sortBy")

    return PageRequest(
        page=page,
        size=size,
        sort_by=attribute,
        direction=SortDirection.parse(direction),
    )
