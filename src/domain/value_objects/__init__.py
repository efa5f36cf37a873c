"""Domain value objects."""

from src.domain.value_objects.core import UNSET, Maybe, is_set
from src.domain.value_objects.filters import (EVENT_SORT_FIELDS,
                                              VENUE_SORT_FIELDS, EventFilter,
                                              VenueFilter)
from src.domain.value_objects.pagination import Page, PageRequest

__all__ = [
    "UNSET",
    "Maybe",
    "is_set",
    "EventFilter",
    "VenueFilter",
    "EVENT_SORT_FIELDS",
    "VENUE_SORT_FIELDS",
    "Page",
    "PageRequest",
]
