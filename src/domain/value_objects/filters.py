"""Query criteria understood by every store adapter."""

from dataclasses import dataclass
from datetime import datetime

# Attribute names a caller may sort on
EVENT_SORT_FIELDS = frozenset(
    {
        "id",
        "name",
        "event_date",
        "ticket_price",
        "capacity",
        "venue_id",
        "active",
        "created_at",
        "updated_at",
    }
)

VENUE_SORT_FIELDS = frozenset(
    {
        "id",
        "name",
        "city",
        "country",
        "type",
        "max_capacity",
        "available",
        "created_at",
        "updated_at",
    }
)


@dataclass(frozen=True)
class EventFilter:
    """
    Conjunctive event criteria. A None field does not constrain the result.

    starts_from and ends_at are inclusive bounds; starts_after is exclusive.
    """

    venue_id: int | None = None
    active: bool | None = None
    starts_from: datetime | None = None
    starts_after: datetime | None = None
    ends_at: datetime | None = None


@dataclass(frozen=True)
class VenueFilter:
    """
    Conjunctive venue criteria. Text fields match case-insensitively.
    """

    city: str | None = None
    country: str | None = None
    type: str | None = None
    available: bool | None = None
    min_capacity: int | None = None
