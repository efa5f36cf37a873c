"""
Event domain entity.

This represents the business concept of an event, independent of
how it's stored in the database.
"""

from dataclasses import dataclass, fields, replace
from datetime import UTC, datetime
from decimal import Decimal

from src.domain.value_objects.core import UNSET, Maybe, is_set


@dataclass
class EventEntity:
    """
    Domain entity for Event (SRP - business logic separate from persistence)

    venue_id is a weak reference: the venue is always resolved through the
    store, never held on the entity.
    """

    id: int
    name: str
    event_date: datetime | None
    ticket_price: Decimal | None
    description: str | None = None
    venue_id: int | None = None
    capacity: int | None = None
    active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def apply(self, patch: "EventPatch") -> "EventEntity":
        """Return a copy with every supplied patch field written over this one"""
        changes = {
            f.name: getattr(patch, f.name)
            for f in fields(patch)
            if is_set(getattr(patch, f.name))
        }
        return replace(self, **changes)

    def is_upcoming(self, now: datetime | None = None) -> bool:
        """An event is upcoming when its date is strictly after now"""
        if self.event_date is None:
            return False
        return self.event_date > (now or datetime.now(UTC))


@dataclass(frozen=True)
class EventDraft:
    """Data for an event that has not been stored yet."""

    name: str
    event_date: datetime | None = None
    ticket_price: Decimal | None = None
    description: str | None = None
    venue_id: int | None = None
    capacity: int | None = None
    active: bool | None = None

    def to_entity(self, event_id: int, now: datetime) -> EventEntity:
        """Build the stored form: the store assigns id and timestamps"""
        return EventEntity(
            id=event_id,
            name=self.name,
            description=self.description,
            event_date=self.event_date,
            venue_id=self.venue_id,
            capacity=self.capacity,
            ticket_price=self.ticket_price,
            active=True if self.active is None else self.active,
            created_at=now,
            updated_at=now,
        )


@dataclass(frozen=True)
class EventPatch:
    """Partial update for an event. Fields left UNSET are not touched."""

    name: Maybe[str] = UNSET
    description: Maybe[str | None] = UNSET
    event_date: Maybe[datetime] = UNSET
    venue_id: Maybe[int | None] = UNSET
    capacity: Maybe[int | None] = UNSET
    ticket_price: Maybe[Decimal] = UNSET
    active: Maybe[bool] = UNSET
