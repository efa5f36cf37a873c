"""
Venue domain entity.
"""

from dataclasses import dataclass, fields, replace
from datetime import datetime

from src.domain.value_objects.core import UNSET, Maybe, is_set


@dataclass
class VenueEntity:
    """Domain entity for Venue"""

    id: int
    name: str
    address: str
    city: str
    max_capacity: int | None
    country: str | None = None
    type: str | None = None
    available: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def apply(self, patch: "VenuePatch") -> "VenueEntity":
        changes = {
            f.name: getattr(patch, f.name)
            for f in fields(patch)
            if is_set(getattr(patch, f.name))
        }
        return replace(self, **changes)


@dataclass(frozen=True)
class VenueDraft:
    """Data for a venue that has not been stored yet."""

    name: str
    address: str
    city: str
    max_capacity: int | None = None
    country: str | None = None
    type: str | None = None
    available: bool | None = None

    def to_entity(self, venue_id: int, now: datetime) -> VenueEntity:
        return VenueEntity(
            id=venue_id,
            name=self.name,
            address=self.address,
            city=self.city,
            country=self.country,
            max_capacity=self.max_capacity,
            type=self.type,
            available=True if self.available is None else self.available,
            created_at=now,
            updated_at=now,
        )


@dataclass(frozen=True)
class VenuePatch:
    """Partial update for a venue. Fields left UNSET are not touched."""

    name: Maybe[str] = UNSET
    address: Maybe[str] = UNSET
    city: Maybe[str] = UNSET
    country: Maybe[str | None] = UNSET
    max_capacity: Maybe[int] = UNSET
    type: Maybe[str | None] = UNSET
    available: Maybe[bool] = UNSET
