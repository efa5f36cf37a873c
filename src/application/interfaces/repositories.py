"""
Repository interfaces (ports) for the catalog store.

Every adapter (SQLAlchemy, in-memory) implements these protocols and
returns domain entities. Adapters enforce name uniqueness and the
event -> venue reference themselves, raising DuplicateResourceException
or StoreConflictException, so a rule check that races a concurrent
writer cannot leave the store inconsistent.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from src.domain.entities import (EventDraft, EventEntity, VenueDraft,
                                     VenueEntity)
    from src.domain.value_objects import (EventFilter, Page, PageRequest,
                                          VenueFilter)


class IEventRepository(Protocol):
    """Protocol for event repository (DIP)"""

    async def get_by_id(self, event_id: int) -> EventEntity | None:
        """Get event by ID"""
        ...

    async def exists_by_id(self, event_id: int) -> bool:
        """Check whether an event with this ID exists"""
        ...

    async def exists_by_name(self, name: str) -> bool:
        """Check whether an event name is taken (case-insensitive)"""
        ...

    async def create(self, draft: EventDraft, now: datetime) -> EventEntity:
        """Store a new event, assigning id and timestamps"""
        ...

    async def update(self, event: EventEntity, now: datetime) -> EventEntity:
        """Overwrite a stored event and bump updated_at"""
        ...

    async def delete_by_id(self, event_id: int) -> bool:
        """Delete an event, returning False if it did not exist"""
        ...

    async def list_all(self) -> list[EventEntity]:
        """All events in store order"""
        ...

    async def find(self, criteria: EventFilter) -> list[EventEntity]:
        """Events matching every set criterion, in store order"""
        ...

    async def search(self, criteria: EventFilter, page: PageRequest) -> Page[EventEntity]:
        """One sorted page of events matching the criteria"""
        ...

    async def count_by_venue(self, venue_id: int) -> int:
        """Number of events referencing a venue"""
        ...


class IVenueRepository(Protocol):
    """Protocol for venue repository (DIP)"""

    async def get_by_id(self, venue_id: int) -> VenueEntity | None:
        """Get venue by ID"""
        ...

    async def exists_by_id(self, venue_id: int) -> bool:
        """Check whether a venue with this ID exists"""
        ...

    async def exists_by_name(self, name: str) -> bool:
        """Check whether a venue name is taken (case-insensitive)"""
        ...

    async def create(self, draft: VenueDraft, now: datetime) -> VenueEntity:
        """Store a new venue, assigning id and timestamps"""
        ...

    async def update(self, venue: VenueEntity, now: datetime) -> VenueEntity:
        """Overwrite a stored venue and bump updated_at"""
        ...

    async def delete_by_id(self, venue_id: int) -> bool:
        """Delete a venue, returning False if it did not exist"""
        ...

    async def list_all(self) -> list[VenueEntity]:
        """All venues in store order"""
        ...

    async def find(self, criteria: VenueFilter) -> list[VenueEntity]:
        """Venues matching every set criterion, in store order"""
        ...

    async def search(self, criteria: VenueFilter, page: PageRequest) -> Page[VenueEntity]:
        """One sorted page of venues matching the criteria"""
        ...


class ICatalogStore(Protocol):
    """Both repositories of one store backend, sharing one unit of work"""

    events: IEventRepository
    venues: IVenueRepository

    async def ping(self) -> bool:
        """Check the backend is reachable"""
        ...
