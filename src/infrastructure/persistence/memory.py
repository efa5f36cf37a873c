"""
In-memory catalog store.

Both repositories share one InMemoryCatalog and one asyncio.Lock. Every
mutation re-checks the store constraints (unique names, event -> venue
reference) while holding the lock and raises the same exceptions as the
relational store, so the two backends behave alike under concurrent
requests.
"""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from typing import Any, Generic, TypeVar

from src.domain.entities import (EventDraft, EventEntity, VenueDraft,
                                 VenueEntity)
from src.domain.exceptions import (DuplicateResourceException,
                                   ResourceNotFoundException)
from src.domain.value_objects.filters import EventFilter, VenueFilter
from src.domain.value_objects.pagination import Page, PageRequest
from src.infrastructure.exceptions import StoreConflictException
from src.shared.telemetry.logging import get_logger
from src.shared.utils.datetime import ensure_utc
from src.shared.utils.text import fold_case

logger = get_logger(__name__)

EntityType = TypeVar("EntityType", EventEntity, VenueEntity)


class InMemoryCatalog:
    """Shared state for the in-memory repositories"""

    def __init__(self) -> None:
        self.lock = asyncio.Lock()
        self.events: dict[int, EventEntity] = {}
        self.venues: dict[int, VenueEntity] = {}
        self._next_event_id = 1
        self._next_venue_id = 1

    def next_event_id(self) -> int:
        event_id = self._next_event_id
        self._next_event_id += 1
        return event_id

    def next_venue_id(self) -> int:
        venue_id = self._next_venue_id
        self._next_venue_id += 1
        return venue_id


def _sort_key(attribute: str) -> Callable[[Any], tuple]:
    # None sorts before any value, as NULLs do in SQLite
    def key(entity: Any) -> tuple:
        value = getattr(entity, attribute)
        return (value is not None, value, entity.id)

    return key


def _name_taken(entities: dict[int, EntityType], name: str, exclude_id: int | None = None) -> bool:
    key = fold_case(name)
    return any(
        fold_case(entity.name) == key
        for entity_id, entity in entities.items()
        if entity_id != exclude_id
    )


class _InMemoryRepository(ABC, Generic[EntityType]):
    def __init__(self, catalog: InMemoryCatalog):
        self.catalog = catalog

    @property
    @abstractmethod
    def _items(self) -> dict[int, EntityType]:
        """The catalog dict this repository reads and writes"""

    @abstractmethod
    def _matches(self, entity: EntityType, criteria: Any) -> bool:
        """Whether an entity satisfies every set field of a filter"""

    async def get_by_id(self, id: int) -> EntityType | None:
        entity = self._items.get(id)
        return replace(entity) if entity is not None else None

    async def exists_by_id(self, id: int) -> bool:
        return id in self._items

    async def exists_by_name(self, name: str) -> bool:
        return _name_taken(self._items, name)

    async def list_all(self) -> list[EntityType]:
        return [replace(entity) for _, entity in sorted(self._items.items())]

    async def find(self, criteria: Any) -> list[EntityType]:
        return [
            replace(entity)
            for _, entity in sorted(self._items.items())
            if self._matches(entity, criteria)
        ]

    async def search(self, criteria: Any, page: PageRequest) -> Page[EntityType]:
        matches = [entity for entity in self._items.values() if self._matches(entity, criteria)]
        matches.sort(key=_sort_key(page.sort_by), reverse=page.descending)
        window = matches[page.offset : page.offset + page.size]
        return Page.of([replace(entity) for entity in window], page, len(matches))


class InMemoryEventRepository(_InMemoryRepository[EventEntity]):
    @property
    def _items(self) -> dict[int, EventEntity]:
        return self.catalog.events

    def _matches(self, entity: EventEntity, criteria: EventFilter) -> bool:
        if criteria.venue_id is not None and entity.venue_id != criteria.venue_id:
            return False
        if criteria.active is not None and entity.active != criteria.active:
            return False
        date = entity.event_date
        if criteria.starts_from is not None and (date is None or date < ensure_utc(criteria.starts_from)):
            return False
        if criteria.starts_after is not None and not entity.is_upcoming(ensure_utc(criteria.starts_after)):
            return False
        if criteria.ends_at is not None and (date is None or date > ensure_utc(criteria.ends_at)):
            return False
        return True

    def _check_constraints(self, event: EventEntity, exclude_id: int | None = None) -> None:
        if _name_taken(self.catalog.events, event.name, exclude_id):
            raise DuplicateResourceException("Event", event.name)
        if event.venue_id is not None and event.venue_id not in self.catalog.venues:
            raise StoreConflictException(
                "Event could not be written because of a conflicting change", "event_venue_id_fkey"
            )

    async def create(self, draft: EventDraft, now: datetime) -> EventEntity:
        async with self.catalog.lock:
            event = draft.to_entity(0, now)
            self._check_constraints(event)
            event.id = self.catalog.next_event_id()
            self.catalog.events[event.id] = event
            return replace(event)

    async def update(self, event: EventEntity, now: datetime) -> EventEntity:
        async with self.catalog.lock:
            if event.id not in self.catalog.events:
                raise ResourceNotFoundException("Event", event.id)
            self._check_constraints(event, exclude_id=event.id)
            stored = replace(event, updated_at=now)
            self.catalog.events[event.id] = stored
            return replace(stored)

    async def delete_by_id(self, id: int) -> bool:
        async with self.catalog.lock:
            return self.catalog.events.pop(id, None) is not None

    async def count_by_venue(self, venue_id: int) -> int:
        return sum(1 for event in self.catalog.events.values() if event.venue_id == venue_id)


class InMemoryVenueRepository(_InMemoryRepository[VenueEntity]):
    @property
    def _items(self) -> dict[int, VenueEntity]:
        return self.catalog.venues

    def _matches(self, entity: VenueEntity, criteria: VenueFilter) -> bool:
        for attribute in ("city", "country", "type"):
            wanted = getattr(criteria, attribute)
            actual = getattr(entity, attribute)
            if wanted is not None and fold_case(actual) != fold_case(wanted):
                return False
        if criteria.available is not None and entity.available != criteria.available:
            return False
        if criteria.min_capacity is not None and (
            entity.max_capacity is None or entity.max_capacity < criteria.min_capacity
        ):
            return False
        return True

    async def create(self, draft: VenueDraft, now: datetime) -> VenueEntity:
        async with self.catalog.lock:
            if _name_taken(self.catalog.venues, draft.name):
                raise DuplicateResourceException("Venue", draft.name)
            venue = draft.to_entity(self.catalog.next_venue_id(), now)
            self.catalog.venues[venue.id] = venue
            return replace(venue)

    async def update(self, venue: VenueEntity, now: datetime) -> VenueEntity:
        async with self.catalog.lock:
            if venue.id not in self.catalog.venues:
                raise ResourceNotFoundException("Venue", venue.id)
            if _name_taken(self.catalog.venues, venue.name, exclude_id=venue.id):
                raise DuplicateResourceException("Venue", venue.name)
            stored = replace(venue, updated_at=now)
            self.catalog.venues[venue.id] = stored
            return replace(stored)

    async def delete_by_id(self, id: int) -> bool:
        async with self.catalog.lock:
            if id not in self.catalog.venues:
                return False
            if any(event.venue_id == id for event in self.catalog.events.values()):
                logger.warning("Refusing to delete venue %s with dependent events", id)
                raise StoreConflictException(
                    "Venue could not be written because of a conflicting change", "event_venue_id_fkey"
                )
            del self.catalog.venues[id]
            return True


class InMemoryCatalogStore:
    """Catalog store backed by process memory; state lives as long as the catalog"""

    def __init__(self, catalog: InMemoryCatalog):
        self.catalog = catalog
        self.events = InMemoryEventRepository(catalog)
        self.venues = InMemoryVenueRepository(catalog)

    async def ping(self) -> bool:
        return True
