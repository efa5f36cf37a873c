from datetime import datetime
from decimal import Decimal

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import EventDraft, EventEntity
from src.domain.exceptions import ResourceNotFoundException
from src.domain.value_objects.filters import EventFilter
from src.infrastructure.persistence.models.event import Event
from src.infrastructure.persistence.repositories.base import BaseRepository
from src.shared.utils.datetime import ensure_utc
from src.shared.utils.text import fold_case


class EventRepository(BaseRepository[Event, EventEntity, EventFilter]):
    resource_type = "Event"

    def __init__(self, db: AsyncSession):
        super().__init__(db, Event)

    def _to_entity(self, obj: Event) -> EventEntity:
        return EventEntity(
            id=obj.id,
            name=obj.name,
            description=obj.description,
            event_date=ensure_utc(obj.event_date),
            ticket_price=Decimal(obj.ticket_price),
            venue_id=obj.venue_id,
            capacity=obj.capacity,
            active=obj.active,
            created_at=ensure_utc(obj.created_at),
            updated_at=ensure_utc(obj.updated_at),
        )

    def _conditions(self, criteria: EventFilter) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = []
        if criteria.venue_id is not None:
            conditions.append(Event.venue_id == criteria.venue_id)
        if criteria.active is not None:
            conditions.append(Event.active == criteria.active)
        if criteria.starts_from is not None:
            conditions.append(Event.event_date >= ensure_utc(criteria.starts_from))
        if criteria.starts_after is not None:
            conditions.append(Event.event_date > ensure_utc(criteria.starts_after))
        if criteria.ends_at is not None:
            conditions.append(Event.event_date <= ensure_utc(criteria.ends_at))
        return conditions

    async def create(self, draft: EventDraft, now: datetime) -> EventEntity:
        """Insert a new event; id is assigned by the database"""
        entity = draft.to_entity(0, now)
        event = Event(
            name=entity.name,
            name_key=fold_case(entity.name),
            description=entity.description,
            event_date=ensure_utc(entity.event_date) if entity.event_date else None,
            ticket_price=entity.ticket_price,
            venue_id=entity.venue_id,
            capacity=entity.capacity,
            active=entity.active,
            created_at=now,
            updated_at=now,
        )
        return await self._insert(event, entity.name)

    async def update(self, event: EventEntity, now: datetime) -> EventEntity:
        """Overwrite all mutable columns of a stored event"""
        obj = await self._get_model(event.id)
        if obj is None:
            raise ResourceNotFoundException("Event", event.id)

        obj.name = event.name
        obj.name_key = fold_case(event.name)
        obj.description = event.description
        obj.event_date = ensure_utc(event.event_date) if event.event_date else None
        obj.ticket_price = event.ticket_price
        obj.venue_id = event.venue_id
        obj.capacity = event.capacity
        obj.active = event.active
        obj.updated_at = now
        return await self._flush_update(obj, event.name)

    async def count_by_venue(self, venue_id: int) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(Event).where(Event.venue_id == venue_id)
        )
        return result.scalar_one()
