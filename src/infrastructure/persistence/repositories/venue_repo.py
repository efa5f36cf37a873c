from datetime import datetime

from sqlalchemy import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import VenueDraft, VenueEntity
from src.domain.exceptions import ResourceNotFoundException
from src.domain.value_objects.filters import VenueFilter
from src.infrastructure.persistence.models.venue import Venue
from src.infrastructure.persistence.repositories.base import BaseRepository
from src.shared.utils.datetime import ensure_utc
from src.shared.utils.text import fold_case


class VenueRepository(BaseRepository[Venue, VenueEntity, VenueFilter]):
    resource_type = "Venue"

    def __init__(self, db: AsyncSession):
        super().__init__(db, Venue)

    def _to_entity(self, obj: Venue) -> VenueEntity:
        return VenueEntity(
            id=obj.id,
            name=obj.name,
            address=obj.address,
            city=obj.city,
            country=obj.country,
            max_capacity=obj.max_capacity,
            type=obj.type,
            available=obj.available,
            created_at=ensure_utc(obj.created_at),
            updated_at=ensure_utc(obj.updated_at),
        )

    def _conditions(self, criteria: VenueFilter) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = []
        if criteria.city is not None:
            conditions.append(Venue.city_key == fold_case(criteria.city))
        if criteria.country is not None:
            conditions.append(Venue.country_key == fold_case(criteria.country))
        if criteria.type is not None:
            conditions.append(Venue.type_key == fold_case(criteria.type))
        if criteria.available is not None:
            conditions.append(Venue.available == criteria.available)
        if criteria.min_capacity is not None:
            conditions.append(Venue.max_capacity >= criteria.min_capacity)
        return conditions

    async def create(self, draft: VenueDraft, now: datetime) -> VenueEntity:
        entity = draft.to_entity(0, now)
        venue = Venue(
            name=entity.name,
            name_key=fold_case(entity.name),
            address=entity.address,
            city=entity.city,
            city_key=fold_case(entity.city),
            country=entity.country,
            country_key=fold_case(entity.country),
            max_capacity=entity.max_capacity,
            type=entity.type,
            type_key=fold_case(entity.type),
            available=entity.available,
            created_at=now,
            updated_at=now,
        )
        return await self._insert(venue, entity.name)

    async def update(self, venue: VenueEntity, now: datetime) -> VenueEntity:
        obj = await self._get_model(venue.id)
        if obj is None:
            raise ResourceNotFoundException("Venue", venue.id)

        obj.name = venue.name
        obj.name_key = fold_case(venue.name)
        obj.address = venue.address
        obj.city = venue.city
        obj.city_key = fold_case(venue.city)
        obj.country = venue.country
        obj.country_key = fold_case(venue.country)
        obj.max_capacity = venue.max_capacity
        obj.type = venue.type
        obj.type_key = fold_case(venue.type)
        obj.available = venue.available
        obj.updated_at = now
        return await self._flush_update(obj, venue.name)
