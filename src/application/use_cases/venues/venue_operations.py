"""
Venue use cases.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from src.application.services.catalog_rules import CatalogRules
from src.application.services.paging import build_page_request
from src.domain.entities import VenuePatch
from src.domain.exceptions import (ResourceNotFoundException,
                                   ValidationException)
from src.domain.value_objects.filters import VENUE_SORT_FIELDS, VenueFilter
from src.shared.telemetry.logging import get_logger
from src.shared.telemetry.tracing import add_span_attributes, traced
from src.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from src.application.interfaces.repositories import (IEventRepository,
                                                         IVenueRepository)
    from src.domain.entities import VenueDraft, VenueEntity
    from src.domain.enums import SortDirection
    from src.domain.value_objects.pagination import Page

logger = get_logger(__name__)


def _blank_to_none(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


class VenueService:
    """Venue service following DIP - depends on abstractions, not concretions"""

    def __init__(
        self,
        venue_repo: "IVenueRepository",
        event_repo: "IEventRepository",
        rules: CatalogRules | None = None,
        clock: Callable[[], datetime] = utc_now,
        max_page_size: int = 100,
    ) -> None:
        self.venue_repo = venue_repo
        self.event_repo = event_repo
        self.clock = clock
        self.rules = rules or CatalogRules(event_repo, venue_repo, clock=clock)
        self.max_page_size = max_page_size

    @traced("venues.create")
    async def create(self, draft: "VenueDraft") -> "VenueEntity":
        """
        Create a new venue. available defaults to True when not given.

        Raises:
            ValidationException: A business rule rejected the draft
            DuplicateResourceException: The name is taken
        """
        await self.rules.validate_create_venue(draft)
        venue = await self.venue_repo.create(draft, self.clock())
        add_span_attributes(venue_id=venue.id)
        logger.info("Created venue %s (%r)", venue.id, venue.name)
        return venue

    async def get(self, venue_id: int) -> "VenueEntity":
        """
        Raises:
            ResourceNotFoundException: No venue with this ID
        """
        venue = await self.venue_repo.get_by_id(venue_id)
        if venue is None:
            raise ResourceNotFoundException("Venue", venue_id)
        return venue

    async def list_all(self) -> list["VenueEntity"]:
        return await self.venue_repo.list_all()

    @traced("venues.update")
    async def update(self, venue_id: int, patch: VenuePatch) -> "VenueEntity":
        existing = await self.rules.validate_update_venue(venue_id, patch)
        updated = await self.venue_repo.update(existing.apply(patch), self.clock())
        logger.info("Updated venue %s", venue_id)
        return updated

    @traced("venues.delete")
    async def delete(self, venue_id: int) -> None:
        """
        Raises:
            ResourceNotFoundException: No venue with this ID
            VenueInUseException: Events still reference the venue
        """
        await self.rules.validate_delete_venue(venue_id)
        if not await self.venue_repo.delete_by_id(venue_id):
            raise ResourceNotFoundException("Venue", venue_id)
        logger.info("Deleted venue %s", venue_id)

    async def mark_available(self, venue_id: int) -> "VenueEntity":
        return await self.update(venue_id, VenuePatch(available=True))

    async def mark_unavailable(self, venue_id: int) -> "VenueEntity":
        return await self.update(venue_id, VenuePatch(available=False))

    # Queries

    async def list_by_city(self, city: str | None) -> list["VenueEntity"]:
        """
        Case-insensitive city match.

        Raises:
            ValidationException: city is blank
        """
        if city is None or not city.strip():
            raise ValidationException("City cannot be empty", field="city")
        return await self.venue_repo.find(VenueFilter(city=city.strip()))

    async def list_by_available(self, available: bool | None) -> list["VenueEntity"]:
        if available is None:
            raise ValidationException("Available status cannot be null", field="available")
        return await self.venue_repo.find(VenueFilter(available=available))

    async def list_available(self) -> list["VenueEntity"]:
        return await self.list_by_available(True)

    async def list_by_min_capacity(self, min_capacity: int) -> list["VenueEntity"]:
        """Venues whose max capacity is at least min_capacity"""
        if min_capacity <= 0:
            raise ValidationException("Minimum capacity must be greater than 0", field="minCapacity")
        return await self.venue_repo.find(VenueFilter(min_capacity=min_capacity))

    async def count_events(self, venue_id: int) -> int:
        """
        Raises:
            ResourceNotFoundException: No venue with this ID
        """
        if not await self.venue_repo.exists_by_id(venue_id):
            raise ResourceNotFoundException("Venue", venue_id)
        return await self.event_repo.count_by_venue(venue_id)

    async def search(
        self,
        *,
        city: str | None = None,
        country: str | None = None,
        type: str | None = None,
        available: bool | None = None,
        min_capacity: int | None = None,
        page: int = 0,
        size: int = 10,
        sort_by: str = "name",
        direction: "str | SortDirection | None" = "asc",
    ) -> "Page[VenueEntity]":
        """Page through venues matching every filter that is set; blank text filters are ignored"""
        request = build_page_request(
            page, size, sort_by, direction, sortable=VENUE_SORT_FIELDS, max_size=self.max_page_size
        )
        if min_capacity is not None and min_capacity <= 0:
            raise ValidationException("Minimum capacity must be greater than 0", field="minCapacity")
        criteria = VenueFilter(
            city=_blank_to_none(city),
            country=_blank_to_none(country),
            type=_blank_to_none(type),
            available=available,
            min_capacity=min_capacity,
        )
        return await self.venue_repo.search(criteria, request)

    async def paginate(
        self,
        page: int = 0,
        size: int = 10,
        sort_by: str = "id",
        direction: "str | SortDirection | None" = "asc",
    ) -> "Page[VenueEntity]":
        request = build_page_request(
            page, size, sort_by, direction, sortable=VENUE_SORT_FIELDS, max_size=self.max_page_size
        )
        return await self.venue_repo.search(VenueFilter(), request)
