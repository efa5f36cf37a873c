"""
Event use cases.

Each mutation is a straight line: run the catalog rules, then make one
store call. Queries go to the store directly and only check that their
input is well formed.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING

from src.application.services.catalog_rules import CatalogRules
from src.application.services.paging import build_page_request
from src.domain.exceptions import (ResourceNotFoundException,
                                   ValidationException)
from src.domain.value_objects.filters import EVENT_SORT_FIELDS, EventFilter
from src.shared.telemetry.logging import get_logger
from src.shared.telemetry.tracing import add_span_attributes, traced
from src.shared.utils.datetime import ensure_utc, utc_now

if TYPE_CHECKING:
    from src.application.interfaces.repositories import (IEventRepository,
                                                         IVenueRepository)
    from src.domain.entities import EventDraft, EventEntity, EventPatch
    from src.domain.enums import SortDirection
    from src.domain.value_objects.pagination import Page

logger = get_logger(__name__)


class EventService:
    """Event service following DIP - depends on abstractions, not concretions"""

    def __init__(
        self,
        event_repo: "IEventRepository",
        venue_repo: "IVenueRepository",
        rules: CatalogRules | None = None,
        clock: Callable[[], datetime] = utc_now,
        max_page_size: int = 100,
    ) -> None:
        self.event_repo = event_repo
        self.venue_repo = venue_repo
        self.clock = clock
        self.rules = rules or CatalogRules(event_repo, venue_repo, clock=clock)
        self.max_page_size = max_page_size

    @traced("events.create")
    async def create(self, draft: "EventDraft") -> "EventEntity":
        """
        Create a new event.

        Returns:
            The stored event with id and timestamps assigned

        Raises:
            ValidationException: A business rule rejected the draft
            DuplicateResourceException: The name is taken
            ResourceNotFoundException: The referenced venue does not exist
        """
        await self.rules.validate_create_event(draft)

        if draft.event_date is not None:
            draft = replace(draft, event_date=ensure_utc(draft.event_date))

        event = await self.event_repo.create(draft, self.clock())
        add_span_attributes(event_id=event.id)
        logger.info("Created event %s (%r)", event.id, event.name)
        return event

    async def get(self, event_id: int) -> "EventEntity":
        """
        Raises:
            ResourceNotFoundException: No event with this ID
        """
        event = await self.event_repo.get_by_id(event_id)
        if event is None:
            raise ResourceNotFoundException("Event", event_id)
        return event

    async def list_all(self) -> list["EventEntity"]:
        return await self.event_repo.list_all()

    @traced("events.update")
    async def update(self, event_id: int, patch: "EventPatch") -> "EventEntity":
        """
        Merge the supplied fields into the stored event.

        Fields the patch leaves UNSET keep their stored value; updated_at
        is bumped even when nothing else changes.
        """
        existing = await self.rules.validate_update_event(event_id, patch)

        merged = existing.apply(patch)
        if merged.event_date is not None:
            merged.event_date = ensure_utc(merged.event_date)

        updated = await self.event_repo.update(merged, self.clock())
        logger.info("Updated event %s", event_id)
        return updated

    @traced("events.delete")
    async def delete(self, event_id: int) -> None:
        """
        Raises:
            ResourceNotFoundException: No event with this ID
        """
        await self.rules.validate_delete_event(event_id)
        if not await self.event_repo.delete_by_id(event_id):
            # Removed by someone else between the check and the delete
            raise ResourceNotFoundException("Event", event_id)
        logger.info("Deleted event %s", event_id)

    # Queries

    async def list_by_venue(self, venue_id: int) -> list["EventEntity"]:
        """
        Raises:
            ResourceNotFoundException: No venue with this ID
        """
        if not await self.venue_repo.exists_by_id(venue_id):
            raise ResourceNotFoundException("Venue", venue_id)
        return await self.event_repo.find(EventFilter(venue_id=venue_id))

    async def list_active(self) -> list["EventEntity"]:
        return await self.event_repo.find(EventFilter(active=True))

    async def list_upcoming(self) -> list["EventEntity"]:
        """Events dated strictly after now"""
        return await self.event_repo.find(EventFilter(starts_after=self.clock()))

    async def list_between(self, start: datetime, end: datetime) -> list["EventEntity"]:
        """
        Events whose date falls in [start, end].

        Raises:
            ValidationException: start is after end
        """
        start, end = ensure_utc(start), ensure_utc(end)
        if start > end:
            raise ValidationException("Start date must not be after end date", field="startDate")
        return await self.event_repo.find(EventFilter(starts_from=start, ends_at=end))

    async def count_by_venue(self, venue_id: int) -> int:
        return await self.event_repo.count_by_venue(venue_id)

    async def search(
        self,
        *,
        venue_id: int | None = None,
        active: bool | None = None,
        start_date: datetime | None = None,
        page: int = 0,
        size: int = 10,
        sort_by: str = "eventDate",
        direction: "str | SortDirection | None" = "asc",
    ) -> "Page[EventEntity]":
        """
        Page through events matching every filter that is set.

        start_date is an inclusive lower bound on the event date.
        """
        request = build_page_request(
            page, size, sort_by, direction, sortable=EVENT_SORT_FIELDS, max_size=self.max_page_size
        )
        criteria = EventFilter(
            venue_id=venue_id,
            active=active,
            starts_from=ensure_utc(start_date) if start_date else None,
        )
        return await self.event_repo.search(criteria, request)

    async def paginate(
        self,
        page: int = 0,
        size: int = 10,
        sort_by: str = "id",
        direction: "str | SortDirection | None" = "asc",
    ) -> "Page[EventEntity]":
        request = build_page_request(
            page, size, sort_by, direction, sortable=EVENT_SORT_FIELDS, max_size=self.max_page_size
        )
        return await self.event_repo.search(EventFilter(), request)

    async def paginate_active(
        self,
        page: int = 0,
        size: int = 10,
        sort_by: str = "name",
        direction: "str | SortDirection | None" = "asc",
    ) -> "Page[EventEntity]":
        request = build_page_request(
            page, size, sort_by, direction, sortable=EVENT_SORT_FIELDS, max_size=self.max_page_size
        )
        return await self.event_repo.search(EventFilter(active=True), request)

    async def paginate_upcoming(
        self,
        page: int = 0,
        size: int = 10,
        sort_by: str = "eventDate",
        direction: "str | SortDirection | None" = "asc",
    ) -> "Page[EventEntity]":
        request = build_page_request(
            page, size, sort_by, direction, sortable=EVENT_SORT_FIELDS, max_size=self.max_page_size
        )
        return await self.event_repo.search(EventFilter(starts_after=self.clock()), request)
