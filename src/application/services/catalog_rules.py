"""
Validation and consistency rules for events and venues.

Every check reads the store and never writes to it. Checks run in a fixed
order and the first violation is raised; later checks are not evaluated.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from src.domain.exceptions import (DuplicateResourceException,
                                   ResourceNotFoundException,
                                   ValidationException, VenueInUseException)
from src.domain.value_objects.core import is_set
from src.shared.telemetry.tracing import traced
from src.shared.utils.datetime import ensure_utc, utc_now
from src.shared.utils.text import fold_case

if TYPE_CHECKING:
    from src.application.interfaces.repositories import (IEventRepository,
                                                         IVenueRepository)
    from src.domain.entities import (EventDraft, EventEntity, EventPatch,
                                     VenueDraft, VenueEntity, VenuePatch)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class CatalogRules:
    """Decides whether a create, update or delete is admissible"""

    def __init__(
        self,
        event_repo: "IEventRepository",
        venue_repo: "IVenueRepository",
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.event_repo = event_repo
        self.venue_repo = venue_repo
        self.clock = clock

    # Events

    @traced("rules.validate_create_event")
    async def validate_create_event(self, draft: "EventDraft") -> None:
        """
        Raises:
            ValidationException: blank name, past date, capacity <= 0, negative price
            DuplicateResourceException: name already used by another event
            ResourceNotFoundException: venue_id set but no such venue
        """
        self._check_event_name(draft.name)
        await self._check_event_name_free(draft.name)
        if draft.venue_id is not None:
            await self._check_venue_exists(draft.venue_id)
        if draft.event_date is not None:
            self._check_future(draft.event_date)
        if draft.capacity is not None:
            self._check_capacity(draft.capacity)
        if draft.ticket_price is not None:
            self._check_ticket_price(draft.ticket_price)

    @traced("rules.validate_update_event")
    async def validate_update_event(self, event_id: int, patch: "EventPatch") -> "EventEntity":
        """
        Apply the create rules to every field the patch supplies.

        Renaming an event to its own name in a different case does not
        count as a collision.

        Returns:
            The stored event the patch will be applied to
        """
        existing = await self.event_repo.get_by_id(event_id)
        if existing is None:
            raise ResourceNotFoundException("Event", event_id)

        if is_set(patch.name):
            self._check_event_name(patch.name)
            if fold_case(patch.name) != fold_case(existing.name):
                await self._check_event_name_free(patch.name)
        if is_set(patch.venue_id) and patch.venue_id is not None:
            await self._check_venue_exists(patch.venue_id)
        if is_set(patch.event_date):
            if patch.event_date is None:
                raise ValidationException("Event date is required", field="event_date")
            self._check_future(patch.event_date)
        if is_set(patch.capacity) and patch.capacity is not None:
            self._check_capacity(patch.capacity)
        if is_set(patch.ticket_price):
            if patch.ticket_price is None:
                raise ValidationException("Ticket price is required", field="ticket_price")
            self._check_ticket_price(patch.ticket_price)
        if is_set(patch.active) and patch.active is None:
            raise ValidationException("Active flag cannot be null", field="active")

        return existing

    async def validate_delete_event(self, event_id: int) -> None:
        if not await self.event_repo.exists_by_id(event_id):
            raise ResourceNotFoundException("Event", event_id)

    # Venues

    @traced("rules.validate_create_venue")
    async def validate_create_venue(self, draft: "VenueDraft") -> None:
        """
        Raises:
            ValidationException: blank name/address/city, max capacity <= 0
            DuplicateResourceException: name already used by another venue
        """
        self._check_venue_name(draft.name)
        await self._check_venue_name_free(draft.name)
        self._check_not_blank(draft.address, "Address cannot be empty", "address")
        self._check_not_blank(draft.city, "City cannot be empty", "city")
        if draft.max_capacity is not None:
            self._check_max_capacity(draft.max_capacity)

    @traced("rules.validate_update_venue")
    async def validate_update_venue(self, venue_id: int, patch: "VenuePatch") -> "VenueEntity":
        existing = await self.venue_repo.get_by_id(venue_id)
        if existing is None:
            raise ResourceNotFoundException("Venue", venue_id)

        if is_set(patch.name):
            self._check_venue_name(patch.name)
            if fold_case(patch.name) != fold_case(existing.name):
                await self._check_venue_name_free(patch.name)
        if is_set(patch.address):
            self._check_not_blank(patch.address, "Address cannot be empty", "address")
        if is_set(patch.city):
            self._check_not_blank(patch.city, "City cannot be empty", "city")
        if is_set(patch.max_capacity):
            if patch.max_capacity is None:
                raise ValidationException("Max capacity is required", field="max_capacity")
            self._check_max_capacity(patch.max_capacity)
        if is_set(patch.available) and patch.available is None:
            raise ValidationException("Available flag cannot be null", field="available")

        return existing

    @traced("rules.validate_delete_venue")
    async def validate_delete_venue(self, venue_id: int) -> None:
        """
        Raises:
            ResourceNotFoundException: no such venue
            VenueInUseException: one or more events still reference the venue
        """
        if not await self.venue_repo.exists_by_id(venue_id):
            raise ResourceNotFoundException("Venue", venue_id)

        event_count = await self.event_repo.count_by_venue(venue_id)
        if event_count > 0:
            raise VenueInUseException(venue_id, event_count)

    # Single-field checks

    @staticmethod
    def _check_not_blank(value: str | None, message: str, field: str) -> None:
        if _is_blank(value):
            raise ValidationException(message, field=field)

    def _check_event_name(self, name: str | None) -> None:
        self._check_not_blank(name, "Event name cannot be empty", "name")

    def _check_venue_name(self, name: str | None) -> None:
        self._check_not_blank(name, "Venue name cannot be empty", "name")

    async def _check_event_name_free(self, name: str) -> None:
        if await self.event_repo.exists_by_name(name):
            raise DuplicateResourceException("Event", name)

    async def _check_venue_name_free(self, name: str) -> None:
        if await self.venue_repo.exists_by_name(name):
            raise DuplicateResourceException("Venue", name)

    async def _check_venue_exists(self, venue_id: int) -> None:
        if not await self.venue_repo.exists_by_id(venue_id):
            raise ResourceNotFoundException("Venue", venue_id)

    def _check_future(self, event_date: datetime) -> None:
        # Compared against the clock at evaluation time, strictly after
        if ensure_utc(event_date) <= self.clock():
            raise ValidationException("Event date must be in the future", field="event_date")

    @staticmethod
    def _check_capacity(capacity: int) -> None:
        if capacity <= 0:
            raise ValidationException("Capacity must be greater than 0", field="capacity")

    @staticmethod
    def _check_ticket_price(ticket_price: Decimal) -> None:
        if ticket_price < 0:
            raise ValidationException("Ticket price cannot be negative", field="ticket_price")

    @staticmethod
    def _check_max_capacity(max_capacity: int) -> None:
        if max_capacity <= 0:
            raise ValidationException("Max capacity must be greater than 0", field="max_capacity")
