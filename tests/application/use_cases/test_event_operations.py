from datetime import timedelta
from decimal import Decimal

import pytest

from src.application.use_cases.events.event_operations import EventService
from src.domain.entities import EventDraft, EventPatch, VenueDraft
from src.domain.enums import SortDirection
from src.domain.exceptions import (DuplicateResourceException,
                                   ResourceNotFoundException,
                                   ValidationException)


@pytest.fixture
def event_service(store, clock) -> EventService:
    return EventService(store.events, store.venues, clock=clock, max_page_size=50)


@pytest.fixture
async def venue(store, clock):
    return await store.venues.create(
        VenueDraft(name="Main Hall", address="1 Festival Street", city="Bogota", max_capacity=500),
        clock(),
    )


def draft(clock, name: str, days: int = 1, **overrides) -> EventDraft:
    return EventDraft(
        name=name,
        event_date=clock() + timedelta(days=days),
        ticket_price=overrides.pop("ticket_price", Decimal("25.00")),
        **overrides,
    )


class TestEventLifecycle:
    async def test_create_then_get_round_trips(self, event_service, clock, venue):
        created = await event_service.create(
            draft(clock, "Gala", description="Annual", venue_id=venue.id, capacity=100)
        )

        fetched = await event_service.get(created.id)

        assert fetched == created
        assert fetched.id > 0
        assert fetched.active is True
        assert fetched.ticket_price == Decimal("25.00")
        assert fetched.event_date == clock() + timedelta(days=1)
        assert fetched.created_at == fetched.updated_at == clock()

    async def test_duplicate_name_rejected(self, event_service, clock):
        await event_service.create(draft(clock, "Gala"))

        with pytest.raises(DuplicateResourceException):
            await event_service.create(draft(clock, "gala"))

    async def test_get_missing_event(self, event_service):
        with pytest.raises(ResourceNotFoundException, match="Event with ID 12 not found"):
            await event_service.get(12)

    async def test_update_with_unchanged_values_bumps_updated_at(self, event_service, clock):
        created = await event_service.create(draft(clock, "Gala", days=10, capacity=80))
        later = clock.advance(hours=1)

        updated = await event_service.update(
            created.id,
            EventPatch(name="Gala", event_date=created.event_date, capacity=80),
        )

        assert updated.name == created.name
        assert updated.event_date == created.event_date
        assert updated.capacity == 80
        assert updated.created_at == created.created_at
        assert updated.updated_at == later

    async def test_update_leaves_unsupplied_fields(self, event_service, clock, venue):
        created = await event_service.create(draft(clock, "Gala", venue_id=venue.id))

        updated = await event_service.update(created.id, EventPatch(active=False))

        assert updated.active is False
        assert updated.venue_id == venue.id
        assert updated.ticket_price == created.ticket_price

    async def test_delete_then_get_is_not_found(self, event_service, clock):
        created = await event_service.create(draft(clock, "Gala"))

        await event_service.delete(created.id)

        with pytest.raises(ResourceNotFoundException):
            await event_service.get(created.id)
        with pytest.raises(ResourceNotFoundException):
            await event_service.delete(created.id)


class TestEventQueries:
    async def test_list_by_venue_requires_venue(self, event_service):
        with pytest.raises(ResourceNotFoundException, match="Venue with ID 77 not found"):
            await event_service.list_by_venue(77)

    async def test_list_by_venue(self, event_service, clock, venue):
        at_venue = await event_service.create(draft(clock, "Gala", venue_id=venue.id))
        await event_service.create(draft(clock, "Street Fair"))

        events = await event_service.list_by_venue(venue.id)

        assert [event.id for event in events] == [at_venue.id]

    async def test_list_active(self, event_service, clock):
        active = await event_service.create(draft(clock, "Gala"))
        await event_service.create(draft(clock, "Closed Rehearsal", active=False))

        assert [event.id for event in await event_service.list_active()] == [active.id]

    async def test_list_upcoming_is_strictly_after_now(self, event_service, clock):
        soon = await event_service.create(draft(clock, "Soon", days=1))
        later = await event_service.create(draft(clock, "Later", days=5))

        clock.advance(days=1)

        assert [event.id for event in await event_service.list_upcoming()] == [later.id]
        assert soon.id != later.id

    async def test_list_between_is_inclusive(self, event_service, clock):
        first = await event_service.create(draft(clock, "First", days=1))
        second = await event_service.create(draft(clock, "Second", days=2))
        await event_service.create(draft(clock, "Third", days=3))

        events = await event_service.list_between(first.event_date, second.event_date)

        assert [event.id for event in events] == [first.id, second.id]

    async def test_list_between_rejects_reversed_range(self, event_service, clock):
        with pytest.raises(ValidationException, match="Start date must not be after end date"):
            await event_service.list_between(clock() + timedelta(days=2), clock())

    async def test_search_combines_filters(self, event_service, clock, venue):
        await event_service.create(draft(clock, "Early", days=1, venue_id=venue.id))
        match = await event_service.create(draft(clock, "Late", days=5, venue_id=venue.id))
        await event_service.create(draft(clock, "Late Inactive", days=6, venue_id=venue.id, active=False))
        await event_service.create(draft(clock, "Elsewhere", days=7))

        page = await event_service.search(
            venue_id=venue.id, active=True, start_date=clock() + timedelta(days=5)
        )

        assert [event.id for event in page.items] == [match.id]
        assert page.total_elements == 1

    async def test_paginate_sorts_and_counts(self, event_service, clock):
        for index, price in enumerate(["30.00", "10.00", "20.00"]):
            await event_service.create(draft(clock, f"Show {index}", ticket_price=Decimal(price)))

        page = await event_service.paginate(page=0, size=2, sort_by="ticketPrice", direction="desc")

        assert [event.ticket_price for event in page.items] == [Decimal("30.00"), Decimal("20.00")]
        assert page.total_elements == 3
        assert page.total_pages == 2
        assert page.sort_by == "ticket_price"
        assert page.direction == SortDirection.DESC

    async def test_paginate_ties_are_broken_by_id(self, event_service, clock):
        created = [
            await event_service.create(draft(clock, f"Show {index}", ticket_price=Decimal("5.00")))
            for index in range(4)
        ]

        first = await event_service.paginate(page=0, size=2, sort_by="ticketPrice")
        second = await event_service.paginate(page=1, size=2, sort_by="ticketPrice")

        assert [event.id for event in first.items + second.items] == [event.id for event in created]

    async def test_paginate_active_and_upcoming(self, event_service, clock):
        await event_service.create(draft(clock, "Bravo", days=2))
        await event_service.create(draft(clock, "Alpha", days=3))
        await event_service.create(draft(clock, "Charlie", days=1, active=False))

        active = await event_service.paginate_active()
        clock.advance(days=1, hours=12)
        upcoming = await event_service.paginate_upcoming()

        assert [event.name for event in active.items] == ["Alpha", "Bravo"]
        assert [event.name for event in upcoming.items] == ["Bravo", "Alpha"]

    async def test_page_size_above_limit_rejected(self, event_service):
        with pytest.raises(ValidationException, match="between 1 and 50"):
            await event_service.paginate(size=51)

    async def test_unknown_sort_field_rejected(self, event_service):
        with pytest.raises(ValidationException, match="Cannot sort by"):
            await event_service.paginate(sort_by="secret")
