"""Test the SQL event and venue repositories"""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest

from src.domain.entities import EventDraft, VenueDraft
from src.domain.exceptions import (DuplicateResourceException,
                                   ResourceNotFoundException)
from src.domain.enums import SortDirection
from src.domain.value_objects import EventFilter, PageRequest
from src.infrastructure.exceptions import StoreConflictException
from src.infrastructure.persistence.store import SqlCatalogStore

NOW = datetime(2030, 1, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def event_repo(sql_store):
    """Event repository fixture"""
    return sql_store.events


@pytest.fixture
def venue_repo(sql_store):
    return sql_store.venues


@pytest.fixture
async def venue(venue_repo):
    return await venue_repo.create(
        VenueDraft(name="Main Hall", address="1 Festival Street", city="Bogota", max_capacity=500),
        NOW,
    )


def event_draft(name: str, **overrides) -> EventDraft:
    values = {"event_date": NOW + timedelta(days=7), "ticket_price": Decimal("19.99")}
    values.update(overrides)
    return EventDraft(name=name, **values)


@pytest.mark.asyncio
async def test_create_assigns_id_and_timestamps(event_repo, venue):
    event = await event_repo.create(event_draft("Gala", venue_id=venue.id, capacity=50), NOW)

    assert event.id is not None
    assert event.created_at == NOW
    assert event.updated_at == NOW
    assert event.active is True


@pytest.mark.asyncio
async def test_values_survive_a_fresh_session(event_repo, test_db, session_factory, venue):
    """Dates come back timezone-aware UTC and prices keep two decimals"""
    created = await event_repo.create(
        event_draft("Gala", venue_id=venue.id, event_date=datetime(2030, 3, 1, 20, 30, tzinfo=UTC)),
        NOW,
    )
    await test_db.commit()

    async with session_factory() as session:
        loaded = await SqlCatalogStore(session).events.get_by_id(created.id)

    assert loaded is not None
    assert loaded.event_date == datetime(2030, 3, 1, 20, 30, tzinfo=UTC)
    assert loaded.event_date.tzinfo is not None
    assert loaded.ticket_price == Decimal("19.99")
    assert loaded.venue_id == venue.id


@pytest.mark.asyncio
async def test_exists_by_name_ignores_case(event_repo):
    await event_repo.create(event_draft("Winter Gala"), NOW)

    assert await event_repo.exists_by_name("WINTER gala")
    assert not await event_repo.exists_by_name("Summer Gala")


@pytest.mark.asyncio
async def test_unique_index_rejects_same_name_in_other_case(event_repo):
    """The store closes the race even when the rule check is skipped"""
    await event_repo.create(event_draft("Gala"), NOW)

    with pytest.raises(DuplicateResourceException):
        await event_repo.create(event_draft("GALA"), NOW)


@pytest.mark.asyncio
async def test_foreign_key_rejects_unknown_venue(event_repo):
    with pytest.raises(StoreConflictException):
        await event_repo.create(event_draft("Gala", venue_id=999), NOW)


@pytest.mark.asyncio
async def test_venue_with_events_cannot_be_deleted(event_repo, venue_repo, venue):
    await event_repo.create(event_draft("Gala", venue_id=venue.id), NOW)

    with pytest.raises(StoreConflictException):
        await venue_repo.delete_by_id(venue.id)


@pytest.mark.asyncio
async def test_update_bumps_updated_at(event_repo):
    event = await event_repo.create(event_draft("Gala"), NOW)
    later = NOW + timedelta(hours=2)

    updated = await event_repo.update(event, later)

    assert updated.updated_at == later
    assert updated.created_at == NOW


@pytest.mark.asyncio
async def test_update_missing_event(event_repo):
    event = await event_repo.create(event_draft("Gala"), NOW)
    event.id = 12345

    with pytest.raises(ResourceNotFoundException):
        await event_repo.update(event, NOW)


@pytest.mark.asyncio
async def test_delete_by_id_reports_whether_a_row_went(event_repo):
    event = await event_repo.create(event_draft("Gala"), NOW)

    assert await event_repo.delete_by_id(event.id) is True
    assert await event_repo.delete_by_id(event.id) is False
    assert await event_repo.get_by_id(event.id) is None


@pytest.mark.asyncio
async def test_count_by_venue(event_repo, venue):
    for name in ("One", "Two", "Three"):
        await event_repo.create(event_draft(name, venue_id=venue.id), NOW)
    await event_repo.create(event_draft("Elsewhere"), NOW)

    assert await event_repo.count_by_venue(venue.id) == 3
    assert await event_repo.count_by_venue(venue.id + 1) == 0


@pytest.mark.asyncio
async def test_find_applies_date_bounds(event_repo):
    dates = [NOW + timedelta(days=offset) for offset in (1, 2, 3)]
    created = [
        await event_repo.create(event_draft(f"Day {index}", event_date=date), NOW)
        for index, date in enumerate(dates)
    ]

    between = await event_repo.find(EventFilter(starts_from=dates[0], ends_at=dates[1]))
    after = await event_repo.find(EventFilter(starts_after=dates[1]))

    assert [event.id for event in between] == [created[0].id, created[1].id]
    assert [event.id for event in after] == [created[2].id]


@pytest.mark.asyncio
async def test_search_pages_descending(event_repo):
    for index in range(5):
        await event_repo.create(
            event_draft(f"Show {index}", event_date=NOW + timedelta(days=index + 1)), NOW
        )

    page = await event_repo.search(
        EventFilter(), PageRequest(page=1, size=2, sort_by="event_date", direction=SortDirection.DESC)
    )

    assert [event.name for event in page.items] == ["Show 2", "Show 1"]
    assert page.total_elements == 5
    assert page.total_pages == 3
