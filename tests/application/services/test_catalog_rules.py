from datetime import timedelta
from decimal import Decimal

import pytest

from src.application.services.catalog_rules import CatalogRules
from src.domain.entities import EventDraft, EventPatch, VenueDraft, VenuePatch
from src.domain.exceptions import (DuplicateResourceException,
                                   ResourceNotFoundException,
                                   ValidationException, VenueInUseException)


@pytest.fixture
def rules(store, clock) -> CatalogRules:
    return CatalogRules(store.events, store.venues, clock=clock)


@pytest.fixture
async def venue(store, clock):
    return await store.venues.create(
        VenueDraft(name="Main Hall", address="1 Festival Street", city="Bogota", max_capacity=500),
        clock(),
    )


@pytest.fixture
async def gala(store, clock, venue):
    return await store.events.create(
        EventDraft(
            name="Gala",
            event_date=clock() + timedelta(days=10),
            ticket_price=Decimal("50.00"),
            venue_id=venue.id,
        ),
        clock(),
    )


def event_draft(clock, **overrides) -> EventDraft:
    values = {
        "name": "Jazz Night",
        "event_date": clock() + timedelta(days=1),
        "ticket_price": Decimal("10.00"),
    }
    values.update(overrides)
    return EventDraft(**values)


class TestValidateCreateEvent:
    async def test_valid_draft_passes(self, rules, clock, venue):
        await rules.validate_create_event(event_draft(clock, venue_id=venue.id, capacity=100))

    @pytest.mark.parametrize("name", ["", "   ", None])
    async def test_blank_name_rejected(self, rules, clock, name):
        with pytest.raises(ValidationException, match="Event name cannot be empty"):
            await rules.validate_create_event(event_draft(clock, name=name))

    async def test_duplicate_name_ignores_case(self, rules, clock, gala):
        with pytest.raises(DuplicateResourceException) as exc_info:
            await rules.validate_create_event(event_draft(clock, name="gALA"))

        assert exc_info.value.message == "Event with name 'gALA' already exists"

    async def test_missing_venue_is_not_found(self, rules, clock):
        with pytest.raises(ResourceNotFoundException, match="Venue with ID 999 not found"):
            await rules.validate_create_event(event_draft(clock, venue_id=999))

    async def test_date_equal_to_now_rejected(self, rules, clock):
        with pytest.raises(ValidationException, match="Event date must be in the future"):
            await rules.validate_create_event(event_draft(clock, event_date=clock()))

    async def test_date_just_after_now_accepted(self, rules, clock):
        await rules.validate_create_event(
            event_draft(clock, event_date=clock() + timedelta(microseconds=1))
        )

    async def test_naive_date_is_read_as_utc(self, rules, clock):
        naive_past = (clock() - timedelta(minutes=1)).replace(tzinfo=None)
        with pytest.raises(ValidationException):
            await rules.validate_create_event(event_draft(clock, event_date=naive_past))

    async def test_capacity_boundary(self, rules, clock):
        with pytest.raises(ValidationException, match="Capacity must be greater than 0"):
            await rules.validate_create_event(event_draft(clock, capacity=0))
        await rules.validate_create_event(event_draft(clock, capacity=1))

    async def test_ticket_price_boundary(self, rules, clock):
        await rules.validate_create_event(event_draft(clock, ticket_price=Decimal("0")))
        with pytest.raises(ValidationException, match="Ticket price cannot be negative"):
            await rules.validate_create_event(event_draft(clock, ticket_price=Decimal("-0.01")))

    async def test_first_violation_wins(self, rules, clock, gala):
        """A duplicate name is reported before the past date and the bad capacity"""
        draft = event_draft(clock, name="GALA", event_date=clock() - timedelta(days=1), capacity=0)

        with pytest.raises(DuplicateResourceException):
            await rules.validate_create_event(draft)

    async def test_venue_checked_before_date(self, rules, clock):
        draft = event_draft(clock, venue_id=42, event_date=clock() - timedelta(days=1))

        with pytest.raises(ResourceNotFoundException):
            await rules.validate_create_event(draft)


class TestValidateUpdateEvent:
    async def test_returns_existing_event(self, rules, gala):
        existing = await rules.validate_update_event(gala.id, EventPatch())
        assert existing.id == gala.id
        assert existing.name == "Gala"

    async def test_missing_event_is_not_found(self, rules):
        with pytest.raises(ResourceNotFoundException, match="Event with ID 404 not found"):
            await rules.validate_update_event(404, EventPatch(name="Anything"))

    async def test_renaming_to_own_name_in_other_case_is_allowed(self, rules, gala):
        await rules.validate_update_event(gala.id, EventPatch(name="GALA"))

    async def test_renaming_to_another_events_name_is_rejected(self, rules, store, clock, gala):
        other = await store.events.create(event_draft(clock, name="Jazz Night"), clock())

        with pytest.raises(DuplicateResourceException):
            await rules.validate_update_event(other.id, EventPatch(name="gala"))

    async def test_supplied_fields_are_checked(self, rules, clock, gala):
        with pytest.raises(ValidationException, match="Event date must be in the future"):
            await rules.validate_update_event(gala.id, EventPatch(event_date=clock()))
        with pytest.raises(ValidationException, match="Capacity must be greater than 0"):
            await rules.validate_update_event(gala.id, EventPatch(capacity=0))
        with pytest.raises(ResourceNotFoundException):
            await rules.validate_update_event(gala.id, EventPatch(venue_id=999))

    async def test_required_fields_cannot_be_cleared(self, rules, gala):
        with pytest.raises(ValidationException):
            await rules.validate_update_event(gala.id, EventPatch(ticket_price=None))
        with pytest.raises(ValidationException):
            await rules.validate_update_event(gala.id, EventPatch(event_date=None))

    async def test_unset_fields_are_not_checked(self, rules, store, clock, gala):
        # The stored date is in the past by now, but the patch does not touch it
        clock.advance(days=30)
        await rules.validate_update_event(gala.id, EventPatch(description="Black tie"))


class TestVenueRules:
    async def test_valid_venue_passes(self, rules):
        await rules.validate_create_venue(
            VenueDraft(name="Arena", address="2 Stadium Road", city="Cali", max_capacity=1)
        )

    async def test_checks_run_in_order(self, rules, venue):
        with pytest.raises(ValidationException, match="Venue name cannot be empty"):
            await rules.validate_create_venue(VenueDraft(name=" ", address="", city="", max_capacity=0))
        with pytest.raises(DuplicateResourceException):
            await rules.validate_create_venue(
                VenueDraft(name="main hall", address="", city="", max_capacity=0)
            )
        with pytest.raises(ValidationException, match="Address cannot be empty"):
            await rules.validate_create_venue(VenueDraft(name="Arena", address="", city="", max_capacity=0))
        with pytest.raises(ValidationException, match="City cannot be empty"):
            await rules.validate_create_venue(
                VenueDraft(name="Arena", address="2 Road", city=" ", max_capacity=0)
            )
        with pytest.raises(ValidationException, match="Max capacity must be greater than 0"):
            await rules.validate_create_venue(
                VenueDraft(name="Arena", address="2 Road", city="Cali", max_capacity=0)
            )

    async def test_update_self_collision_is_allowed(self, rules, venue):
        await rules.validate_update_venue(venue.id, VenuePatch(name="MAIN HALL"))

    async def test_update_missing_venue(self, rules):
        with pytest.raises(ResourceNotFoundException, match="Venue with ID 5 not found"):
            await rules.validate_update_venue(5, VenuePatch(available=False))


class TestValidateDelete:
    async def test_delete_missing_event(self, rules):
        with pytest.raises(ResourceNotFoundException):
            await rules.validate_delete_event(1)

    async def test_delete_missing_venue(self, rules):
        with pytest.raises(ResourceNotFoundException):
            await rules.validate_delete_venue(1)

    async def test_delete_venue_with_events_cites_count(self, rules, store, clock, venue, gala):
        await store.events.create(event_draft(clock, venue_id=venue.id), clock())

        with pytest.raises(VenueInUseException) as exc_info:
            await rules.validate_delete_venue(venue.id)

        assert exc_info.value.message == (
            f"Cannot delete venue with ID {venue.id} because it has 2 associated event(s)"
        )
        assert isinstance(exc_info.value, ValidationException)

    async def test_delete_empty_venue_passes(self, rules, venue):
        await rules.validate_delete_venue(venue.id)
