"""Application use cases."""

from src.application.use_cases.events.event_operations import EventService
from src.application.use_cases.venues.venue_operations import VenueService

__all__ = [
    "EventService",
    "VenueService",
]
