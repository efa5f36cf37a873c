""" Repository module for the persistence layer. """

from src.infrastructure.persistence.repositories.base import BaseRepository
from src.infrastructure.persistence.repositories.event_repo import EventRepository
from src.infrastructure.persistence.repositories.venue_repo import VenueRepository

__all__ = [
    "BaseRepository",
    "EventRepository",
    "VenueRepository",
]
