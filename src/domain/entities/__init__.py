"""Domain entities."""

from src.domain.entities.event import EventDraft, EventEntity, EventPatch
from src.domain.entities.venue import VenueDraft, VenueEntity, VenuePatch

__all__ = [
    "EventDraft",
    "EventEntity",
    "EventPatch",
    "VenueDraft",
    "VenueEntity",
    "VenuePatch",
]
