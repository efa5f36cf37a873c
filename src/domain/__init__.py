"""
Domain layer - Enterprise Business Rules.

This is the innermost layer containing business entities, value objects,
and domain exceptions. It has no dependencies on other layers.
"""

from src.domain.entities import (EventDraft, EventEntity, EventPatch,
                                 VenueDraft, VenueEntity, VenuePatch)
from src.domain.enums import SortDirection
from src.domain.exceptions import (CatalogException,
                                   DuplicateResourceException,
                                   ResourceNotFoundException,
                                   ValidationException, VenueInUseException)
from src.domain.value_objects import UNSET, Page, PageRequest

__all__ = [
    # Entities
    "EventEntity",
    "EventDraft",
    "EventPatch",
    "VenueEntity",
    "VenueDraft",
    "VenuePatch",
    # Value Objects
    "UNSET",
    "Page",
    "PageRequest",
    # Enums
    "SortDirection",
    # Exceptions
    "CatalogException",
    "ValidationException",
    "ResourceNotFoundException",
    "DuplicateResourceException",
    "VenueInUseException",
]
