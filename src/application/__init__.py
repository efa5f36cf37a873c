"""
Application layer - Application Business Rules.

This layer contains application-specific business rules, including:
- Interfaces (ports) for the catalog store
- Use cases that orchestrate domain logic
- Application services (catalog rules, paging)
"""

from src.application.interfaces import (ICatalogStore, IEventRepository,
                                        IVenueRepository)
from src.application.services import CatalogRules, build_page_request
from src.application.use_cases import EventService, VenueService

__all__ = [
    # Interfaces
    "ICatalogStore",
    "IEventRepository",
    "IVenueRepository",
    # Services
    "CatalogRules",
    "build_page_request",
    # Use Cases
    "EventService",
    "VenueService",
]
