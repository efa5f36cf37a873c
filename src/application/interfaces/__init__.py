"""
Application layer interfaces (ports).

These protocols define the contracts between the application layer
and the infrastructure layer, following the Dependency Inversion Principle.
"""

from src.application.interfaces.repositories import (ICatalogStore,
                                                     IEventRepository,
                                                     IVenueRepository)

__all__ = [
    "ICatalogStore",
    "IEventRepository",
    "IVenueRepository",
]
