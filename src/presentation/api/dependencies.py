from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Query

from src.application.interfaces.repositories import ICatalogStore
from src.application.use_cases.events.event_operations import EventService
from src.application.use_cases.venues.venue_operations import VenueService
from src.infrastructure.config.settings import Settings, get_settings
from src.infrastructure.persistence.database import AsyncSessionLocal
from src.infrastructure.persistence.memory import (InMemoryCatalog,
                                                   InMemoryCatalogStore)
from src.infrastructure.persistence.store import SqlCatalogStore

# Global store state for the memory backend (singleton)
_memory_catalog: InMemoryCatalog | None = None


def get_memory_catalog() -> InMemoryCatalog:
    """
    Memory catalog dependency (singleton)

    Created on first use and kept for the life of the process.
    """
    global _memory_catalog
    if _memory_catalog is None:
        _memory_catalog = InMemoryCatalog()
    return _memory_catalog


async def get_catalog_store(
    settings: Annotated[Settings, Depends(get_settings)],
) -> AsyncIterator[ICatalogStore]:
    """
    Catalog store for one request.

    For the SQL backend the whole request runs in one transaction:
    - Commits on success
    - Rolls back on exception
    - Closes session automatically
    """
    if settings.store_backend == "memory":
        yield InMemoryCatalogStore(get_memory_catalog())
        return

    async with AsyncSessionLocal() as session:
        async with session.begin():
            yield SqlCatalogStore(session)


async def get_event_service(
    store: Annotated[ICatalogStore, Depends(get_catalog_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> EventService:
    """Event service dependency"""
    return EventService(store.events, store.venues, max_page_size=settings.max_page_size)


async def get_venue_service(
    store: Annotated[ICatalogStore, Depends(get_catalog_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> VenueService:
    """Venue service dependency"""
    return VenueService(store.venues, store.events, max_page_size=settings.max_page_size)


@dataclass(frozen=True)
class PagingParams:
    page: int
    size: int
    direction: str


async def get_paging_params(
    settings: Annotated[Settings, Depends(get_settings)],
    page: Annotated[int, Query(description="Zero-based page index")] = 0,
    size: Annotated[int | None, Query(description="Page size")] = None,
    direction: Annotated[str, Query(description="asc or desc")] = "asc",
) -> PagingParams:
    """Shared paging query parameters; sortBy is declared per endpoint"""
    return PagingParams(
        page=page,
        size=settings.default_page_size if size is None else size,
        direction=direction,
    )
