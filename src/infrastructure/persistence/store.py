"""
Relational catalog store: both repositories bound to one AsyncSession.

The session's transaction is the unit of work for one request.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.persistence.repositories.event_repo import EventRepository
from src.infrastructure.persistence.repositories.venue_repo import VenueRepository


class SqlCatalogStore:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.events = EventRepository(session)
        self.venues = VenueRepository(session)

    async def ping(self) -> bool:
        result = await self.session.execute(text("SELECT 1"))
        return result.scalar() == 1
