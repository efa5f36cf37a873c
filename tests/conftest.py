"""Shared test fixtures for pytest"""
from datetime import UTC, datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from src.infrastructure.persistence.database import build_engine, create_schema
from src.infrastructure.persistence.memory import (InMemoryCatalog,
                                                   InMemoryCatalogStore)
from src.infrastructure.persistence.store import SqlCatalogStore
from src.presentation.api.dependencies import get_catalog_store

# In-memory SQLite shared by every session of one test
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# A fixed "now" for rule and service tests
FIXED_NOW = datetime(2030, 1, 1, 12, 0, tzinfo=UTC)


class FakeClock:
    """Injectable clock that only moves when told to"""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
async def test_engine():
    """Create test database engine"""
    engine = build_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_schema(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def test_db(session_factory):
    """Create test database session"""
    async with session_factory() as session:
        yield session


@pytest.fixture
def sql_store(test_db) -> SqlCatalogStore:
    return SqlCatalogStore(test_db)


@pytest.fixture
def memory_store() -> InMemoryCatalogStore:
    return InMemoryCatalogStore(InMemoryCatalog())


@pytest.fixture(params=["sql", "memory"])
async def store(request, session_factory):
    """Each test using this fixture runs once per store backend"""
    if request.param == "memory":
        yield InMemoryCatalogStore(InMemoryCatalog())
        return

    async with session_factory() as session:
        yield SqlCatalogStore(session)


@pytest.fixture(params=["sql", "memory"])
async def client(request, session_factory):
    """HTTP client for API testing, once per store backend"""
    if request.param == "memory":
        catalog = InMemoryCatalog()

        async def override_get_catalog_store():
            yield InMemoryCatalogStore(catalog)

    else:

        async def override_get_catalog_store():
            async with session_factory() as session:
                async with session.begin():
                    yield SqlCatalogStore(session)

    app.dependency_overrides[get_catalog_store] = override_get_catalog_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def main_hall(client) -> dict:
    """A venue created through the API"""
    response = await client.post(
        "/api/venues",
        json={
            "name": "Main Hall",
            "address": "1 Festival Street",
            "city": "Bogota",
            "country": "Colombia",
            "maxCapacity": 500,
            "type": "Theater",
        },
    )
    assert response.status_code == 201
    return response.json()
