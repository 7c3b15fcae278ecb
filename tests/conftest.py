"""Pytest configuration and fixtures for API tests."""

import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from cities_api.database import Store
from cities_api.main import create_app
from cities_api.schemas.city import ImportRequest
from cities_api.services.importer import import_features

# Use in-memory SQLite locally, PostgreSQL in CI (when TEST_DATABASE_URL is set)
TEST_DATABASE_URL = os.environ.get(
    "TEST_DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)


def make_feature(cartodb_id: int, name: str, population: int, lon: float, lat: float) -> dict:
    """Build a GeoJSON city feature as sent to POST /import."""
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [lon, lat]},
        "properties": {
            "name": name,
            "place_key": f"{cartodb_id}",
            "capital": "",
            "population": population,
            "pclass": "3",
            "cartodb_id": cartodb_id,
            "created_at": "2017-05-03T17:05:21Z",
            "updated_at": "2017-05-03T17:05:21Z",
        },
    }


# Towns of south-western Ontario. 106, 123 and 134 lie within 4 km of 123;
# the others do not.
SEED_FEATURES = [
    make_feature(42, "Amherstburg", 8921, -83.108128, 42.100072),
    make_feature(106, "Lighthouse", 410, -82.452364, 42.290865),
    make_feature(123, "Jeannettes Creek", 244, -82.421253, 42.315238),
    make_feature(134, "Bradley", 2500, -82.411366, 42.339783),
    make_feature(150, "Tilbury", 4966, -82.433722, 42.263346),
    make_feature(160, "Chatham", 44074, -82.183302, 42.404804),
]


@pytest_asyncio.fixture
async def store() -> AsyncGenerator[Store, None]:
    """A fresh store with empty tables for each test."""
    test_store = Store.from_url(TEST_DATABASE_URL)
    await test_store.drop_schema()
    await test_store.create_schema()
    yield test_store
    await test_store.drop_schema()
    await test_store.dispose()


@pytest_asyncio.fixture
async def db_session(store: Store) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session for tests that need direct DB access."""
    async with store.session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded_store(store: Store) -> Store:
    """Store holding the seed cities."""
    async with store.session_factory() as session:
        await import_features(session, ImportRequest(features=SEED_FEATURES))
    return store


@pytest_asyncio.fixture
async def client(seeded_store: Store) -> AsyncGenerator[AsyncClient, None]:
    """Async test client for the app, backed by the seeded store."""
    app = create_app(store=seeded_store)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture(name="make_feature")
def make_feature_fixture():
    """Factory for GeoJSON city features."""
    return make_feature
