"""Shared fixtures: an in-memory database seeded with three airports."""

import pytest_asyncio

from flight_search.database import Database
from flight_search.services import (
    AirportCatalog,
    FavoriteRouteStore,
    FlightQueryService,
    PreferenceStore,
)

# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

SAMPLE_AIRPORTS = [
    {"id": 1, "name": "San Francisco International", "iata_code": "SFO", "passengers": 1000, "destinations": 120},
    {"id": 2, "name": "Tom Bradley International", "iata_code": "LAX", "passengers": 2000, "destinations": 150},
    {"id": 3, "name": "John F. Kennedy International", "iata_code": "JFK", "passengers": 500, "destinations": 90},
]


@pytest_asyncio.fixture
async def database():
    """Create a fresh database for each test."""
    db = Database(TEST_DATABASE_URL)
    await db.init_db()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def catalog(database: Database):
    """Catalog holding SFO (1000 pax), LAX (2000 pax) and JFK (500 pax)."""
    catalog = AirportCatalog(database)
    await catalog.bulk_load(SAMPLE_AIRPORTS)
    return catalog


@pytest_asyncio.fixture
async def query_service(catalog: AirportCatalog):
    return FlightQueryService(catalog)


@pytest_asyncio.fixture
async def favorite_store(database: Database):
    return FavoriteRouteStore(database)


@pytest_asyncio.fixture
async def preference_store(database: Database):
    return PreferenceStore(database)
