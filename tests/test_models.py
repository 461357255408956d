"""Unit tests for Airport, Favorite and Preference models."""

import pytest
import pytest_asyncio
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from flight_search.database import Database
from flight_search.models import Airport, Favorite, Preference, route_key


@pytest_asyncio.fixture
async def db_session(database: Database):
    async with database.session() as session:
        yield session


@pytest.mark.asyncio
async def test_create_airport(db_session):
    """Airport ids come from the reference data."""
    airport = Airport(id=42, name="Dublin Airport", iata_code="DUB", passengers=32907673, destinations=185)
    db_session.add(airport)
    await db_session.commit()

    stored = await db_session.get(Airport, 42)
    assert stored.iata_code == "DUB"
    assert stored.passengers == 32907673


def test_airport_route_label_and_dict():
    """Airport exposes a display label and a plain dict form."""
    airport = Airport(id=1, name="Dublin Airport", iata_code="DUB", passengers=10, destinations=2)

    assert airport.route_label == "DUB - Dublin Airport"
    assert airport.to_dict() == {
        "id": 1,
        "name": "Dublin Airport",
        "iata_code": "DUB",
        "passengers": 10,
        "destinations": 2,
        "label": "DUB - Dublin Airport",
    }


def test_route_key():
    """Route keys join departure and destination codes."""
    assert route_key("SFO", "LAX") == "SFO_LAX"
    assert Favorite(departure_code="LAX", destination_code="SFO").route_key == "LAX_SFO"


@pytest.mark.asyncio
async def test_create_favorite(db_session):
    """Test creating a basic favorite."""
    favorite = Favorite(departure_code="SFO", destination_code="LAX")
    db_session.add(favorite)
    await db_session.commit()
    await db_session.refresh(favorite)

    assert favorite.id is not None
    assert favorite.departure_code == "SFO"
    assert favorite.destination_code == "LAX"


@pytest.mark.asyncio
async def test_unique_constraint_prevents_duplicate(db_session):
    """The same ordered pair cannot be stored twice."""
    db_session.add(Favorite(departure_code="SFO", destination_code="LAX"))
    await db_session.commit()

    db_session.add(Favorite(departure_code="SFO", destination_code="LAX"))
    with pytest.raises(IntegrityError):
        await db_session.commit()


@pytest.mark.asyncio
async def test_reverse_route_is_a_different_favorite(db_session):
    """Routes are directional: A->B and B->A are separate rows."""
    db_session.add_all([
        Favorite(departure_code="SFO", destination_code="LAX"),
        Favorite(departure_code="LAX", destination_code="SFO"),
    ])
    await db_session.commit()

    result = await db_session.execute(select(Favorite))
    assert len(result.scalars().all()) == 2


@pytest.mark.asyncio
async def test_delete_favorite(db_session):
    """Test deleting a favorite (unfavoriting)."""
    favorite = Favorite(departure_code="SFO", destination_code="JFK")
    db_session.add(favorite)
    await db_session.commit()

    await db_session.delete(favorite)
    await db_session.commit()

    result = await db_session.execute(select(Favorite))
    assert result.scalar_one_or_none() is None


@pytest.mark.asyncio
async def test_preference_keyed_by_name(db_session):
    """Preferences are keyed by name."""
    db_session.add(Preference(key="search_query", value="SFO"))
    await db_session.commit()

    stored = await db_session.get(Preference, "search_query")
    assert stored.value == "SFO"
