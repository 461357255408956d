"""Unit tests for the preference store."""

import pytest

from flight_search.database import Database
from flight_search.services import SEARCH_QUERY_KEY, PreferenceStore


@pytest.mark.asyncio
async def test_missing_key_returns_default(preference_store: PreferenceStore):
    assert await preference_store.get("missing") == ""
    assert await preference_store.get("missing", "fallback") == "fallback"
    assert await preference_store.get_search_query() == ""


@pytest.mark.asyncio
async def test_set_and_overwrite(preference_store: PreferenceStore):
    await preference_store.set_search_query("SF")
    await preference_store.set_search_query("SFO")

    assert await preference_store.get_search_query() == "SFO"
    assert await preference_store.get(SEARCH_QUERY_KEY) == "SFO"


@pytest.mark.asyncio
async def test_empty_string_is_stored(preference_store: PreferenceStore):
    await preference_store.set_search_query("SFO")
    await preference_store.set_search_query("")

    assert await preference_store.get_search_query() == ""


@pytest.mark.asyncio
async def test_search_query_survives_restart(tmp_path):
    """A new store on the same file sees the saved query."""
    url = f"sqlite+aiosqlite:///{tmp_path / 'prefs.db'}"

    first = Database(url)
    await first.init_db()
    await PreferenceStore(first).set_search_query("SFO")
    await first.dispose()

    second = Database(url)
    await second.init_db()
    try:
        assert await PreferenceStore(second).get_search_query() == "SFO"
    finally:
        await second.dispose()


class TestObserve:
    """Tests for observable preference values."""

    @pytest.mark.asyncio
    async def test_observe_is_primed_from_storage(self, preference_store: PreferenceStore):
        await preference_store.set("theme", "dark")

        observable = await preference_store.observe("theme")

        assert observable.value == "dark"

    @pytest.mark.asyncio
    async def test_observe_returns_shared_instance(self, preference_store: PreferenceStore):
        first = await preference_store.observe(SEARCH_QUERY_KEY)
        second = await preference_store.observe(SEARCH_QUERY_KEY)
        assert first is second

    @pytest.mark.asyncio
    async def test_set_updates_observers(self, preference_store: PreferenceStore):
        observable = await preference_store.observe(SEARCH_QUERY_KEY)
        seen = []
        observable.subscribe(seen.append)

        await preference_store.set_search_query("JFK")

        assert observable.value == "JFK"
        assert seen == ["JFK"]

    @pytest.mark.asyncio
    async def test_stream_yields_current_then_changes(self, preference_store: PreferenceStore):
        await preference_store.set_search_query("SF")
        stream = preference_store.stream(SEARCH_QUERY_KEY)

        assert await stream.__anext__() == "SF"
        await preference_store.set_search_query("SFO")
        assert await stream.__anext__() == "SFO"

        await stream.aclose()
