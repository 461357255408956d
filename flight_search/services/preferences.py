"""Durable key-value preferences with observable values per key."""

from typing import AsyncIterator

from flight_search.database import Database
from flight_search.models import Preference
from flight_search.services.observable import ObservableValue

SEARCH_QUERY_KEY = "search_query"


class PreferenceStore:
    """Scalar string settings stored in the ``preference`` table.

    ``observe`` hands out one shared ``ObservableValue`` per key. It is
    primed from storage the first time it is requested and updated after
    every successful ``set``, so readers see changes made through any
    holder of this store.
    """

    def __init__(self, database: Database):
        self._db = database
        self._observed: dict[str, ObservableValue[str]] = {}

    async def get(self, key: str, default: str = "") -> str:
        async with self._db.session() as session:
            preference = await session.get(Preference, key)
            return preference.value if preference is not None else default

    async def set(self, key: str, value: str) -> None:
        async with self._db.session() as session:
            preference = await session.get(Preference, key)
            if preference is None:
                session.add(Preference(key=key, value=value))
            else:
                preference.value = value
            await session.commit()

        if key in self._observed:
            self._observed[key].set(value)

    async def observe(self, key: str, default: str = "") -> ObservableValue[str]:
        """Shared observable for ``key``, loaded from storage on first use."""
        if key not in self._observed:
            value = await self.get(key, default)
            # Another caller may have primed it while we were reading
            self._observed.setdefault(key, ObservableValue(value))
        return self._observed[key]

    async def stream(self, key: str, default: str = "") -> AsyncIterator[str]:
        """Yield the current value of ``key`` and then every change."""
        observable = await self.observe(key, default)
        async for value in observable.updates():
            yield value

    async def get_search_query(self) -> str:
        return await self.get(SEARCH_QUERY_KEY)

    async def set_search_query(self, text: str) -> None:
        await self.set(SEARCH_QUERY_KEY, text)
