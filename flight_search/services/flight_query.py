"""Combines catalog lookups into search suggestions and destination lists."""

from flight_search.models import Airport
from flight_search.services.catalog import AirportCatalog


class FlightQueryService:
    """Read-only queries used by the search session.

    Nothing here writes; every call can be retried or cached by the caller.
    """

    def __init__(self, catalog: AirportCatalog):
        self._catalog = catalog

    async def suggest(self, query: str) -> list[Airport]:
        """Code-prefix matches followed by name matches, without duplicates.

        The caller decides whether a query is long enough to search.
        """
        by_code = await self._catalog.find_by_code_prefix(query)
        by_name = await self._catalog.find_by_name_contains(query)

        seen: set[int] = set()
        suggestions = []
        for airport in by_code + by_name:
            if airport.id in seen:
                continue
            seen.add(airport.id)
            suggestions.append(airport)
        return suggestions

    async def destinations_from(self, airport_id: int) -> list[Airport]:
        """All other airports ranked by passenger traffic."""
        return await self._catalog.ranked_destinations(airport_id)

    async def all_airports(self) -> list[Airport]:
        return await self._catalog.list_all()
