"""Search session: the state behind the flight search screen.

The session owns the in-memory view of one search screen (query text,
suggestions, selected airport, destinations and favorites) and mediates
between user actions and the stores. Screen modes are never stored; they
are derived from the view state:

- IDLE: nothing selected and no suggestions to show. The display shows
  resolved favorite routes, or an empty-state prompt if there are none.
- SUGGESTING: the query is long enough and matched at least one airport.
- VIEWING: an airport is selected; its ranked destinations are shown.

Actions are serialized on one lock, so they apply in arrival order. Store
failures never escape an action: the previous view state is kept and the
failure is published on ``last_error``.
"""

import asyncio
import functools
import logging
from enum import Enum
from typing import Any, Awaitable, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from flight_search.models import Airport, route_key
from flight_search.services.favorites import FavoriteRouteStore
from flight_search.services.flight_query import FlightQueryService
from flight_search.services.observable import ObservableValue
from flight_search.services.preferences import PreferenceStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

STORE_ERRORS = (SQLAlchemyError, OSError)

DEFAULT_MIN_QUERY_LENGTH = 2


class ScreenMode(str, Enum):
    """Mutually exclusive display modes of the search screen."""

    IDLE = "idle"
    SUGGESTING = "suggesting"
    VIEWING = "viewing"


class DisplayContent(str, Enum):
    """What the screen body shows within the current mode."""

    FAVORITES = "favorites"
    EMPTY_PROMPT = "empty_prompt"
    SUGGESTIONS = "suggestions"
    DESTINATIONS = "destinations"
    NO_DESTINATIONS = "no_destinations"


class UnknownSessionTypeError(ValueError):
    """Raised when asked to build a session type that does not exist."""


class _SessionClosed(Exception):
    """A store call finished after the session was closed."""


def _serialized(method):
    """Run an action under the session lock, skipping it once closed."""

    @functools.wraps(method)
    async def wrapper(self, *args, **kwargs):
        async with self._lock:
            if self._closed:
                return None
            try:
                return await method(self, *args, **kwargs)
            except _SessionClosed:
                logger.debug("Discarded %s result for closed session", method.__name__)
                return None

    return wrapper


class SearchSession:
    """Observable view state plus the actions a search screen can trigger.

    Attributes:
        query: Current query text.
        suggestions: Airports matching the query while typing.
        selected_airport: Departure airport being viewed, or None.
        destinations: Ranked destinations for the selected airport.
        favorites: Route key to favorite flag, a cache of the favorite store.
        favorite_routes: Favorites resolved to (departure, destination) airports.
        last_error: Description of the last store failure, or None.
    """

    def __init__(
        self,
        query_service: FlightQueryService,
        favorites: FavoriteRouteStore,
        preferences: PreferenceStore,
        min_query_length: int = DEFAULT_MIN_QUERY_LENGTH,
    ):
        self._query_service = query_service
        self._favorites = favorites
        self._preferences = preferences
        self.min_query_length = min_query_length

        self._lock = asyncio.Lock()
        self._closed = False
        self._routes_resolved = False

        self.query: ObservableValue[str] = ObservableValue("")
        self.suggestions: ObservableValue[list[Airport]] = ObservableValue([])
        self.selected_airport: ObservableValue[Optional[Airport]] = ObservableValue(None)
        self.destinations: ObservableValue[list[Airport]] = ObservableValue([])
        self.favorites: ObservableValue[dict[str, bool]] = ObservableValue({})
        self.favorite_routes: ObservableValue[list[tuple[Airport, Airport]]] = ObservableValue([])
        self.last_error: ObservableValue[Optional[str]] = ObservableValue(None)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def mode(self) -> ScreenMode:
        if self.selected_airport.value is not None:
            return ScreenMode.VIEWING
        if len(self.query.value) >= self.min_query_length and self.suggestions.value:
            return ScreenMode.SUGGESTING
        return ScreenMode.IDLE

    @property
    def content(self) -> DisplayContent:
        mode = self.mode
        if mode is ScreenMode.VIEWING:
            if self.destinations.value:
                return DisplayContent.DESTINATIONS
            return DisplayContent.NO_DESTINATIONS
        if mode is ScreenMode.SUGGESTING:
            return DisplayContent.SUGGESTIONS
        if self.favorite_routes.value:
            return DisplayContent.FAVORITES
        return DisplayContent.EMPTY_PROMPT

    # Actions

    @_serialized
    async def start(self) -> None:
        """Restore the persisted query and favorite membership."""
        ok, stored = await self._attempt("load favorites", self._favorites.list_all())
        if ok:
            self.favorites.set({favorite.route_key: True for favorite in stored})

        ok, text = await self._attempt("load search query", self._preferences.get_search_query())
        await self._apply_query(text if ok else self.query.value, previous_mode=None)

    @_serialized
    async def on_query_changed(self, text: str) -> None:
        """Persist the new query text and update suggestions."""
        self.last_error.set(None)
        previous_mode = self.mode
        await self._attempt("save search query", self._preferences.set_search_query(text))
        await self._apply_query(text, previous_mode)

    @_serialized
    async def on_airport_selected(self, airport: Airport) -> None:
        """Show ranked destinations for ``airport``.

        The query text is left as the user typed it.
        """
        self.last_error.set(None)
        ok, destinations = await self._attempt(
            "load destinations", self._query_service.destinations_from(airport.id)
        )
        if not ok:
            return

        self.selected_airport.set(airport)
        self.suggestions.set([])
        self.destinations.set(destinations)

    @_serialized
    async def on_clear_selection(self) -> None:
        """Leave the destination view and re-derive state from the saved query."""
        self.last_error.set(None)
        previous_mode = self.mode
        ok, text = await self._attempt("load search query", self._preferences.get_search_query())
        if not ok:
            text = self.query.value

        self.selected_airport.set(None)
        self.destinations.set([])
        await self._apply_query(text, previous_mode)

    @_serialized
    async def on_toggle_favorite(self, departure_code: str, destination_code: str) -> None:
        """Flip the favorite flag of a route, writing to the store first.

        The new flag is the inverse of the cached one. The cache is only
        updated once the store write succeeded.
        """
        self.last_error.set(None)
        key = route_key(departure_code, destination_code)
        make_favorite = not self.favorites.value.get(key, False)

        if make_favorite:
            write = self._favorites.add(departure_code, destination_code)
        else:
            write = self._favorites.remove(departure_code, destination_code)
        ok, _ = await self._attempt("save favorite", write)
        if not ok:
            return

        updated = dict(self.favorites.value)
        updated[key] = make_favorite
        self.favorites.set(updated)

        if self.mode is ScreenMode.IDLE:
            await self._resolve_favorites()

    @_serialized
    async def refresh_favorites(self) -> None:
        """Re-read favorites and resolve them to airports."""
        await self._resolve_favorites()

    def is_route_favorited(self, departure_code: str, destination_code: str) -> bool:
        return self.favorites.value.get(route_key(departure_code, destination_code), False)

    def close(self) -> None:
        """Tear down the session. Pending and later results are discarded."""
        self._closed = True

    def snapshot(self) -> dict[str, Any]:
        """Current view state as plain data."""
        selected = self.selected_airport.value
        destinations = []
        if selected is not None:
            for airport in self.destinations.value:
                item = airport.to_dict()
                item["is_favorite"] = self.is_route_favorited(selected.iata_code, airport.iata_code)
                destinations.append(item)

        return {
            "mode": self.mode.value,
            "content": self.content.value,
            "query": self.query.value,
            "suggestions": [airport.to_dict() for airport in self.suggestions.value],
            "selected_airport": selected.to_dict() if selected is not None else None,
            "destinations": destinations,
            "favorites": sorted(key for key, flag in self.favorites.value.items() if flag),
            "favorite_routes": [
                {"departure": departure.to_dict(), "destination": destination.to_dict()}
                for departure, destination in self.favorite_routes.value
            ],
            "last_error": self.last_error.value,
        }

    # Internals, always called with the lock held

    async def _apply_query(self, text: str, previous_mode: Optional[ScreenMode]) -> None:
        if len(text) >= self.min_query_length:
            ok, suggestions = await self._attempt(
                "search airports", self._query_service.suggest(text)
            )
            if not ok:
                # Query and suggestions only change together
                return
        else:
            suggestions = []

        self.query.set(text)
        self.suggestions.set(suggestions)

        # Favorites are resolved on entering IDLE, not on every keystroke within it
        entering_idle = previous_mode is not ScreenMode.IDLE or not self._routes_resolved
        if self.mode is ScreenMode.IDLE and entering_idle:
            await self._resolve_favorites()

    async def _resolve_favorites(self) -> None:
        ok, stored = await self._attempt("load favorites", self._favorites.list_all())
        if not ok:
            return
        ok, airports = await self._attempt("load airports", self._query_service.all_airports())
        if not ok:
            return

        by_code: dict[str, Airport] = {}
        for airport in airports:
            by_code.setdefault(airport.iata_code, airport)

        routes = []
        for favorite in stored:
            departure = by_code.get(favorite.departure_code)
            destination = by_code.get(favorite.destination_code)
            if departure is None or destination is None:
                logger.debug("Dropping favorite %s with unknown airport code", favorite.route_key)
                continue
            routes.append((departure, destination))

        self.favorites.set({favorite.route_key: True for favorite in stored})
        self.favorite_routes.set(routes)
        self._routes_resolved = True

    async def _attempt(self, operation: str, awaitable: Awaitable[T]) -> tuple[bool, Optional[T]]:
        """Await a store call. Returns (ok, result); failures are logged."""
        try:
            result = await awaitable
        except STORE_ERRORS as exc:
            if self._closed:
                raise _SessionClosed() from exc
            logger.warning("Failed to %s", operation, exc_info=True)
            self.last_error.set(f"Failed to {operation}: {exc}")
            return False, None

        if self._closed:
            raise _SessionClosed()
        return True, result


SESSION_TYPES = {
    "search": SearchSession,
}


def create_session(
    kind: str,
    query_service: FlightQueryService,
    favorites: FavoriteRouteStore,
    preferences: PreferenceStore,
    **kwargs,
) -> SearchSession:
    """Build a session of the registered ``kind``.

    Raises:
        UnknownSessionTypeError: if ``kind`` is not registered. This is a
            wiring mistake, not something to recover from at runtime.
    """
    try:
        session_cls = SESSION_TYPES[kind]
    except KeyError:
        raise UnknownSessionTypeError(f"Unknown session type: {kind!r}") from None
    return session_cls(query_service, favorites, preferences, **kwargs)
