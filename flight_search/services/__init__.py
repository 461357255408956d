"""Stores, query service and search session."""

from flight_search.services.catalog import AirportCatalog
from flight_search.services.favorites import FavoriteRouteStore
from flight_search.services.flight_query import FlightQueryService
from flight_search.services.observable import ObservableValue
from flight_search.services.preferences import SEARCH_QUERY_KEY, PreferenceStore
from flight_search.services.reference_data import load_reference_data, parse_airports_csv
from flight_search.services.session import (
    DisplayContent,
    ScreenMode,
    SearchSession,
    UnknownSessionTypeError,
    create_session,
)

__all__ = [
    "AirportCatalog",
    "FavoriteRouteStore",
    "FlightQueryService",
    "ObservableValue",
    "PreferenceStore",
    "SEARCH_QUERY_KEY",
    "load_reference_data",
    "parse_airports_csv",
    "DisplayContent",
    "ScreenMode",
    "SearchSession",
    "UnknownSessionTypeError",
    "create_session",
]
