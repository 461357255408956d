"""Database models."""

from flight_search.models.airport import Airport
from flight_search.models.favorite import Favorite, route_key
from flight_search.models.preference import Preference

__all__ = [
    "Airport",
    "Favorite",
    "Preference",
    "route_key",
]
