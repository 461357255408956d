"""FastAPI dependency providers for components built in the app lifespan."""

from fastapi import Request

from flight_search.config import Settings
from flight_search.services import AirportCatalog, FlightQueryService, SearchSession


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_catalog(request: Request) -> AirportCatalog:
    return request.app.state.catalog


def get_query_service(request: Request) -> FlightQueryService:
    return request.app.state.query_service


def get_session(request: Request) -> SearchSession:
    """The search session owned by this process."""
    return request.app.state.session
