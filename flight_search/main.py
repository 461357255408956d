"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from flight_search.config import Settings, get_settings
from flight_search.database import Database
from flight_search.routers import airports, session
from flight_search.services import (
    AirportCatalog,
    FavoriteRouteStore,
    FlightQueryService,
    PreferenceStore,
    create_session,
    load_reference_data,
)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the app. Stores and the session are created in the lifespan."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        logging.basicConfig(level=settings.log_level)

        database = Database(settings.database_url, echo=settings.echo_sql)
        await database.init_db()

        catalog = AirportCatalog(database)
        await load_reference_data(catalog, settings.airports_csv_path)

        query_service = FlightQueryService(catalog)
        search_session = create_session(
            "search",
            query_service,
            FavoriteRouteStore(database),
            PreferenceStore(database),
            min_query_length=settings.min_query_length,
        )
        await search_session.start()

        app.state.settings = settings
        app.state.database = database
        app.state.catalog = catalog
        app.state.query_service = query_service
        app.state.session = search_session
        try:
            yield
        finally:
            search_session.close()
            await database.dispose()

    app = FastAPI(
        title="Flight Search",
        description="Search airports, browse destinations ranked by traffic, and keep favorite routes",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.include_router(airports.router)
    app.include_router(session.router)

    return app


app = create_app()
