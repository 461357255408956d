"""Routes for airport suggestions and destination lists."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from flight_search.config import Settings
from flight_search.dependencies import get_app_settings, get_catalog, get_query_service
from flight_search.services import AirportCatalog, FlightQueryService

router = APIRouter(prefix="/airports", tags=["airports"])


@router.get("/suggest")
async def suggest_airports(
    q: str = Query(default="", description="Airport code or name fragment"),
    query_service: FlightQueryService = Depends(get_query_service),
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    """Airports matching a code prefix or name fragment.

    Queries shorter than the configured minimum return no suggestions.
    """
    if len(q) < settings.min_query_length:
        airports = []
    else:
        airports = await query_service.suggest(q)

    return JSONResponse(content={
        "query": q,
        "count": len(airports),
        "airports": [airport.to_dict() for airport in airports],
    })


@router.get("/{airport_id}/destinations")
async def airport_destinations(
    airport_id: int,
    catalog: AirportCatalog = Depends(get_catalog),
    query_service: FlightQueryService = Depends(get_query_service),
) -> JSONResponse:
    """Destinations from an airport, busiest first."""
    airport = await catalog.get(airport_id)
    if airport is None:
        return JSONResponse(content={"error": f"Unknown airport {airport_id}"}, status_code=404)

    destinations = await query_service.destinations_from(airport_id)
    return JSONResponse(content={
        "departure": airport.to_dict(),
        "count": len(destinations),
        "destinations": [destination.to_dict() for destination in destinations],
    })
