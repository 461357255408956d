"""Routes driving the search session, standing in for the screen."""

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from flight_search.dependencies import get_catalog, get_session
from flight_search.services import AirportCatalog, SearchSession

router = APIRouter(prefix="/session", tags=["session"])


@router.get("")
async def session_state(session: SearchSession = Depends(get_session)) -> JSONResponse:
    """Current view state of the search screen."""
    return JSONResponse(content=session.snapshot())


@router.post("/query")
async def change_query(
    text: str = Body(..., embed=True),
    session: SearchSession = Depends(get_session),
) -> JSONResponse:
    await session.on_query_changed(text)
    return JSONResponse(content=session.snapshot())


@router.post("/select/{airport_id}")
async def select_airport(
    airport_id: int,
    session: SearchSession = Depends(get_session),
    catalog: AirportCatalog = Depends(get_catalog),
) -> JSONResponse:
    """Select a departure airport and show its destinations."""
    airport = await catalog.get(airport_id)
    if airport is None:
        return JSONResponse(content={"error": f"Unknown airport {airport_id}"}, status_code=404)

    await session.on_airport_selected(airport)
    return JSONResponse(content=session.snapshot())


@router.post("/clear")
async def clear_selection(session: SearchSession = Depends(get_session)) -> JSONResponse:
    await session.on_clear_selection()
    return JSONResponse(content=session.snapshot())


@router.post("/favorites/toggle")
async def toggle_favorite(
    departure_code: str = Body(..., embed=True),
    destination_code: str = Body(..., embed=True),
    session: SearchSession = Depends(get_session),
) -> JSONResponse:
    await session.on_toggle_favorite(departure_code, destination_code)
    return JSONResponse(content=session.snapshot())
