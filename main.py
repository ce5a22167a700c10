from typing import List, Union

import httpx
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.dashboard_config import DashboardConfig
from utils import driver_list, next_race, race_results, season_stats, session_resolver, standings, time_utils
from utils.http_client import get_http_client
from api_pydantic_models.errors import ErrorResponse
from api_pydantic_models.race_results import GetLastRaceResultsResponse
from api_pydantic_models.standings import GetDriverStandingsResponse, GetConstructorStandingsResponse
from api_pydantic_models.next_race import NextRaceDetails, SeasonFinishedResponse
from api_pydantic_models.race_sessions import UpcomingSession
from api_pydantic_models.drivers import DriverListEntry
from api_pydantic_models.season_stats import (
    GetDriverSeasonStatsResponse,
    GetConstructorWinsResponse,
    GetDriverRacePositionsResponse,
)
import logging

logging.basicConfig(
    level=DashboardConfig.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)

logger = logging.getLogger(__name__)

API_PREFIX = "/api/f1"

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=DashboardConfig.get_cors_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(message: str, status_code: int = 500) -> JSONResponse:
    """Fixed error shape; internal details stay in the logs."""
    return JSONResponse(status_code=status_code, content=ErrorResponse(message=message).model_dump())


@app.get(f"{API_PREFIX}/last-race")
@app.get(f"{API_PREFIX}/home")
async def get_last_race_results(
    client: httpx.AsyncClient = Depends(get_http_client)
) -> GetLastRaceResultsResponse:
    try:
        logger.info("Request: last race results")
        data = await race_results.get_last_race_results(client)
        logger.info("Response: returning %d standings for %s", len(data.standings), data.session_info.circuit)
        return data
    except Exception:
        logger.exception("Error in get_last_race_results")
        return error_response("Internal Server Error: Could not retrieve last race data.")


@app.get(f"{API_PREFIX}/standings/drivers")
async def get_driver_standings(
    client: httpx.AsyncClient = Depends(get_http_client)
) -> GetDriverStandingsResponse:
    try:
        logger.info("Request: driver standings")
        return await standings.get_driver_standings(client)
    except Exception:
        logger.exception("Error in get_driver_standings")
        return error_response("Internal Server Error: Could not retrieve driver standings.")


@app.get(f"{API_PREFIX}/standings/constructors")
async def get_constructor_standings(
    client: httpx.AsyncClient = Depends(get_http_client)
) -> GetConstructorStandingsResponse:
    try:
        logger.info("Request: constructor standings")
        return await standings.get_constructor_standings(client)
    except Exception:
        logger.exception("Error in get_constructor_standings")
        return error_response("Internal Server Error: Could not retrieve constructor standings.")


@app.get(f"{API_PREFIX}/next-race")
async def get_next_race(
    client: httpx.AsyncClient = Depends(get_http_client)
) -> Union[NextRaceDetails, SeasonFinishedResponse]:
    try:
        logger.info("Request: next race")
        return await next_race.get_next_race(client)
    except Exception:
        logger.exception("Error in get_next_race")
        return error_response("Internal Server Error: Could not retrieve next race data.")


@app.get(f"{API_PREFIX}/next-session")
async def get_next_session(
    client: httpx.AsyncClient = Depends(get_http_client)
) -> Union[UpcomingSession, SeasonFinishedResponse]:
    """
    Next session of any type from the OpenF1 calendar, a race when one is upcoming.
    "Season finished" with the next season year once nothing is left.
    """
    lookup = await session_resolver.next_upcoming_race_session(client)
    if not lookup.found:
        return SeasonFinishedResponse(next_season=time_utils.resolve_now(None).year + 1)

    session = lookup.session
    return UpcomingSession(
        session_key=session.session_key,
        session_name=session.session_name,
        circuit=session.circuit_short_name,
        location=session.location,
        country=session.country_name,
        date_start=session.date_start,
        date_end=session.date_end,
        meeting_key=session.meeting_key,
    )


@app.get(f"{API_PREFIX}/drivers")
async def get_drivers(
    client: httpx.AsyncClient = Depends(get_http_client)
) -> List[DriverListEntry]:
    try:
        logger.info("Request: driver list")
        drivers = await driver_list.get_driver_list(client)
        logger.info("Response: returning %d drivers", len(drivers))
        return drivers
    except Exception:
        logger.exception("Error in get_drivers")
        return error_response("Internal Server Error: Could not retrieve driver list.")


@app.get(f"{API_PREFIX}/driver-stats")
async def get_driver_stats(
    client: httpx.AsyncClient = Depends(get_http_client)
) -> GetDriverSeasonStatsResponse:
    try:
        logger.info("Request: driver season stats")
        return await season_stats.driver_season_stats(client)
    except Exception:
        logger.exception("Error in get_driver_stats")
        return error_response("Internal Server Error: Could not retrieve driver stats.")


@app.get(f"{API_PREFIX}/constructor-wins")
async def get_constructor_wins(
    client: httpx.AsyncClient = Depends(get_http_client)
) -> GetConstructorWinsResponse:
    try:
        logger.info("Request: constructor wins")
        return await season_stats.constructor_wins(client)
    except Exception:
        logger.exception("Error in get_constructor_wins")
        return error_response("Internal Server Error: Could not retrieve constructor wins.")


@app.get(f"{API_PREFIX}/driver-race-positions")
async def get_driver_race_positions(
    client: httpx.AsyncClient = Depends(get_http_client)
) -> GetDriverRacePositionsResponse:
    try:
        logger.info("Request: driver race positions")
        return await season_stats.driver_race_positions(client)
    except Exception:
        logger.exception("Error in get_driver_race_positions")
        return error_response("Internal Server Error: Could not retrieve driver race positions.")
