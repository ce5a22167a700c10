"""
Typed fetch wrappers around the OpenF1 REST API.
Leaf module: URL construction and response unwrapping only.
"""
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from constants.api_endpoints import (
    SESSIONS_API_URL,
    SESSION_RESULTS_API_URL,
    DRIVERS_API_URL,
    LAPS_API_URL,
    POSITION_API_URL,
)
from upstream_pydantic_models.f1_sessions import F1Session, F1SessionResult
from upstream_pydantic_models.f1_drivers import DriverInfo
from upstream_pydantic_models.f1_laps import F1LapData
from upstream_pydantic_models.f1_position import F1PositionSample
from utils.errors import UpstreamFetchError
from utils.http_client import fetch_json

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


async def _fetch_list(
    client: httpx.AsyncClient,
    url: str,
    params: Dict[str, Any],
    model: Type[ModelT]
) -> List[ModelT]:
    try:
        payload = await fetch_json(client, url, params=params)
    except UpstreamFetchError as e:
        # OpenF1 answers 404 {"detail": "No results found."} for empty queries
        if e.status_code == 404:
            return []
        raise

    if not isinstance(payload, list):
        raise UpstreamFetchError(f"Expected a JSON array from {url}", url=url)
    try:
        return [model(**item) for item in payload]
    except (TypeError, ValidationError) as e:
        logger.warning("Malformed %s payload from %s params=%s", model.__name__, url, params)
        raise UpstreamFetchError(f"Malformed {model.__name__} payload", url=url) from e


async def fetch_sessions(
    client: httpx.AsyncClient,
    year: int,
    session_name: Optional[str] = None
) -> List[F1Session]:
    parameters: Dict[str, Any] = {"year": year}
    if session_name:
        parameters["session_name"] = session_name
    sessions = await _fetch_list(client, SESSIONS_API_URL, parameters, F1Session)
    logger.info("Fetched %d sessions from OpenF1 for year=%s session_name=%s", len(sessions), year, session_name)
    return sessions


async def fetch_session_results(client: httpx.AsyncClient, session_key: int) -> List[F1SessionResult]:
    results = await _fetch_list(client, SESSION_RESULTS_API_URL, {"session_key": session_key}, F1SessionResult)
    logger.info("Fetched %d session results from OpenF1 for session_key=%s", len(results), session_key)
    return results


async def fetch_drivers(
    client: httpx.AsyncClient,
    session_key: int,
    driver_number: Optional[int] = None
) -> List[DriverInfo]:
    parameters: Dict[str, Any] = {"session_key": session_key}
    if driver_number is not None:
        parameters["driver_number"] = driver_number
    drivers = await _fetch_list(client, DRIVERS_API_URL, parameters, DriverInfo)
    logger.info("Fetched %d drivers from OpenF1 for session_key=%s", len(drivers), session_key)
    return drivers


async def fetch_laps(client: httpx.AsyncClient, session_key: int) -> List[F1LapData]:
    laps = await _fetch_list(client, LAPS_API_URL, {"session_key": session_key}, F1LapData)
    logger.info("Fetched %d lap records from OpenF1 for session_key=%s", len(laps), session_key)
    return laps


async def fetch_positions(client: httpx.AsyncClient, session_key: int) -> List[F1PositionSample]:
    positions = await _fetch_list(client, POSITION_API_URL, {"session_key": session_key}, F1PositionSample)
    logger.info("Fetched %d position samples from OpenF1 for session_key=%s", len(positions), session_key)
    return positions
