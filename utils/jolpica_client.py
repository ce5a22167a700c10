"""
Typed fetch wrappers around the Jolpica (Ergast compatible) API.
"""
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from constants.api_endpoints import NEXT_RACE_API_URL, driver_standings_url, constructor_standings_url
from upstream_pydantic_models.jolpica_standings import GetJolpicaStandingsResponse, StandingsList
from upstream_pydantic_models.jolpica_schedule import GetJolpicaScheduleResponse, ScheduledRace
from utils.errors import UpstreamFetchError
from utils.http_client import fetch_json

logger = logging.getLogger(__name__)


async def _fetch_standings(client: httpx.AsyncClient, url: str) -> Optional[StandingsList]:
    payload = await fetch_json(client, url, params={"limit": 100})
    try:
        return GetJolpicaStandingsResponse.model_validate(payload).first_list()
    except ValidationError as e:
        raise UpstreamFetchError("Malformed standings payload", url=url) from e


async def fetch_driver_standings(client: httpx.AsyncClient, year: int) -> Optional[StandingsList]:
    """Latest driver standings table for a season, or None when the season has none yet."""
    return await _fetch_standings(client, driver_standings_url(year))


async def fetch_constructor_standings(client: httpx.AsyncClient, year: int) -> Optional[StandingsList]:
    """Latest constructor standings table for a season, or None when the season has none yet."""
    return await _fetch_standings(client, constructor_standings_url(year))


async def fetch_next_race(client: httpx.AsyncClient) -> Optional[ScheduledRace]:
    """The provider's own "next race" of the current season; None once the season is over."""
    payload = await fetch_json(client, NEXT_RACE_API_URL)
    try:
        races = GetJolpicaScheduleResponse.model_validate(payload).mr_data.race_table.races
    except ValidationError as e:
        raise UpstreamFetchError("Malformed schedule payload", url=NEXT_RACE_API_URL) from e
    logger.info("Fetched next race from Jolpica: %s", races[0].race_name if races else None)
    return races[0] if races else None
