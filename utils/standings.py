"""
Championship standings from Jolpica.
Points here are the official running totals, not recomputed locally.
"""
import logging
from datetime import datetime
from typing import Optional

import httpx

from api_pydantic_models.standings import (
    ConstructorStanding,
    DriverStanding,
    GetConstructorStandingsResponse,
    GetDriverStandingsResponse,
)
from upstream_pydantic_models.jolpica_standings import JolpicaConstructorStanding, JolpicaDriverStanding
from utils import jolpica_client
from utils.team_colors import resolve_team_color
from utils.time_utils import resolve_now

logger = logging.getLogger(__name__)


def convert_driver_standing(entry: JolpicaDriverStanding) -> DriverStanding:
    team = entry.constructors[0].name if entry.constructors else "Unknown"
    return DriverStanding(
        position=entry.position,
        points=entry.points,
        wins=entry.wins,
        driver_number=entry.driver.permanent_number,
        driver=entry.driver.full_name,
        driver_acronym=entry.driver.code,
        team=team,
        team_color=resolve_team_color(team),
        nationality=entry.driver.nationality,
    )


def convert_constructor_standing(entry: JolpicaConstructorStanding) -> ConstructorStanding:
    return ConstructorStanding(
        position=entry.position,
        points=entry.points,
        wins=entry.wins,
        team=entry.constructor.name,
        team_color=resolve_team_color(entry.constructor.name),
        nationality=entry.constructor.nationality,
        wiki_url=entry.constructor.url,
    )


async def get_driver_standings(
    client: httpx.AsyncClient,
    now: Optional[datetime] = None
) -> GetDriverStandingsResponse:
    year = resolve_now(now).year
    table = await jolpica_client.fetch_driver_standings(client, year)
    if table is None:
        logger.info("No driver standings published yet for %s", year)
        return GetDriverStandingsResponse(season=year, standings=[])

    standings = [convert_driver_standing(entry) for entry in table.driver_standings]
    return GetDriverStandingsResponse(season=table.season, standings=standings)


async def get_constructor_standings(
    client: httpx.AsyncClient,
    now: Optional[datetime] = None
) -> GetConstructorStandingsResponse:
    year = resolve_now(now).year
    table = await jolpica_client.fetch_constructor_standings(client, year)
    if table is None:
        logger.info("No constructor standings published yet for %s", year)
        return GetConstructorStandingsResponse(season=year, standings=[])

    standings = [convert_constructor_standing(entry) for entry in table.constructor_standings]
    return GetConstructorStandingsResponse(season=table.season, standings=standings)
