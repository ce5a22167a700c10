"""
Last race results enriched with driver identity, fastest laps and locally computed points.
"""
import asyncio
import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

import httpx

from api_pydantic_models.race_results import GetLastRaceResultsResponse, SessionInfo, StandingEntry
from upstream_pydantic_models.f1_drivers import DriverInfo
from upstream_pydantic_models.f1_laps import F1LapData
from upstream_pydantic_models.f1_sessions import F1Session, F1SessionResult
from utils import openf1_client
from utils.errors import NoSessionFoundError
from utils.session_resolver import latest_completed_race_session
from utils.team_colors import resolve_team_color
from utils.time_utils import format_race_time

logger = logging.getLogger(__name__)

# Championship points for P1..P10
POINTS_TABLE: Tuple[int, ...] = (25, 18, 15, 12, 10, 8, 6, 4, 2, 1)
FASTEST_LAP_BONUS = 1
FASTEST_LAP_BONUS_CUTOFF = 10

UNKNOWN = "Unknown"


def points_for_position(position: Optional[int]) -> int:
    if position is None or position < 1 or position > len(POINTS_TABLE):
        return 0
    return POINTS_TABLE[position - 1]


def personal_fastest_laps(laps: Iterable[F1LapData]) -> Dict[int, float]:
    """Each driver's quickest valid lap, keyed by driver number."""
    fastest: Dict[int, float] = {}
    for lap in laps:
        if lap.lap_duration is None:
            continue
        best = fastest.get(lap.driver_number)
        if best is None or lap.lap_duration < best:
            fastest[lap.driver_number] = lap.lap_duration
    return fastest


def session_fastest_lap(laps: Iterable[F1LapData]) -> Tuple[Optional[int], Optional[float]]:
    """(driver_number, lap_duration) of the quickest valid lap of the session, (None, None) without one."""
    valid_laps = [lap for lap in laps if lap.lap_duration is not None]
    if not valid_laps:
        return None, None
    # min() keeps the first of equal laps, i.e. the one upstream listed first
    fastest = min(valid_laps, key=lambda lap: lap.lap_duration)
    return fastest.driver_number, fastest.lap_duration


def result_time(result: F1SessionResult) -> str:
    if result.dsq:
        return "DSQ"
    if result.dns:
        return "DNS"
    if result.dnf:
        return "DNF"
    formatted = format_race_time(result.duration)
    if formatted is not None:
        return formatted
    if isinstance(result.gap_to_leader, str):
        return result.gap_to_leader
    return "DNF"


def build_standings(
    results: List[F1SessionResult],
    drivers: List[DriverInfo],
    laps: List[F1LapData]
) -> List[StandingEntry]:
    """
    Join one session's results with its roster and laps.
    Sorted by finishing position; unclassified results (no position) go last.
    Every result yields exactly one entry, even when the driver is missing from the roster.
    """
    driver_map = {driver.driver_number: driver for driver in drivers}
    fastest_driver_number, _ = session_fastest_lap(laps)
    driver_fastest_laps = personal_fastest_laps(laps)

    sorted_results = sorted(results, key=lambda r: (r.position is None, r.position or 0))

    standings: List[StandingEntry] = []
    for result in sorted_results:
        info = driver_map.get(result.driver_number)
        has_fastest_lap = (
            fastest_driver_number is not None and result.driver_number == fastest_driver_number
        )

        points = points_for_position(result.position)
        if has_fastest_lap and result.position is not None and result.position <= FASTEST_LAP_BONUS_CUTOFF:
            points += FASTEST_LAP_BONUS

        team = (info.team_name if info else None) or UNKNOWN
        team_color = info.team_colour if info and info.team_colour else resolve_team_color(team)

        standings.append(StandingEntry(
            position=result.position,
            driver=(info.full_name if info else None) or UNKNOWN,
            driver_acronym=info.name_acronym if info else None,
            driver_number=result.driver_number,
            team=team,
            team_color=team_color,
            points=points,
            has_fastest_lap=has_fastest_lap,
            fastest_lap_time=driver_fastest_laps.get(result.driver_number),
            gap_to_leader=result.gap_to_leader if result.gap_to_leader is not None else 0,
            time=result_time(result),
            headshot_url=info.headshot_url if info else None,
            country_code=info.country_code if info else None,
            dnf=result.dnf,
            dns=result.dns,
            dsq=result.dsq,
        ))
    return standings


def build_session_info(session: F1Session, laps: List[F1LapData]) -> SessionInfo:
    _, fastest_lap_time = session_fastest_lap(laps)
    return SessionInfo(
        circuit=session.circuit_short_name,
        location=session.location,
        country=session.country_name,
        date=session.date_start,
        name=session.session_name,
        fastest_lap_time=fastest_lap_time or 0,
    )


async def get_last_race_results(
    client: httpx.AsyncClient,
    now: Optional[datetime] = None
) -> GetLastRaceResultsResponse:
    """
    Results of the most recent completed race.

    Raises:
        NoSessionFoundError: If no completed race session exists this year or last year
        UpstreamFetchError: If any of the per-session fetches fails
    """
    lookup = await latest_completed_race_session(client, now=now)
    if not lookup.found:
        raise NoSessionFoundError("No completed race session found")
    session = lookup.session

    logger.info("Fetching results for: %s - %s", session.session_name, session.circuit_short_name)
    results, drivers, laps = await asyncio.gather(
        openf1_client.fetch_session_results(client, session.session_key),
        openf1_client.fetch_drivers(client, session.session_key),
        openf1_client.fetch_laps(client, session.session_key),
    )

    return GetLastRaceResultsResponse(
        session_info=build_session_info(session, laps),
        standings=build_standings(results, drivers, laps),
    )
