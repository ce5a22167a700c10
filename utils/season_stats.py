"""
Season-wide statistics aggregated from every completed race of the current season.

Sessions are processed one at a time, paced by a FixedDelayLimiter. A session whose
fetch fails is logged and skipped; it never aborts the whole aggregation.
Every call builds its own accumulators, nothing is shared between calls.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

import httpx

from api_pydantic_models.season_stats import (
    ConstructorWinEntry,
    DriverRacePositions,
    DriverSeasonStat,
    GetConstructorWinsResponse,
    GetDriverRacePositionsResponse,
    GetDriverSeasonStatsResponse,
)
from upstream_pydantic_models.f1_drivers import DriverInfo
from upstream_pydantic_models.f1_position import F1PositionSample
from upstream_pydantic_models.f1_sessions import F1Session, F1SessionResult
from utils import openf1_client
from utils.errors import PartialDataWarning, UpstreamFetchError
from utils.rate_limiter import FixedDelayLimiter, default_limiter
from utils.session_resolver import RACE_SESSION_NAME
from utils.team_colors import resolve_team_color
from utils.time_utils import resolve_now, to_utc

logger = logging.getLogger(__name__)


@dataclass
class DriverAccumulator:
    driver: str
    driver_acronym: str
    driver_number: int
    team: Optional[str]
    team_color: Optional[str]
    dnf_count: int = 0
    total_races: int = 0
    grid_positions: List[int] = field(default_factory=list)

    def to_stat(self) -> DriverSeasonStat:
        average = (
            sum(self.grid_positions) / len(self.grid_positions) if self.grid_positions else None
        )
        return DriverSeasonStat(
            driver=self.driver,
            driver_acronym=self.driver_acronym,
            driver_number=self.driver_number,
            team=self.team,
            team_color=self.team_color,
            dnf_count=self.dnf_count,
            total_races=self.total_races,
            average_grid_position=average,
        )


def is_not_classified(result: F1SessionResult) -> bool:
    return result.dnf or result.dns or result.dsq


def log_skipped_session(session: F1Session, reason: Exception) -> None:
    warning = PartialDataWarning(session.session_key, session.circuit_short_name, reason)
    logger.warning("%s: %s", type(warning).__name__, warning)


async def completed_race_sessions(
    client: httpx.AsyncClient,
    now: datetime,
    chronological: bool = False
) -> List[F1Session]:
    """
    Race sessions of `now`'s season that started before `now`.
    Upstream order unless `chronological`, which sorts by ascending start time.
    """
    sessions = await openf1_client.fetch_sessions(client, now.year, session_name=RACE_SESSION_NAME)
    completed = [s for s in sessions if to_utc(s.date_start) < now]
    if chronological:
        completed.sort(key=lambda s: to_utc(s.date_start))
    return completed


def grid_positions(samples: Sequence[F1PositionSample]) -> Dict[int, int]:
    """First valid position sample per driver, i.e. the grid slot."""
    ordered = sorted(
        (s for s in samples if s.position is not None and s.position > 0),
        key=lambda s: (s.date is None, to_utc(s.date) if s.date else None),
    )
    grid: Dict[int, int] = {}
    for sample in ordered:
        grid.setdefault(sample.driver_number, sample.position)
    return grid


async def driver_season_stats(
    client: httpx.AsyncClient,
    now: Optional[datetime] = None,
    limiter: Optional[FixedDelayLimiter] = None
) -> GetDriverSeasonStatsResponse:
    """DNF counts, races started and average grid position per driver (keyed by acronym)."""
    current = resolve_now(now)
    if limiter is None:
        limiter = default_limiter()
    sessions = await completed_race_sessions(client, current)
    if not sessions:
        return GetDriverSeasonStatsResponse(season=current.year, stats=[])

    accumulators: Dict[str, DriverAccumulator] = {}
    for session in sessions:
        await limiter.wait()
        try:
            results, drivers, positions = await asyncio.gather(
                openf1_client.fetch_session_results(client, session.session_key),
                openf1_client.fetch_drivers(client, session.session_key),
                openf1_client.fetch_positions(client, session.session_key),
            )
        except UpstreamFetchError as e:
            log_skipped_session(session, e)
            continue

        if not results:
            continue

        driver_map = {d.driver_number: d for d in drivers}
        grid = grid_positions(positions)

        for result in results:
            info = driver_map.get(result.driver_number)
            # Aggregates are keyed by acronym; entries without one cannot be grouped
            if info is None or not info.name_acronym:
                continue

            acc = accumulators.get(info.name_acronym)
            if acc is None:
                acc = DriverAccumulator(
                    driver=info.full_name or info.name_acronym,
                    driver_acronym=info.name_acronym,
                    driver_number=result.driver_number,
                    team=info.team_name,
                    team_color=info.team_colour,
                )
                accumulators[info.name_acronym] = acc

            acc.total_races += 1
            if is_not_classified(result):
                acc.dnf_count += 1
            if result.driver_number in grid:
                acc.grid_positions.append(grid[result.driver_number])

    stats = sorted((acc.to_stat() for acc in accumulators.values()), key=lambda s: s.driver_acronym)
    logger.info("Aggregated driver stats for %d drivers over %d sessions", len(stats), len(sessions))
    return GetDriverSeasonStatsResponse(season=current.year, stats=stats)


async def _race_winner_team(
    client: httpx.AsyncClient,
    session: F1Session
) -> Optional[str]:
    results = await openf1_client.fetch_session_results(client, session.session_key)
    winner = next((r for r in results if r.position == 1), None)
    if winner is None:
        return None

    drivers = await openf1_client.fetch_drivers(
        client, session.session_key, driver_number=winner.driver_number
    )
    if not drivers:
        return None
    return drivers[0].team_name


async def constructor_wins(
    client: httpx.AsyncClient,
    now: Optional[datetime] = None,
    limiter: Optional[FixedDelayLimiter] = None
) -> GetConstructorWinsResponse:
    """Race wins per constructor, most wins first."""
    current = resolve_now(now)
    if limiter is None:
        limiter = default_limiter()
    sessions = await completed_race_sessions(client, current)

    wins: Dict[str, ConstructorWinEntry] = {}
    for session in sessions:
        await limiter.wait()
        try:
            team = await _race_winner_team(client, session)
        except UpstreamFetchError as e:
            log_skipped_session(session, e)
            continue

        if not team:
            logger.info("No winner found for session_key=%s, skipping", session.session_key)
            continue

        entry = wins.get(team)
        if entry is None:
            entry = ConstructorWinEntry(team=team, team_color=resolve_team_color(team), wins=0)
            wins[team] = entry
        entry.wins += 1

    ranked = sorted(wins.values(), key=lambda w: w.wins, reverse=True)
    return GetConstructorWinsResponse(season=current.year, wins=ranked)


async def _fetch_race_positions_data(
    client: httpx.AsyncClient,
    session: F1Session
) -> Tuple[List[F1SessionResult], List[DriverInfo]]:
    results, drivers = await asyncio.gather(
        openf1_client.fetch_session_results(client, session.session_key),
        openf1_client.fetch_drivers(client, session.session_key),
    )
    return results, drivers


async def driver_race_positions(
    client: httpx.AsyncClient,
    now: Optional[datetime] = None,
    limiter: Optional[FixedDelayLimiter] = None
) -> GetDriverRacePositionsResponse:
    """
    Finishing position of every driver in every completed race, in calendar order.
    Each driver's positions list is aligned with `races`: one slot per race,
    None where the driver did not take part or was not classified.
    """
    current = resolve_now(now)
    if limiter is None:
        limiter = default_limiter()
    sessions = await completed_race_sessions(client, current, chronological=True)

    races: List[str] = []
    drivers_by_acronym: Dict[str, DriverRacePositions] = {}

    for session in sessions:
        await limiter.wait()
        try:
            results, roster = await _fetch_race_positions_data(client, session)
        except UpstreamFetchError as e:
            log_skipped_session(session, e)
            continue

        if not results:
            logger.warning("No results for %s, skipping", session.circuit_short_name)
            continue

        # Only count the race once its data is in hand
        races.append(session.circuit_short_name)

        for driver in roster:
            if driver.name_acronym and driver.name_acronym not in drivers_by_acronym:
                drivers_by_acronym[driver.name_acronym] = DriverRacePositions(
                    driver_name=driver.full_name or driver.name_acronym,
                    driver_acronym=driver.name_acronym,
                    team_color=driver.team_colour,
                    positions=[None] * (len(races) - 1),
                )

        for entry in drivers_by_acronym.values():
            while len(entry.positions) < len(races):
                entry.positions.append(None)

        driver_map = {d.driver_number: d for d in roster}
        for result in results:
            info = driver_map.get(result.driver_number)
            if info is None or not info.name_acronym:
                continue
            position = None if is_not_classified(result) else result.position
            drivers_by_acronym[info.name_acronym].positions[-1] = position

    return GetDriverRacePositionsResponse(
        season=current.year,
        races=races,
        drivers=list(drivers_by_acronym.values()),
    )
