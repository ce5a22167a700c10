"""
Session discovery: the latest completed race and the next upcoming session.
Both lookups fail soft and return an empty SessionLookup instead of raising,
so callers always handle the "no session available" case explicitly.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

import httpx

from upstream_pydantic_models.f1_sessions import F1Session
from utils import openf1_client
from utils.errors import UpstreamFetchError
from utils.time_utils import resolve_now, to_utc

logger = logging.getLogger(__name__)

RACE_SESSION_NAME = "Race"


@dataclass(frozen=True)
class SessionLookup:
    """Result of a session lookup: either a session or nothing."""
    session: Optional[F1Session] = None
    year: Optional[int] = None

    @property
    def found(self) -> bool:
        return self.session is not None


def candidate_years(now: datetime) -> List[int]:
    """Years to try, in order: the current season, then the previous one (early-season gap)."""
    return [now.year, now.year - 1]


async def fetch_sessions_with_fallback(
    client: httpx.AsyncClient,
    years: Sequence[int],
    session_name: Optional[str] = None
) -> Tuple[List[F1Session], Optional[int]]:
    """
    Return the sessions of the first year in `years` that has any, with that year.
    ([], None) when none of them has sessions.
    """
    for year in years:
        sessions = await openf1_client.fetch_sessions(client, year, session_name=session_name)
        if sessions:
            return sessions, year
        logger.info("No %s sessions found for %s", session_name or "any", year)
    return [], None


def pick_latest_completed(sessions: Sequence[F1Session], now: datetime) -> Optional[F1Session]:
    """Most recent session that started strictly before `now`."""
    completed = [s for s in sessions if to_utc(s.date_start) < now]
    completed.sort(key=lambda s: to_utc(s.date_start), reverse=True)
    return completed[0] if completed else None


def pick_next_upcoming(sessions: Sequence[F1Session], now: datetime) -> Optional[F1Session]:
    """Earliest session starting strictly after `now`, preferring one named "Race"."""
    upcoming = sorted(
        (s for s in sessions if to_utc(s.date_start) > now),
        key=lambda s: to_utc(s.date_start),
    )
    if not upcoming:
        return None
    for session in upcoming:
        if session.session_name == RACE_SESSION_NAME:
            return session
    return upcoming[0]


async def latest_completed_race_session(
    client: httpx.AsyncClient,
    now: Optional[datetime] = None
) -> SessionLookup:
    current = resolve_now(now)
    try:
        sessions, year = await fetch_sessions_with_fallback(
            client, candidate_years(current), session_name=RACE_SESSION_NAME
        )
    except UpstreamFetchError as e:
        logger.error("Error fetching race sessions: %s", e)
        return SessionLookup()

    session = pick_latest_completed(sessions, current)
    if session is None:
        return SessionLookup()
    logger.info("Latest completed race: %s %s (session_key=%s)",
                session.circuit_short_name, session.year, session.session_key)
    return SessionLookup(session=session, year=year)


async def next_upcoming_race_session(
    client: httpx.AsyncClient,
    now: Optional[datetime] = None
) -> SessionLookup:
    """
    Scan all of the current season's sessions for the next one to start.
    No year fallback: an exhausted calendar means the season is finished.
    """
    current = resolve_now(now)
    try:
        sessions = await openf1_client.fetch_sessions(client, current.year)
    except UpstreamFetchError as e:
        logger.error("Error fetching sessions for %s: %s", current.year, e)
        return SessionLookup()

    session = pick_next_upcoming(sessions, current)
    if session is None:
        return SessionLookup()
    return SessionLookup(session=session, year=current.year)
