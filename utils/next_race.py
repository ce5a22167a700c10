"""
Next race weekend: session schedule with estimated end times and a race-day forecast.
"""
import logging
from datetime import datetime, timedelta
from typing import List, Optional, Tuple, Union

import httpx

from api_pydantic_models.next_race import NextRaceDetails, SeasonFinishedResponse, WeatherSnapshot, WeekendSession
from upstream_pydantic_models.jolpica_schedule import ScheduledRace, ScheduledSession
from utils import jolpica_client, weather_client
from utils.errors import UpstreamFetchError
from utils.time_utils import parse_schedule_datetime, resolve_now

logger = logging.getLogger(__name__)

# Estimated session lengths in minutes
PRACTICE_MINUTES = 60
SPRINT_QUALIFYING_MINUTES = 45
SPRINT_MINUTES = 60
QUALIFYING_MINUTES = 60
RACE_MINUTES = 120


def session_type_for(name: str) -> str:
    if "Practice" in name:
        return "Practice"
    if "Qualifying" in name:
        return "Qualifying"
    return "Race"


def create_session(name: str, scheduled: ScheduledSession, duration_minutes: int) -> WeekendSession:
    start = parse_schedule_datetime(scheduled.date, scheduled.time)
    return WeekendSession(
        session_name=name,
        session_type=session_type_for(name),
        date_start=start,
        date_end=start + timedelta(minutes=duration_minutes),
    )


def build_weekend_sessions(race: ScheduledRace) -> List[WeekendSession]:
    """Every session the schedule publishes, sorted by start time. The race itself is always present."""
    candidates: List[Tuple[str, Optional[ScheduledSession], int]] = [
        ("Practice 1", race.first_practice, PRACTICE_MINUTES),
        ("Practice 2", race.second_practice, PRACTICE_MINUTES),
        ("Practice 3", race.third_practice, PRACTICE_MINUTES),
        ("Sprint Qualifying", race.sprint_qualifying or race.sprint_shootout, SPRINT_QUALIFYING_MINUTES),
        ("Sprint", race.sprint, SPRINT_MINUTES),
        ("Qualifying", race.qualifying, QUALIFYING_MINUTES),
        ("Race", ScheduledSession(date=race.date, time=race.time), RACE_MINUTES),
    ]
    sessions = [
        create_session(name, scheduled, minutes)
        for name, scheduled, minutes in candidates
        if scheduled is not None
    ]
    sessions.sort(key=lambda s: s.date_start)
    return sessions


async def fetch_race_weather(client: httpx.AsyncClient, race: ScheduledRace) -> Optional[WeatherSnapshot]:
    """Best effort: any failure is logged and yields None."""
    location = race.circuit.location
    if location.lat is None or location.long is None:
        logger.info("No coordinates for %s, skipping weather", race.circuit.circuit_name)
        return None
    try:
        race_day = datetime.strptime(race.date, "%Y-%m-%d").date()
        return await weather_client.fetch_forecast(client, location.lat, location.long, race_day)
    except (UpstreamFetchError, ValueError) as e:
        logger.warning("Weather fetch failed, continuing without weather: %s", e)
        return None


async def get_next_race(
    client: httpx.AsyncClient,
    now: Optional[datetime] = None
) -> Union[NextRaceDetails, SeasonFinishedResponse]:
    """
    Next race weekend from the Jolpica schedule.

    Returns:
        NextRaceDetails, or SeasonFinishedResponse once the calendar is exhausted

    Raises:
        UpstreamFetchError: If the schedule itself cannot be fetched
    """
    race = await jolpica_client.fetch_next_race(client)
    if race is None:
        return SeasonFinishedResponse(next_season=resolve_now(now).year + 1)

    weather = await fetch_race_weather(client, race)
    return NextRaceDetails(
        circuit=race.circuit.circuit_name,
        location=race.circuit.location.locality,
        country=race.circuit.location.country,
        race_date=f"{race.date}T{race.time}" if race.time else race.date,
        meeting_key=race.round,
        sessions=build_weekend_sessions(race),
        weather=weather,
    )
