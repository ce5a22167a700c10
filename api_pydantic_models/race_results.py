from datetime import datetime
from typing import List, Optional, Union

from api_pydantic_models.base import ApiBaseModel


class SessionInfo(ApiBaseModel):
    circuit: str
    location: str
    country: str
    date: datetime
    name: str
    # Session-wide fastest lap in seconds, 0 when no valid lap was timed
    fastest_lap_time: float = 0


class StandingEntry(ApiBaseModel):
    position: Optional[int] = None
    driver: str
    driver_acronym: Optional[str] = None
    driver_number: int
    team: str
    team_color: str
    points: int
    has_fastest_lap: bool = False
    fastest_lap_time: Optional[float] = None
    # float seconds for classified cars, '+1 LAP' style strings for lapped ones
    gap_to_leader: Union[float, int, str] = 0
    time: str
    headshot_url: Optional[str] = None
    country_code: Optional[str] = None
    dnf: bool = False
    dns: bool = False
    dsq: bool = False


class GetLastRaceResultsResponse(ApiBaseModel):
    session_info: SessionInfo
    standings: List[StandingEntry]
