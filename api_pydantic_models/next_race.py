from datetime import datetime
from typing import List, Optional

from api_pydantic_models.base import ApiBaseModel


class WeatherSnapshot(ApiBaseModel):
    temp_max: Optional[float] = None
    temp_min: Optional[float] = None
    precip_prob: Optional[float] = None
    # WMO weather interpretation code
    weather_code: Optional[int] = None


class WeekendSession(ApiBaseModel):
    session_name: str
    session_type: str
    date_start: datetime
    date_end: datetime


class NextRaceDetails(ApiBaseModel):
    circuit: str
    location: str
    country: str
    race_date: str
    meeting_key: int
    sessions: List[WeekendSession]
    weather: Optional[WeatherSnapshot] = None


class SeasonFinishedResponse(ApiBaseModel):
    message: str = "Season finished"
    next_season: int
