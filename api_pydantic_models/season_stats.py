from typing import List, Optional

from api_pydantic_models.base import ApiBaseModel


class DriverSeasonStat(ApiBaseModel):
    driver: str
    driver_acronym: str
    driver_number: int
    team: Optional[str] = None
    team_color: Optional[str] = None
    dnf_count: int
    total_races: int
    average_grid_position: Optional[float] = None


class GetDriverSeasonStatsResponse(ApiBaseModel):
    season: int
    stats: List[DriverSeasonStat]


class ConstructorWinEntry(ApiBaseModel):
    team: str
    team_color: str
    wins: int


class GetConstructorWinsResponse(ApiBaseModel):
    season: int
    wins: List[ConstructorWinEntry]


class DriverRacePositions(ApiBaseModel):
    driver_name: str
    driver_acronym: str
    team_color: Optional[str] = None
    # One slot per entry of the response's races list, None when absent or not classified
    positions: List[Optional[int]]


class GetDriverRacePositionsResponse(ApiBaseModel):
    season: int
    races: List[str]
    drivers: List[DriverRacePositions]
