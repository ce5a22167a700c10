from typing import List, Optional

from api_pydantic_models.base import ApiBaseModel


class DriverStanding(ApiBaseModel):
    position: Optional[int] = None
    points: float
    wins: int
    driver_number: Optional[int] = None
    driver: str
    driver_acronym: Optional[str] = None
    team: str
    team_color: str
    nationality: Optional[str] = None
    # Jolpica has no headshots; the frontend falls back to a placeholder
    headshot_url: str = ""


class ConstructorStanding(ApiBaseModel):
    position: Optional[int] = None
    points: float
    wins: int
    team: str
    team_color: str
    nationality: Optional[str] = None
    wiki_url: Optional[str] = None


class GetDriverStandingsResponse(ApiBaseModel):
    season: int
    standings: List[DriverStanding]


class GetConstructorStandingsResponse(ApiBaseModel):
    season: int
    standings: List[ConstructorStanding]
