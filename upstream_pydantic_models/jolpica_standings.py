"""
Pydantic models for Jolpica (Ergast compatible) standings responses.
Ergast serialises numbers as strings; pydantic coerces them on validation.
"""
from pydantic import Field
from typing import List, Optional

from upstream_pydantic_models.jolpica_base import JolpicaBaseModel


class JolpicaDriver(JolpicaBaseModel):
    driver_id: str = Field(alias="driverId")
    permanent_number: Optional[int] = Field(None, alias="permanentNumber")
    code: Optional[str] = None
    given_name: str = Field(alias="givenName")
    family_name: str = Field(alias="familyName")
    nationality: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.given_name} {self.family_name}"


class JolpicaConstructor(JolpicaBaseModel):
    constructor_id: str = Field(alias="constructorId")
    name: str
    nationality: Optional[str] = None
    url: Optional[str] = None


class JolpicaDriverStanding(JolpicaBaseModel):
    position: Optional[int] = None
    points: float = 0
    wins: int = 0
    driver: JolpicaDriver = Field(alias="Driver")
    constructors: List[JolpicaConstructor] = Field(default_factory=list, alias="Constructors")


class JolpicaConstructorStanding(JolpicaBaseModel):
    position: Optional[int] = None
    points: float = 0
    wins: int = 0
    constructor: JolpicaConstructor = Field(alias="Constructor")


class StandingsList(JolpicaBaseModel):
    season: int
    round: Optional[int] = None
    driver_standings: List[JolpicaDriverStanding] = Field(default_factory=list, alias="DriverStandings")
    constructor_standings: List[JolpicaConstructorStanding] = Field(
        default_factory=list, alias="ConstructorStandings"
    )


class StandingsTable(JolpicaBaseModel):
    season: Optional[int] = None
    standings_lists: List[StandingsList] = Field(default_factory=list, alias="StandingsLists")


class StandingsMRData(JolpicaBaseModel):
    standings_table: StandingsTable = Field(alias="StandingsTable")


class GetJolpicaStandingsResponse(JolpicaBaseModel):
    mr_data: StandingsMRData = Field(alias="MRData")

    def first_list(self) -> Optional[StandingsList]:
        lists = self.mr_data.standings_table.standings_lists
        return lists[0] if lists else None
