"""
Pydantic models for the Jolpica race schedule (`/current/next.json`).
"""
from pydantic import Field
from typing import List, Optional

from upstream_pydantic_models.jolpica_base import JolpicaBaseModel


class CircuitLocation(JolpicaBaseModel):
    # Provisional calendar entries can lack coordinates
    lat: Optional[float] = None
    long: Optional[float] = None
    locality: str
    country: str


class Circuit(JolpicaBaseModel):
    circuit_id: Optional[str] = Field(None, alias="circuitId")
    circuit_name: str = Field(alias="circuitName")
    location: CircuitLocation = Field(alias="Location")


class ScheduledSession(JolpicaBaseModel):
    date: str
    # Ergast omits the time for some historical and provisional sessions
    time: Optional[str] = None


class ScheduledRace(JolpicaBaseModel):
    season: int
    round: int
    race_name: str = Field(alias="raceName")
    circuit: Circuit = Field(alias="Circuit")
    date: str
    time: Optional[str] = None
    first_practice: Optional[ScheduledSession] = Field(None, alias="FirstPractice")
    second_practice: Optional[ScheduledSession] = Field(None, alias="SecondPractice")
    third_practice: Optional[ScheduledSession] = Field(None, alias="ThirdPractice")
    sprint_qualifying: Optional[ScheduledSession] = Field(None, alias="SprintQualifying")
    # 2023 name of the sprint qualifying session
    sprint_shootout: Optional[ScheduledSession] = Field(None, alias="SprintShootout")
    sprint: Optional[ScheduledSession] = Field(None, alias="Sprint")
    qualifying: Optional[ScheduledSession] = Field(None, alias="Qualifying")


class RaceTable(JolpicaBaseModel):
    season: Optional[int] = None
    races: List[ScheduledRace] = Field(default_factory=list, alias="Races")


class ScheduleMRData(JolpicaBaseModel):
    race_table: RaceTable = Field(alias="RaceTable")


class GetJolpicaScheduleResponse(JolpicaBaseModel):
    mr_data: ScheduleMRData = Field(alias="MRData")
