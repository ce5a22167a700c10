"""
Pydantic models for the Open-Meteo daily forecast API.
https://open-meteo.com/en/docs
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class DailyForecast(BaseModel):
    """One entry per requested day; we always ask for a single day."""
    model_config = ConfigDict(extra="ignore")

    time: List[str] = Field(default_factory=list)
    weather_code: List[Optional[int]] = Field(default_factory=list)
    temperature_2m_max: List[Optional[float]] = Field(default_factory=list)
    temperature_2m_min: List[Optional[float]] = Field(default_factory=list)
    precipitation_probability_max: List[Optional[float]] = Field(default_factory=list)


class GetForecastResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    latitude: Optional[float] = None
    longitude: Optional[float] = None
    timezone: Optional[str] = None
    daily: Optional[DailyForecast] = None
