"""
Pydantic models for OpenF1 API lap data responses.
Only the fields needed to derive fastest laps are kept.
"""
from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime


class F1LapData(BaseModel):
    """
    Model representing a single lap from OpenF1 API.
    Matches the structure returned by https://api.openf1.org/v1/laps
    """
    model_config = ConfigDict(extra="ignore")

    session_key: int
    driver_number: int
    lap_number: Optional[int] = None
    date_start: Optional[datetime] = None
    is_pit_out_lap: bool = False
    # None for laps without a valid timing (in/out laps, red flag laps)
    lap_duration: Optional[float] = None
