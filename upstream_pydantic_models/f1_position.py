"""
Pydantic models for OpenF1 position samples.
The first sample of a race session is the driver's grid slot.
"""
from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime


class F1PositionSample(BaseModel):
    """Model for a position sample from https://api.openf1.org/v1/position"""
    model_config = ConfigDict(extra="ignore")

    session_key: int
    driver_number: int
    date: Optional[datetime] = None
    position: Optional[int] = None
