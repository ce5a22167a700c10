from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional, Union


class F1Session(BaseModel):
    # https://openf1.org/#sessions
    model_config = ConfigDict(extra="ignore")

    circuit_key: Optional[int] = None
    circuit_short_name: str
    country_code: Optional[str] = None
    country_key: Optional[int] = None
    country_name: str
    date_end: Optional[datetime] = None
    date_start: datetime
    gmt_offset: Optional[str] = None
    location: str
    meeting_key: int
    session_key: int
    session_name: str
    session_type: Optional[str] = None
    year: int


class F1SessionResult(BaseModel):
    # https://openf1.org/#session-result
    model_config = ConfigDict(extra="ignore")

    dnf: bool = False
    dns: bool = False
    dsq: bool = False
    driver_number: int
    number_of_laps: Optional[int] = None
    meeting_key: Union[int, str, None] = None
    session_key: int

    # 'duration' is the total race time in seconds, None for non-classified drivers
    duration: Union[float, None] = None
    # 'gap_to_leader' can be a float, an int (0 for the leader), a string ('+1 LAP'), or None.
    gap_to_leader: Union[float, str, int, None] = None
    position: Union[int, None] = None
