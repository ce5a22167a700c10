from datetime import datetime
from typing import Optional

from api_pydantic_models.base import ApiBaseModel


class UpcomingSession(ApiBaseModel):
    session_key: int
    session_name: str
    circuit: str
    location: str
    country: str
    date_start: datetime
    date_end: Optional[datetime] = None
    meeting_key: int
