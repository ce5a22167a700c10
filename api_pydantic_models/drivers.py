from typing import Optional

from api_pydantic_models.base import ApiBaseModel


class DriverListEntry(ApiBaseModel):
    number: int
    name: str
    acronym: Optional[str] = None
    team: Optional[str] = None
    headshot_url: Optional[str] = None
