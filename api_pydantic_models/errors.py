from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Fixed error shape returned by every route on failure."""
    message: str
