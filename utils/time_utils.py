"""
Datetime helpers.
Everything is compared in UTC; OpenF1 timestamps carry an offset, Jolpica ones end in 'Z'.
"""
from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(tz=timezone.utc)


def resolve_now(now: Optional[datetime]) -> datetime:
    """Use the injected clock value when given, otherwise the wall clock."""
    return to_utc(now) if now is not None else utc_now()


def to_utc(dt: datetime) -> datetime:
    """
    Normalize datetime to timezone-aware UTC.
    If datetime is naive, assume it is already UTC.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_schedule_datetime(date_str: str, time_str: Optional[str]) -> datetime:
    """
    Combine an Ergast date ('2025-03-16') and time ('04:00:00Z') into a UTC datetime.
    A missing time means the provider has not published it yet; midnight UTC is used.
    """
    time_part = time_str or "00:00:00Z"
    if time_part.endswith("Z"):
        time_part = time_part[:-1] + "+00:00"
    return to_utc(datetime.fromisoformat(f"{date_str}T{time_part}"))


def format_race_time(seconds: Optional[float]) -> Optional[str]:
    """Format a race duration in seconds as H:MM:SS.mmm, e.g. 5423.123 -> '1:30:23.123'."""
    if seconds is None:
        return None
    millis = int(round(seconds * 1000))
    hours, millis = divmod(millis, 3_600_000)
    minutes, millis = divmod(millis, 60_000)
    secs, millis = divmod(millis, 1000)
    return f"{hours}:{minutes:02d}:{secs:02d}.{millis:03d}"
