"""
Fixed-delay pacing for season-wide loops.
OpenF1 is a free public API; season aggregation fetches one session at a time and
pauses between sessions so a single dashboard request does not trip its throttling.
"""
import asyncio
from typing import Optional

from config.dashboard_config import DashboardConfig


class FixedDelayLimiter:
    """Sleeps a fixed delay before every call to wait() except the first."""

    def __init__(self, delay_seconds: float):
        if delay_seconds < 0:
            raise ValueError("delay_seconds must be >= 0")
        self.delay_seconds = delay_seconds
        self.calls = 0

    async def wait(self) -> None:
        if self.calls > 0 and self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)
        self.calls += 1


def default_limiter(delay_seconds: Optional[float] = None) -> FixedDelayLimiter:
    """A fresh limiter per aggregation call, paced by SEASON_REQUEST_DELAY unless overridden."""
    if delay_seconds is None:
        delay_seconds = DashboardConfig.SEASON_REQUEST_DELAY
    return FixedDelayLimiter(delay_seconds)
