"""
Pytest fixtures for the dashboard aggregation tests.
"""
from datetime import datetime, timezone

import pytest

from upstream_stub import UpstreamStub
from utils.rate_limiter import FixedDelayLimiter


@pytest.fixture
def now() -> datetime:
    """Mid-season clock: races before June 2025 are completed."""
    return datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def upstream() -> UpstreamStub:
    return UpstreamStub()


@pytest.fixture
def no_delay() -> FixedDelayLimiter:
    return FixedDelayLimiter(0)
