"""
Error types raised by the aggregation layer.
"""
from typing import Optional


class DashboardError(Exception):
    """Base class for all dashboard aggregation errors."""


class NoSessionFoundError(DashboardError):
    """No completed or upcoming session could be located, even after the year fallback."""


class UpstreamFetchError(DashboardError):
    """An upstream call failed: transport error, non-2xx status or a malformed body."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class PartialDataWarning(UserWarning):
    """
    A single session could not be fetched during a season-wide iteration.
    Never raised; used to label the log record of the skipped session.
    """

    def __init__(self, session_key: int, circuit: str, reason: Exception):
        super().__init__(f"Skipping session {session_key} ({circuit}): {reason}")
        self.session_key = session_key
        self.circuit = circuit
        self.reason = reason
