"""
Dashboard configuration.
Centralized configuration to allow easy changes for Docker/deployment.
"""
import os
from typing import List


class DashboardConfig:
    """Upstream API and runtime configuration with environment variable support."""

    OPENF1_API_URL: str = os.getenv("OPENF1_API_URL", "https://api.openf1.org/v1")
    JOLPICA_API_URL: str = os.getenv("JOLPICA_API_URL", "https://api.jolpi.ca/ergast/f1")
    OPEN_METEO_API_URL: str = os.getenv("OPEN_METEO_API_URL", "https://api.open-meteo.com/v1")

    # Per-call timeout for every upstream request, in seconds
    HTTP_TIMEOUT: float = float(os.getenv("HTTP_TIMEOUT", "10"))

    # Pause between sessions when iterating a whole season
    SEASON_REQUEST_DELAY: float = float(os.getenv("SEASON_REQUEST_DELAY", "0.1"))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CORS_ALLOW_ORIGINS: str = os.getenv("CORS_ALLOW_ORIGINS", "*")

    @classmethod
    def get_cors_origins(cls) -> List[str]:
        """
        Get allowed CORS origins as a list.
        Accepts a comma separated value, e.g. "http://localhost:5173,https://example.com".
        """
        return [origin.strip() for origin in cls.CORS_ALLOW_ORIGINS.split(",") if origin.strip()]
