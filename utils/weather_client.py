"""
Open-Meteo daily forecast lookup for a race date and circuit location.
"""
import logging
from datetime import date
from typing import Optional

import httpx
from pydantic import ValidationError

from api_pydantic_models.next_race import WeatherSnapshot
from constants.api_endpoints import WEATHER_FORECAST_API_URL
from upstream_pydantic_models.open_meteo import GetForecastResponse
from utils.errors import UpstreamFetchError
from utils.http_client import fetch_json

logger = logging.getLogger(__name__)

DAILY_FIELDS = "weather_code,temperature_2m_max,temperature_2m_min,precipitation_probability_max"


async def fetch_forecast(
    client: httpx.AsyncClient,
    lat: float,
    lon: float,
    day: date
) -> Optional[WeatherSnapshot]:
    """
    Fetch the forecast for a single day at a location.

    Returns:
        WeatherSnapshot, or None when the provider has no daily block for that day
        (e.g. the date is beyond the forecast horizon)

    Raises:
        UpstreamFetchError: If the request fails or the body is malformed
    """
    parameters = {
        "latitude": lat,
        "longitude": lon,
        "daily": DAILY_FIELDS,
        "timezone": "auto",
        "start_date": day.isoformat(),
        "end_date": day.isoformat(),
    }
    payload = await fetch_json(client, WEATHER_FORECAST_API_URL, params=parameters)
    try:
        forecast = GetForecastResponse.model_validate(payload)
    except ValidationError as e:
        raise UpstreamFetchError("Malformed forecast payload", url=WEATHER_FORECAST_API_URL) from e

    daily = forecast.daily
    if daily is None or not daily.time:
        logger.info("No daily forecast for lat=%s lon=%s date=%s", lat, lon, day)
        return None

    return WeatherSnapshot(
        temp_max=_first(daily.temperature_2m_max),
        temp_min=_first(daily.temperature_2m_min),
        precip_prob=_first(daily.precipitation_probability_max),
        weather_code=_first(daily.weather_code),
    )


def _first(values):
    return values[0] if values else None
