"""
Shared HTTP plumbing for the upstream gateways.
One AsyncClient is opened per incoming request and closed when the request ends.
"""
import logging
from typing import Any, AsyncIterator, Dict, Optional

import httpx

from config.dashboard_config import DashboardConfig
from utils.errors import UpstreamFetchError

logger = logging.getLogger(__name__)


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """FastAPI dependency yielding a request-scoped upstream client."""
    async with httpx.AsyncClient(timeout=DashboardConfig.HTTP_TIMEOUT) as client:
        yield client


async def fetch_json(
    client: httpx.AsyncClient,
    url: str,
    params: Optional[Dict[str, Any]] = None
) -> Any:
    """
    GET a JSON document from an upstream API.

    Args:
        client: Request-scoped HTTP client
        url: Absolute endpoint URL
        params: Query string parameters

    Returns:
        Decoded JSON body

    Raises:
        UpstreamFetchError: On transport errors, non-2xx statuses or an undecodable body
    """
    try:
        response = await client.get(url, params=params)
        response.raise_for_status()
        return response.json()
    except httpx.HTTPStatusError as e:
        logger.warning("Upstream returned %s for %s params=%s", e.response.status_code, url, params)
        raise UpstreamFetchError(
            f"Upstream returned {e.response.status_code}", url=url, status_code=e.response.status_code
        ) from e
    except httpx.HTTPError as e:
        logger.warning("Upstream request failed for %s params=%s: %s", url, params, e)
        raise UpstreamFetchError(f"Upstream request failed: {e}", url=url) from e
    except ValueError as e:
        logger.warning("Upstream returned a malformed body for %s params=%s", url, params)
        raise UpstreamFetchError("Upstream returned a malformed body", url=url) from e
