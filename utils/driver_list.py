"""
Driver roster of the latest race, for selectors in the dashboard.
"""
import logging
from datetime import datetime
from typing import List, Optional

import httpx

from api_pydantic_models.drivers import DriverListEntry
from utils import openf1_client
from utils.errors import UpstreamFetchError
from utils.session_resolver import latest_completed_race_session

logger = logging.getLogger(__name__)

UNKNOWN_DRIVER = "Unknown"


async def get_driver_list(
    client: httpx.AsyncClient,
    now: Optional[datetime] = None
) -> List[DriverListEntry]:
    """
    Drivers of the latest completed race, de-duplicated by number.
    Fails soft: returns an empty list when there is no session or the roster fetch fails.
    """
    lookup = await latest_completed_race_session(client, now=now)
    if not lookup.found:
        return []

    try:
        drivers = await openf1_client.fetch_drivers(client, lookup.session.session_key)
    except UpstreamFetchError as e:
        logger.error("Error fetching driver list for session_key=%s: %s", lookup.session.session_key, e)
        return []

    seen = set()
    driver_list: List[DriverListEntry] = []
    for driver in drivers:
        if driver.driver_number in seen:
            continue
        seen.add(driver.driver_number)
        driver_list.append(DriverListEntry(
            number=driver.driver_number,
            name=driver.full_name or UNKNOWN_DRIVER,
            acronym=driver.name_acronym,
            team=driver.team_name,
            headshot_url=driver.headshot_url,
        ))
    return driver_list
