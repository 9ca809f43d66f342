"""
Center location lookup via OpenStreetMap Nominatim.
"""

import logging
from typing import Optional, Tuple

import requests

from trackheat.utils.constants import (
    GEOCODER_TIMEOUT_SECONDS,
    GEOCODER_USER_AGENT,
    NOMINATIM_SEARCH_URL,
)
from trackheat.utils.env import USER_AGENT_ENV, env_str

logger = logging.getLogger(__name__)


def lookup_center(name: str, *, timeout_s: int = GEOCODER_TIMEOUT_SECONDS) -> Optional[Tuple[float, float]]:
    """
    Resolve a place name to (latitude, longitude).

    Returns None when the request fails or no place matches; the caller
    decides whether that is fatal.
    """
    params = {"q": name, "format": "json", "limit": 1}
    headers = {
        "User-Agent": env_str(USER_AGENT_ENV, GEOCODER_USER_AGENT),
        "Accept-Language": "en",
    }
    try:
        resp = requests.get(NOMINATIM_SEARCH_URL, params=params, headers=headers, timeout=timeout_s)
        resp.raise_for_status()
        results = resp.json() or []
    except (requests.RequestException, ValueError) as exc:
        logger.error(f"Geocoding request for {name!r} failed: {exc}")
        return None

    if not results:
        logger.error(f"No location found for {name!r}")
        return None

    try:
        lat = float(results[0]["lat"])
        lon = float(results[0]["lon"])
    except (KeyError, TypeError, ValueError) as exc:
        logger.error(f"Unexpected geocoder response for {name!r}: {exc}")
        return None

    logger.info(f"Found {name!r} at {lat}, {lon}")
    return lat, lon
