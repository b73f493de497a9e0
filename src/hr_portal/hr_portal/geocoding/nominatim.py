from __future__ import annotations

from typing import Optional

import requests

from ..core.constants import (
    DEFAULT_GEOCODER_TIMEOUT_SECONDS,
    DEFAULT_GEOCODER_URL,
    DEFAULT_GEOCODER_USER_AGENT,
)
from ..core.exceptions import GeocodeUnavailable
from ..core.logging_config import get_logger
from .resolver import GeocodeResolver

logger = get_logger("geocoding.nominatim")


class NominatimGeocodeResolver(GeocodeResolver):
    """Reverse geocoding against an OpenStreetMap Nominatim endpoint.

    One pooled ``requests.Session`` per resolver; construct once at startup,
    inject where needed and ``close()`` on shutdown.
    """

    def __init__(
        self,
        *,
        url: str = DEFAULT_GEOCODER_URL,
        timeout_seconds: float = DEFAULT_GEOCODER_TIMEOUT_SECONDS,
        user_agent: str = DEFAULT_GEOCODER_USER_AGENT,
        session: Optional[requests.Session] = None,
    ):
        self._url = url
        self._timeout = float(timeout_seconds)
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": user_agent, "Accept": "application/json"})

    def reverse(self, latitude: float, longitude: float) -> str:
        params = {"format": "jsonv2", "lat": latitude, "lon": longitude}
        try:
            resp = self._session.get(self._url, params=params, timeout=self._timeout)
            resp.raise_for_status()
            payload = resp.json()
        except requests.Timeout as e:
            raise GeocodeUnavailable(f"Geocoder timed out after {self._timeout:g}s") from e
        except (requests.RequestException, ValueError) as e:
            raise GeocodeUnavailable(f"Geocoder request failed: {e}") from e

        if not isinstance(payload, dict):
            raise GeocodeUnavailable("Unexpected geocoder response")
        address = payload.get("display_name")
        if not address:
            raise GeocodeUnavailable(payload.get("error") or "No address for coordinates")

        logger.debug("reverse geocoded", extra={"latitude": latitude, "longitude": longitude})
        return str(address)

    def close(self) -> None:
        self._session.close()
