from __future__ import annotations

from typing import Protocol

from ..core.exceptions import GeocodeUnavailable


class GeocodeResolver(Protocol):
    """Coordinates -> human readable address.

    Implementations must return within a bounded time and raise
    GeocodeUnavailable for every kind of failure (timeout, transport, empty result).
    """

    def reverse(self, latitude: float, longitude: float) -> str:
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError


class DisabledGeocodeResolver(GeocodeResolver):
    """Used when geocoding is switched off in settings."""

    def reverse(self, latitude: float, longitude: float) -> str:
        raise GeocodeUnavailable("Geocoding is disabled")

    def close(self) -> None:
        return None
