from __future__ import annotations

import math
from typing import Any, Optional

from ..core.exceptions import ValidationError
from .geo import GeoPoint


def require_location(latitude: Any, longitude: Any) -> GeoPoint:
    """Validate a coordinate pair coming from a client payload."""
    try:
        lat = float(latitude)
        lon = float(longitude)
    except (TypeError, ValueError):
        raise ValidationError("Latitude and longitude must be numbers")

    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise ValidationError("Latitude and longitude must be finite")
    if not -90.0 <= lat <= 90.0 or not -180.0 <= lon <= 180.0:
        raise ValidationError("Latitude and longitude are out of range")
    return GeoPoint(latitude=lat, longitude=lon)


def optional_location(latitude: Any, longitude: Any) -> Optional[GeoPoint]:
    if latitude is None and longitude is None:
        return None
    if latitude is None or longitude is None:
        raise ValidationError("Both latitude and longitude are required")
    return require_location(latitude, longitude)
