"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

FULL_DAY_HOURS = 6.0
FULL_DAY_CREDIT = 1.0
HALF_DAY_CREDIT = 0.5

DEFAULT_GEOCODER_URL = "https://nominatim.openstreetmap.org/reverse"
DEFAULT_GEOCODER_TIMEOUT_SECONDS = 10.0
DEFAULT_GEOCODER_USER_AGENT = "HR-Portal/1.0 (attendance address lookup)"
DEFAULT_ENRICHMENT_WORKERS = 4
DEFAULT_LOCK_TIMEOUT_SECONDS = 10.0

LOCATION_NOT_AVAILABLE = "Location not available"
NO_COMPANY = "No Company"
