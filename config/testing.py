import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_portal_test"),
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

# Tests never call the real geocoder
GEOCODER_ENABLED = False
ENRICHMENT_WORKERS = 1

LOCK_TIMEOUT_SECONDS = 2.0

LOG_LEVEL = "WARNING"
LOG_JSON = False
