import os

from .config import CALENDAR_CACHE_TTL_SECONDS, DB_CONFIG, REPORT_CACHE_TTL_SECONDS, SECRET_KEY  # noqa: F401

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()

# If enabled, app will apply database/schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed the demo company on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
