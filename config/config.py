import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "hr-payroll-dev-secret"

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "hr_payroll")

    # Derived-data cache lifetimes, seconds
    REPORT_CACHE_TTL_SECONDS = int(os.environ.get("REPORT_CACHE_TTL_SECONDS", "300"))
    CALENDAR_CACHE_TTL_SECONDS = int(os.environ.get("CALENDAR_CACHE_TTL_SECONDS", "180"))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    # Dev helpers
    AUTO_INIT_DB = bool(int(os.environ.get("AUTO_INIT_DB", "0")))
    AUTO_SEED_DB = bool(int(os.environ.get("AUTO_SEED_DB", "0")))


SECRET_KEY = Config.SECRET_KEY
DB_CONFIG = {
    "host": Config.DB_HOST,
    "port": Config.DB_PORT,
    "user": Config.DB_USER,
    "password": Config.DB_PASSWORD,
    "database": Config.DB_NAME,
}

DEBUG = bool(int(os.environ.get("DEBUG", "1")))
LOG_LEVEL = Config.LOG_LEVEL

REPORT_CACHE_TTL_SECONDS = Config.REPORT_CACHE_TTL_SECONDS
CALENDAR_CACHE_TTL_SECONDS = Config.CALENDAR_CACHE_TTL_SECONDS

AUTO_INIT_DB = Config.AUTO_INIT_DB
AUTO_SEED_DB = Config.AUTO_SEED_DB
