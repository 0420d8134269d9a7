"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SALARY_DIVISOR = 26
DEFAULT_WORKING_DAYS_PER_WEEK = 5
DEFAULT_WORKING_DAYS_PER_MONTH = 22

SHORT_LEAVE_CREDIT = 0.5
HALF_DAY_CREDIT = 0.5
FULL_DAY_CREDIT = 1.0

REPORT_CACHE_TTL_SECONDS = 5 * 60
CALENDAR_CACHE_TTL_SECONDS = 3 * 60
