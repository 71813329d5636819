"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_LATE_HOUR = 9
DEFAULT_HALF_DAY_HOURS = Decimal("4")
# date.weekday(): Monday=0 ... Sunday=6
DEFAULT_NON_WORKING_WEEKDAY = 6
DEFAULT_HISTORY_LIMIT = 100
DEFAULT_MANAGER_QUERY_LIMIT = 500
DEFAULT_TREND_DAYS = 7
DEFAULT_SESSION_DAYS = 7
