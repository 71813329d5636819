"""Settings shared by every environment module."""
import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_tracker"),
}

# Attendance policy
LATE_HOUR = int(os.getenv("LATE_HOUR", "9"))
HALF_DAY_HOURS = os.getenv("HALF_DAY_HOURS", "4")
# date.weekday() numbering: Monday=0 ... Sunday=6
NON_WORKING_WEEKDAY = int(os.getenv("NON_WORKING_WEEKDAY", "6"))

# Query caps
HISTORY_LIMIT = int(os.getenv("HISTORY_LIMIT", "100"))
MANAGER_QUERY_LIMIT = int(os.getenv("MANAGER_QUERY_LIMIT", "500"))

# Reports and sessions
TREND_DAYS = int(os.getenv("TREND_DAYS", "7"))
SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
