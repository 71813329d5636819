"""Pure attendance rules: worked hours and status decisions.

Nothing here reads the clock; callers pass timestamps in.
"""
from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..core.constants import DEFAULT_HALF_DAY_HOURS, DEFAULT_LATE_HOUR, DEFAULT_NON_WORKING_WEEKDAY
from ..core.enums import AttendanceStatus
from ..core.exceptions import InvalidInterval
from .model import ZERO_HOURS

_SECONDS_PER_HOUR = Decimal(3600)
_CENTS = Decimal("0.01")


def round_hours(value: Decimal) -> Decimal:
    return value.quantize(_CENTS, rounding=ROUND_HALF_UP)


def compute_hours(check_in: Optional[datetime], check_out: Optional[datetime]) -> Decimal:
    """Hours between check-in and check-out, rounded to 2 decimals (0 if either is missing)."""
    if check_in is None or check_out is None:
        return ZERO_HOURS
    if check_out < check_in:
        raise InvalidInterval("Check-out time cannot be earlier than check-in time")
    seconds = Decimal(str((check_out - check_in).total_seconds()))
    return round_hours(seconds / _SECONDS_PER_HOUR)


def determine_checkin_status(check_in_time: Optional[datetime], *, late_hour: int = DEFAULT_LATE_HOUR) -> AttendanceStatus:
    # Hour granularity: 09:00 and 09:59 are both late, 08:05 and 08:59 both present.
    if check_in_time is None:
        return AttendanceStatus.ABSENT
    if check_in_time.hour >= late_hour:
        return AttendanceStatus.LATE
    return AttendanceStatus.PRESENT


def apply_half_day_override(
    status: AttendanceStatus,
    total_hours: Decimal,
    *,
    min_hours: Decimal = DEFAULT_HALF_DAY_HOURS,
) -> AttendanceStatus:
    if status != AttendanceStatus.ABSENT and total_hours < min_hours:
        return AttendanceStatus.HALF_DAY
    return status


def is_non_working_day(day: date, *, weekday: int = DEFAULT_NON_WORKING_WEEKDAY) -> bool:
    return day.weekday() == weekday
