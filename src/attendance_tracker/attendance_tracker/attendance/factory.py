from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from ..core.constants import DEFAULT_HALF_DAY_HOURS, DEFAULT_LATE_HOUR
from ..core.enums import AttendanceStatus
from .rules import apply_half_day_override, determine_checkin_status
from .strategies.base import CheckInStrategy, CheckOutStrategy
from .strategies.half_day_strategy import HalfDayStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    late_hour: int = DEFAULT_LATE_HOUR
    half_day_hours: Decimal = DEFAULT_HALF_DAY_HOURS

    def for_checkin(self, *, now: datetime) -> CheckInStrategy:
        if determine_checkin_status(now, late_hour=self.late_hour) == AttendanceStatus.LATE:
            return LateStrategy()
        return NormalStrategy()

    def for_checkout(self, *, current_status: AttendanceStatus, total_hours: Decimal) -> CheckOutStrategy:
        overridden = apply_half_day_override(current_status, total_hours, min_hours=self.half_day_hours)
        if overridden == AttendanceStatus.HALF_DAY:
            return HalfDayStrategy()
        return NormalStrategy()
