from __future__ import annotations

from decimal import Decimal

from ...core.enums import AttendanceStatus
from .base import CheckOutStrategy, StatusDecision


class HalfDayStrategy(CheckOutStrategy):
    """Short day on checkout: overrides present/late."""

    def decide_checkout(self, *, current: AttendanceStatus, total_hours: Decimal) -> StatusDecision:
        return StatusDecision(
            status=AttendanceStatus.HALF_DAY,
            note=f"Worked {total_hours}h, was {current.value}",
        )
