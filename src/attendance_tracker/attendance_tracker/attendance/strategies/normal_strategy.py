from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from ...core.enums import AttendanceStatus
from .base import CheckInStrategy, CheckOutStrategy, StatusDecision


class NormalStrategy(CheckInStrategy, CheckOutStrategy):
    """On-time check-in, normal check-out (status kept)."""

    def decide_checkin(self, *, now: datetime) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)

    def decide_checkout(self, *, current: AttendanceStatus, total_hours: Decimal) -> StatusDecision:
        return StatusDecision(status=current)
