from datetime import datetime
from decimal import Decimal

from src.attendance_tracker.attendance_tracker.attendance.factory import AttendanceStrategyFactory
from src.attendance_tracker.attendance_tracker.attendance.strategies.half_day_strategy import HalfDayStrategy
from src.attendance_tracker.attendance_tracker.attendance.strategies.late_strategy import LateStrategy
from src.attendance_tracker.attendance_tracker.attendance.strategies.normal_strategy import NormalStrategy
from src.attendance_tracker.attendance_tracker.core.enums import AttendanceStatus


def test_factory_checkin_on_time_before_nine():
    now = datetime(2025, 1, 1, 8, 59, 59)

    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkin(now=now)

    assert isinstance(strategy, NormalStrategy)
    assert strategy.decide_checkin(now=now).status == AttendanceStatus.PRESENT


def test_factory_checkin_late_from_nine():
    now = datetime(2025, 1, 1, 9, 0, 0)

    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkin(now=now)

    assert isinstance(strategy, LateStrategy)
    decision = strategy.decide_checkin(now=now)
    assert decision.status == AttendanceStatus.LATE
    assert decision.note == "Checked in late at 09:00"


def test_factory_checkout_short_day_is_half_day():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkout(current_status=AttendanceStatus.LATE, total_hours=Decimal("3.50"))

    assert isinstance(strategy, HalfDayStrategy)
    decision = strategy.decide_checkout(current=AttendanceStatus.LATE, total_hours=Decimal("3.50"))
    assert decision.status == AttendanceStatus.HALF_DAY


def test_factory_checkout_full_day_keeps_status():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkout(current_status=AttendanceStatus.LATE, total_hours=Decimal("8.00"))

    assert isinstance(strategy, NormalStrategy)
    assert strategy.decide_checkout(current=AttendanceStatus.LATE, total_hours=Decimal("8.00")).status == AttendanceStatus.LATE


def test_factory_uses_configured_thresholds():
    factory = AttendanceStrategyFactory(late_hour=10, half_day_hours=Decimal("6"))

    assert isinstance(factory.for_checkin(now=datetime(2025, 1, 1, 9, 45)), NormalStrategy)
    assert isinstance(
        factory.for_checkout(current_status=AttendanceStatus.PRESENT, total_hours=Decimal("5.00")),
        HalfDayStrategy,
    )
