from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from conftest import InMemoryAttendance, InterleavingAttendance
from src.attendance_tracker.attendance_tracker.attendance.model import AttendanceRecord
from src.attendance_tracker.attendance_tracker.attendance.service import AttendanceService
from src.attendance_tracker.attendance_tracker.core.enums import AttendanceStatus
from src.attendance_tracker.attendance_tracker.core.exceptions import (
    AccessDenied,
    AlreadyCheckedIn,
    AlreadyCheckedOut,
    ForbiddenDay,
    InvalidInterval,
    NotCheckedIn,
    NotFound,
    ValidationError,
)


@pytest.fixture
def svc(attendance_repo, users_repo) -> AttendanceService:
    return AttendanceService(attendance_repo, users_repo)


def test_checkin_before_nine_is_present(svc, attendance_repo, employee, fixed_now):
    rec = svc.check_in(employee, now=fixed_now.replace(hour=8, minute=59, second=59))

    assert rec.status == AttendanceStatus.PRESENT
    assert attendance_repo.find_one(1, fixed_now.date()).check_in_time == fixed_now.replace(hour=8, minute=59, second=59)


def test_checkin_at_nine_is_late(svc, employee, fixed_now):
    rec = svc.check_in(employee, now=fixed_now.replace(hour=9, minute=0, second=0))
    assert rec.status == AttendanceStatus.LATE


def test_checkin_on_sunday_is_rejected_without_mutation(svc, attendance_repo, employee):
    sunday = datetime(2026, 2, 1, 8, 0)

    with pytest.raises(ForbiddenDay):
        svc.check_in(employee, now=sunday)

    assert attendance_repo.writes == 0
    assert attendance_repo.find_one(1, sunday.date()) is None


def test_second_checkin_is_rejected_and_store_unchanged(svc, attendance_repo, employee, fixed_now):
    first = svc.check_in(employee, now=fixed_now)

    with pytest.raises(AlreadyCheckedIn):
        svc.check_in(employee, now=fixed_now + timedelta(hours=1))

    assert attendance_repo.writes == 1
    assert attendance_repo.find_one(1, fixed_now.date()) == first


def test_checkin_updates_preseeded_absent_row(users_repo, employee, fixed_now):
    repo = InMemoryAttendance([AttendanceRecord(employee_id=1, work_date=fixed_now.date())])
    svc = AttendanceService(repo, users_repo)

    rec = svc.check_in(employee, now=fixed_now)

    assert len(repo.all()) == 1
    assert rec.record_id == 1
    assert rec.status == AttendanceStatus.PRESENT


def test_checkout_full_day_keeps_status_and_sums_hours(svc, employee, fixed_now):
    svc.check_in(employee, now=fixed_now.replace(hour=9, minute=0))
    rec = svc.check_out(employee, now=fixed_now.replace(hour=17, minute=30))

    assert rec.total_hours == Decimal("8.50")
    assert rec.status == AttendanceStatus.LATE
    assert rec.check_out_time == fixed_now.replace(hour=17, minute=30)


def test_short_day_checkout_overrides_to_half_day(svc, employee, fixed_now):
    svc.check_in(employee, now=fixed_now.replace(hour=8, minute=0))
    rec = svc.check_out(employee, now=fixed_now.replace(hour=11, minute=59))

    assert rec.total_hours == Decimal("3.98")
    assert rec.status == AttendanceStatus.HALF_DAY


def test_checkout_without_checkin_is_rejected(svc, attendance_repo, employee, fixed_now):
    with pytest.raises(NotCheckedIn):
        svc.check_out(employee, now=fixed_now)
    assert attendance_repo.writes == 0


def test_checkout_on_absent_row_is_rejected(users_repo, employee, fixed_now):
    repo = InMemoryAttendance([AttendanceRecord(employee_id=1, work_date=fixed_now.date())])
    svc = AttendanceService(repo, users_repo)

    with pytest.raises(NotCheckedIn):
        svc.check_out(employee, now=fixed_now)


def test_second_checkout_is_rejected(svc, attendance_repo, employee, fixed_now):
    svc.check_in(employee, now=fixed_now)
    first = svc.check_out(employee, now=fixed_now + timedelta(hours=8))

    with pytest.raises(AlreadyCheckedOut):
        svc.check_out(employee, now=fixed_now + timedelta(hours=9))

    assert attendance_repo.find_one(1, fixed_now.date()) == first


def test_one_record_per_employee_and_day(svc, attendance_repo, employee, fixed_now):
    for day in range(3):
        now = fixed_now + timedelta(days=day)
        svc.check_in(employee, now=now)
        with pytest.raises(AlreadyCheckedIn):
            svc.check_in(employee, now=now)
        svc.check_out(employee, now=now + timedelta(hours=8))
        with pytest.raises(AlreadyCheckedOut):
            svc.check_out(employee, now=now + timedelta(hours=9))

    keys = [(r.employee_id, r.work_date) for r in attendance_repo.all()]
    assert len(keys) == len(set(keys)) == 3


def test_manager_cannot_check_in(svc, attendance_repo, manager, fixed_now):
    with pytest.raises(AccessDenied):
        svc.check_in(manager, now=fixed_now)
    assert attendance_repo.writes == 0


def test_today_flags(svc, employee, fixed_now):
    assert not svc.get_today(employee, today=fixed_now.date()).is_checked_in

    svc.check_in(employee, now=fixed_now)
    state = svc.get_today(employee, today=fixed_now.date())

    assert state.is_checked_in
    assert not state.is_checked_out


def test_history_filters_by_month_and_orders_newest_first(users_repo, employee):
    repo = InMemoryAttendance(
        [
            AttendanceRecord(employee_id=1, work_date=date(2026, 1, 30)),
            AttendanceRecord(employee_id=1, work_date=date(2026, 2, 2)),
            AttendanceRecord(employee_id=1, work_date=date(2026, 2, 3)),
            AttendanceRecord(employee_id=2, work_date=date(2026, 2, 3)),
        ]
    )
    svc = AttendanceService(repo, users_repo)

    history = svc.get_history(employee, month=2, year=2026)

    assert [r.work_date for r in history] == [date(2026, 2, 3), date(2026, 2, 2)]
    assert len(svc.get_history(employee)) == 3


def test_history_respects_limit(users_repo, employee):
    repo = InMemoryAttendance(
        [AttendanceRecord(employee_id=1, work_date=date(2026, 1, 1) + timedelta(days=i)) for i in range(10)]
    )
    svc = AttendanceService(repo, users_repo, history_limit=4)

    assert len(svc.get_history(employee)) == 4


def test_list_all_filters_and_joins_employee(users_repo, manager):
    repo = InMemoryAttendance(
        [
            AttendanceRecord(employee_id=1, work_date=date(2026, 2, 2), status=AttendanceStatus.LATE,
                             check_in_time=datetime(2026, 2, 2, 9, 10)),
            AttendanceRecord(employee_id=2, work_date=date(2026, 2, 2), status=AttendanceStatus.PRESENT,
                             check_in_time=datetime(2026, 2, 2, 8, 10)),
            AttendanceRecord(employee_id=1, work_date=date(2026, 1, 5)),
        ]
    )
    svc = AttendanceService(repo, users_repo)

    rows = svc.list_all(manager, start=date(2026, 2, 1), end=date(2026, 2, 28), status="late")

    assert len(rows) == 1
    assert rows[0].employee.employee_code == "EMP001"
    assert rows[0].record.status == AttendanceStatus.LATE


def test_list_all_unknown_employee_code_is_empty(svc, manager):
    assert svc.list_all(manager, employee_code="EMP999") == []


def test_list_all_rejects_unknown_status(svc, manager):
    with pytest.raises(ValidationError):
        svc.list_all(manager, status="sleeping")


def test_list_all_requires_manager(svc, employee):
    with pytest.raises(AccessDenied):
        svc.list_all(employee)


def test_employee_attendance_unknown_employee(svc, manager):
    with pytest.raises(NotFound):
        svc.get_employee_attendance(manager, 999)


def test_checkout_before_checkin_time_leaves_record_unchanged(svc, attendance_repo, employee, fixed_now):
    checked_in = svc.check_in(employee, now=fixed_now.replace(hour=9, minute=30))

    with pytest.raises(InvalidInterval):
        svc.check_out(employee, now=fixed_now.replace(hour=9, minute=0))

    assert attendance_repo.writes == 1
    assert attendance_repo.find_one(1, fixed_now.date()) == checked_in


def test_concurrent_checkin_cannot_erase_finished_day(users_repo, employee, fixed_now):
    repo = InterleavingAttendance()
    svc = AttendanceService(repo, users_repo)

    def other_request():
        svc.check_in(employee, now=fixed_now.replace(hour=8, minute=30))
        svc.check_out(employee, now=fixed_now.replace(hour=16, minute=30))

    # The other request runs right after this one has read "no record yet".
    repo.after_next_read(other_request)
    with pytest.raises(AlreadyCheckedIn):
        svc.check_in(employee, now=fixed_now.replace(hour=16, minute=31))

    rec = repo.find_one(1, fixed_now.date())
    assert rec.check_in_time == fixed_now.replace(hour=8, minute=30)
    assert rec.check_out_time == fixed_now.replace(hour=16, minute=30)
    assert rec.total_hours == Decimal("8.00")
    assert rec.status == AttendanceStatus.PRESENT
    assert len(repo.all()) == 1


def test_concurrent_checkout_keeps_first_checkout(users_repo, employee, fixed_now):
    repo = InterleavingAttendance()
    svc = AttendanceService(repo, users_repo)
    svc.check_in(employee, now=fixed_now)

    repo.after_next_read(lambda: svc.check_out(employee, now=fixed_now.replace(hour=17, minute=0)))
    with pytest.raises(AlreadyCheckedOut):
        svc.check_out(employee, now=fixed_now.replace(hour=10, minute=0))

    rec = repo.find_one(1, fixed_now.date())
    assert rec.check_out_time == fixed_now.replace(hour=17, minute=0)
    assert rec.total_hours == Decimal("8.50")
    assert rec.status == AttendanceStatus.PRESENT
