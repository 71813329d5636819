from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import month_bounds, now_local
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_MANAGER_QUERY_LIMIT, DEFAULT_NON_WORKING_WEEKDAY
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import (
    AlreadyCheckedIn,
    AlreadyCheckedOut,
    ForbiddenDay,
    NotCheckedIn,
    NotFound,
    ValidationError,
)
from ..users.model import Employee, Principal
from ..users.repository import UserRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceQuery, AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository
from .rules import compute_hours, is_non_working_day

logger = logging.getLogger(__name__)

_WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


@dataclass(frozen=True)
class TodayAttendance:
    record: Optional[AttendanceRecord]

    @property
    def is_checked_in(self) -> bool:
        return bool(self.record and self.record.is_checked_in)

    @property
    def is_checked_out(self) -> bool:
        return bool(self.record and self.record.is_checked_out)


def parse_status(value: Optional[str]) -> Optional[AttendanceStatus]:
    if not value:
        return None
    try:
        return AttendanceStatus(value)
    except ValueError:
        raise ValidationError(f"Invalid status: {value!r}")


def join_employees(
    records: Iterable[AttendanceRecord],
    users: UserRepository,
) -> list[AttendanceReportRow]:
    """Attach employee metadata to records, keeping record order.

    Records whose employee is unknown to the roster are dropped.
    """
    records = list(records)
    employees = {e.employee_id: e for e in users.list_by_ids({r.employee_id for r in records})}

    rows = []
    for r in records:
        employee = employees.get(r.employee_id)
        if employee is None:
            logger.warning("Attendance record %s references unknown employee %s", r.record_id, r.employee_id)
            continue
        rows.append(AttendanceReportRow(record=r, employee=employee))
    return rows


class AttendanceService:
    """Daily check-in/check-out lifecycle plus record listings."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        non_working_weekday: int = DEFAULT_NON_WORKING_WEEKDAY,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        manager_query_limit: int = DEFAULT_MANAGER_QUERY_LIMIT,
    ):
        self._attendance = attendance
        self._users = users
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._non_working_weekday = int(non_working_weekday)
        self._history_limit = int(history_limit)
        self._manager_query_limit = int(manager_query_limit)

    def check_in(self, principal: Principal, *, now: datetime | None = None) -> AttendanceRecord:
        principal.require(Role.EMPLOYEE)
        now = now or now_local()
        today = now.date()

        if is_non_working_day(today, weekday=self._non_working_weekday):
            raise ForbiddenDay(f"Check-in is not allowed on {_WEEKDAY_NAMES[self._non_working_weekday]}s")

        existing = self._attendance.find_one(principal.employee_id, today)
        if existing and existing.is_checked_in:
            raise AlreadyCheckedIn("Already checked in today")

        decision = self._factory.for_checkin(now=now).decide_checkin(now=now)

        # A pre-seeded absent row for today is updated in place.
        saved = self._attendance.save_checkin(
            AttendanceRecord(employee_id=principal.employee_id, work_date=today, check_in_time=now, status=decision.status)
        )
        if saved is None:
            logger.info("Employee %s lost a concurrent check-in for %s", principal.employee_id, today)
            raise AlreadyCheckedIn("Already checked in today")

        logger.info(
            "Employee %s checked in at %s (%s)%s",
            principal.employee_id,
            now.strftime("%H:%M:%S"),
            decision.status.value,
            f": {decision.note}" if decision.note else "",
        )
        return saved

    def check_out(self, principal: Principal, *, now: datetime | None = None) -> AttendanceRecord:
        principal.require(Role.EMPLOYEE)
        now = now or now_local()
        today = now.date()

        record = self._attendance.find_one(principal.employee_id, today)
        if not record or not record.is_checked_in:
            raise NotCheckedIn("Please check in first")
        if record.is_checked_out:
            raise AlreadyCheckedOut("Already checked out today")

        total_hours = compute_hours(record.check_in_time, now)
        strategy = self._factory.for_checkout(current_status=record.status, total_hours=total_hours)
        decision = strategy.decide_checkout(current=record.status, total_hours=total_hours)

        saved = self._attendance.save_checkout(
            replace(record, check_out_time=now, total_hours=total_hours, status=decision.status)
        )
        if saved is None:
            logger.info("Employee %s lost a concurrent check-out for %s", principal.employee_id, today)
            raise AlreadyCheckedOut("Already checked out today")

        logger.info(
            "Employee %s checked out at %s after %sh (%s)",
            principal.employee_id,
            now.strftime("%H:%M:%S"),
            total_hours,
            decision.status.value,
        )
        return saved

    def get_today(self, principal: Principal, *, today: date | None = None) -> TodayAttendance:
        principal.require(Role.EMPLOYEE)
        today = today or now_local().date()
        return TodayAttendance(record=self._attendance.find_one(principal.employee_id, today))

    def get_history(
        self,
        principal: Principal,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        principal.require(Role.EMPLOYEE)

        criteria = AttendanceQuery(employee_id=principal.employee_id)
        if month and year:
            start, end = month_bounds(year, month)
            criteria = replace(criteria, date_from=start, date_to=end)

        return self._attendance.find_range(criteria, limit=self._history_limit)

    def list_all(
        self,
        principal: Principal,
        *,
        employee_code: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        status: Optional[str] = None,
    ) -> list[AttendanceReportRow]:
        principal.require(Role.MANAGER)

        criteria = AttendanceQuery(date_from=start, date_to=end, status=parse_status(status))
        if employee_code:
            employee = self._users.get_by_code(employee_code)
            if not employee:
                return []
            criteria = replace(criteria, employee_id=employee.employee_id)

        records = self._attendance.find_range(criteria, limit=self._manager_query_limit)
        return join_employees(records, self._users)

    def get_employee_attendance(
        self,
        principal: Principal,
        employee_id: int,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> tuple[Employee, Sequence[AttendanceRecord]]:
        principal.require(Role.MANAGER)

        employee = self._users.get_by_id(employee_id)
        if not employee:
            raise NotFound("Employee not found")

        criteria = AttendanceQuery(employee_id=employee.employee_id)
        if month and year:
            start, end = month_bounds(year, month)
            criteria = replace(criteria, date_from=start, date_to=end)

        return employee, self._attendance.find_range(criteria)
