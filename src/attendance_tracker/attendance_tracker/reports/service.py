from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Sequence

from ..attendance.model import AttendanceQuery, AttendanceRecord, AttendanceReportRow
from ..attendance.repository import AttendanceRepository
from ..attendance.service import join_employees
from ..common.datetime_utils import month_bounds, now_local
from ..core.constants import DEFAULT_TREND_DAYS
from ..core.enums import Role
from ..users.model import Employee, Principal
from ..users.repository import UserRepository
from .aggregation import (
    DayTrend,
    DepartmentStats,
    StatusSummary,
    TeamSummaryRow,
    TodayStatus,
    department_rollup,
    partition_today,
    summarize_records,
    summarize_team,
    weekly_trend,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonthlySummary:
    month: int
    year: int
    summary: StatusSummary

    def to_dict(self) -> dict:
        data = {"month": self.month, "year": self.year}
        data.update(self.summary.to_dict())
        return data


@dataclass(frozen=True)
class EmployeeDashboard:
    today: Optional[AttendanceRecord]
    month: StatusSummary
    recent: Sequence[AttendanceRecord]


@dataclass(frozen=True)
class ManagerDashboard:
    total_employees: int
    today: TodayStatus
    trend: list[DayTrend]
    departments: list[DepartmentStats]


class ReportService:
    """Read-only reports: summaries, today's status and dashboards.

    Fetches record ranges, joins employee metadata explicitly through the
    roster, and hands the result to the pure folds in ``aggregation``.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        trend_days: int = DEFAULT_TREND_DAYS,
    ):
        self._attendance = attendance
        self._users = users
        self._trend_days = int(trend_days)

    def _month(self, today: date, month: Optional[int], year: Optional[int]) -> tuple[int, int, date, date]:
        month = int(month or today.month)
        year = int(year or today.year)
        start, end = month_bounds(year, month)
        return month, year, start, end

    def _day_rows(self, day: date) -> list[AttendanceReportRow]:
        records = self._attendance.find_range(AttendanceQuery(date_from=day, date_to=day))
        return join_employees(records, self._users)

    def monthly_summary(
        self,
        principal: Principal,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        today: Optional[date] = None,
    ) -> MonthlySummary:
        principal.require(Role.EMPLOYEE)
        today = today or now_local().date()
        month, year, start, end = self._month(today, month, year)

        records = self._attendance.find_range(
            AttendanceQuery(employee_id=principal.employee_id, date_from=start, date_to=end)
        )
        return MonthlySummary(month=month, year=year, summary=summarize_records(records))

    def team_summary(
        self,
        principal: Principal,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        today: Optional[date] = None,
    ) -> list[TeamSummaryRow]:
        principal.require(Role.MANAGER)
        today = today or now_local().date()
        _, _, start, end = self._month(today, month, year)

        records = self._attendance.find_range(AttendanceQuery(date_from=start, date_to=end))
        return summarize_team(join_employees(records, self._users))

    def today_status(self, principal: Principal, *, today: Optional[date] = None) -> TodayStatus:
        principal.require(Role.MANAGER)
        today = today or now_local().date()

        roster = self._users.list_active(Role.EMPLOYEE)
        return partition_today(self._day_rows(today), roster)

    def employee_dashboard(self, principal: Principal, *, today: Optional[date] = None) -> EmployeeDashboard:
        principal.require(Role.EMPLOYEE)
        today = today or now_local().date()
        _, _, start, end = self._month(today, None, None)

        month_records = self._attendance.find_range(
            AttendanceQuery(employee_id=principal.employee_id, date_from=start, date_to=end)
        )
        recent = self._attendance.find_range(
            AttendanceQuery(employee_id=principal.employee_id, date_from=today - timedelta(days=7), date_to=today),
            limit=7,
        )
        return EmployeeDashboard(
            today=self._attendance.find_one(principal.employee_id, today),
            month=summarize_records(month_records),
            recent=recent,
        )

    def manager_dashboard(self, principal: Principal, *, today: Optional[date] = None) -> ManagerDashboard:
        principal.require(Role.MANAGER)
        today = today or now_local().date()

        roster = self._users.list_active(Role.EMPLOYEE)
        total_employees = self._users.count_active(Role.EMPLOYEE)
        today_rows = self._day_rows(today)

        week_records = self._attendance.find_range(
            AttendanceQuery(date_from=today - timedelta(days=self._trend_days - 1), date_to=today)
        )

        return ManagerDashboard(
            total_employees=total_employees,
            today=partition_today(today_rows, roster),
            trend=weekly_trend(week_records, today=today, total_employees=total_employees, days=self._trend_days),
            departments=department_rollup([r.record for r in today_rows], roster),
        )

    def export_rows(
        self,
        principal: Principal,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        employee_code: Optional[str] = None,
    ) -> list[AttendanceReportRow]:
        principal.require(Role.MANAGER)

        criteria = AttendanceQuery(date_from=start, date_to=end)
        if employee_code:
            employee: Optional[Employee] = self._users.get_by_code(employee_code)
            if not employee:
                logger.info("Export requested for unknown employee code %s", employee_code)
                return []
            criteria = AttendanceQuery(employee_id=employee.employee_id, date_from=start, date_to=end)

        rows = join_employees(self._attendance.find_range(criteria), self._users)
        logger.info("Exporting %d attendance rows for manager %s", len(rows), principal.employee_id)
        return rows
