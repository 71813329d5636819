"""Read-only folds over attendance record sets.

Every function here is pure: it never touches a repository and tolerates
empty input, returning all-zero results.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable, Sequence

from ..attendance.model import ZERO_HOURS, AttendanceRecord, AttendanceReportRow
from ..attendance.rules import round_hours
from ..common.datetime_utils import trailing_days
from ..core.constants import DEFAULT_TREND_DAYS
from ..core.enums import AttendanceStatus
from ..users.model import Employee


@dataclass(frozen=True)
class StatusSummary:
    present: int = 0
    absent: int = 0
    late: int = 0
    half_day: int = 0
    total_hours: Decimal = ZERO_HOURS
    total_days: int = 0

    def to_dict(self) -> dict:
        return {
            "present": self.present,
            "absent": self.absent,
            "late": self.late,
            "halfDay": self.half_day,
            "totalHours": f"{self.total_hours:.2f}",
            "totalDays": self.total_days,
        }


@dataclass
class _StatusCounter:
    counts: Counter = field(default_factory=Counter)
    hours: Decimal = ZERO_HOURS
    days: int = 0

    def add(self, record: AttendanceRecord) -> None:
        self.counts[record.status] += 1
        self.hours += record.total_hours or ZERO_HOURS
        self.days += 1

    def freeze(self) -> StatusSummary:
        # Round the running sum once, never per record.
        return StatusSummary(
            present=self.counts[AttendanceStatus.PRESENT],
            absent=self.counts[AttendanceStatus.ABSENT],
            late=self.counts[AttendanceStatus.LATE],
            half_day=self.counts[AttendanceStatus.HALF_DAY],
            total_hours=round_hours(self.hours),
            total_days=self.days,
        )


def summarize_records(records: Iterable[AttendanceRecord]) -> StatusSummary:
    """Per-status counts and summed hours. ``total_days`` is the number of records, not calendar days."""
    counter = _StatusCounter()
    for r in records:
        counter.add(r)
    return counter.freeze()


@dataclass(frozen=True)
class TeamSummaryRow:
    employee_code: str
    name: str
    department: str
    summary: StatusSummary

    def to_dict(self) -> dict:
        data = {"employeeId": self.employee_code, "name": self.name, "department": self.department}
        data.update(self.summary.to_dict())
        return data


def summarize_team(rows: Iterable[AttendanceReportRow]) -> list[TeamSummaryRow]:
    """One row per employee code; employees without records are not zero-filled."""
    counters: dict[str, _StatusCounter] = {}
    employees: dict[str, Employee] = {}

    for row in rows:
        code = row.employee.employee_code
        if code not in counters:
            counters[code] = _StatusCounter()
            employees[code] = row.employee
        counters[code].add(row.record)

    return [
        TeamSummaryRow(
            employee_code=code,
            name=employees[code].name,
            department=employees[code].department,
            summary=counters[code].freeze(),
        )
        for code in sorted(counters)
    ]


@dataclass(frozen=True)
class TodayStatus:
    present_rows: list[AttendanceReportRow]
    absent_employees: list[Employee]
    late: int

    @property
    def present(self) -> int:
        return len(self.present_rows)

    @property
    def absent(self) -> int:
        return len(self.absent_employees)


def partition_today(rows: Iterable[AttendanceReportRow], roster: Sequence[Employee]) -> TodayStatus:
    """Split the active roster into checked-in and absent employees for one day."""
    rows = list(rows)
    present_rows = [r for r in rows if r.record.is_checked_in]
    present_ids = {r.employee.employee_id for r in present_rows}

    return TodayStatus(
        present_rows=present_rows,
        absent_employees=[e for e in roster if e.employee_id not in present_ids],
        late=sum(1 for r in rows if r.record.status == AttendanceStatus.LATE),
    )


@dataclass(frozen=True)
class DayTrend:
    day: date
    present: int
    absent: int

    def to_dict(self) -> dict:
        return {"date": self.day.isoformat(), "present": self.present, "absent": self.absent}


def weekly_trend(
    records: Iterable[AttendanceRecord],
    *,
    today: date,
    total_employees: int,
    days: int = DEFAULT_TREND_DAYS,
) -> list[DayTrend]:
    """Checked-in vs. not-checked-in counts for the trailing ``days`` days, oldest first.

    Anyone without a check-in that day counts as absent, record or not.
    """
    checked_in = Counter(r.work_date for r in records if r.is_checked_in)
    return [
        DayTrend(day=d, present=checked_in[d], absent=total_employees - checked_in[d])
        for d in trailing_days(today, days)
    ]


@dataclass(frozen=True)
class DepartmentStats:
    department: str
    present: int
    absent: int
    total: int

    def to_dict(self) -> dict:
        return {"department": self.department, "present": self.present, "absent": self.absent, "total": self.total}


def department_rollup(records: Iterable[AttendanceRecord], roster: Sequence[Employee]) -> list[DepartmentStats]:
    """Today's presence per department; departments come from the roster, so empty ones still show up."""
    present_ids = {r.employee_id for r in records if r.is_checked_in}

    totals: Counter = Counter()
    present: Counter = Counter()
    for e in roster:
        totals[e.department] += 1
        if e.employee_id in present_ids:
            present[e.department] += 1

    return [
        DepartmentStats(
            department=dept,
            present=present[dept],
            absent=totals[dept] - present[dept],
            total=totals[dept],
        )
        for dept in sorted(totals)
    ]
