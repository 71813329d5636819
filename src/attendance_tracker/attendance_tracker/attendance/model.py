from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import AttendanceStatus
from ..users.model import Employee

ZERO_HOURS = Decimal("0.00")


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day."""

    employee_id: int
    work_date: date
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    status: AttendanceStatus = AttendanceStatus.ABSENT
    total_hours: Decimal = ZERO_HOURS
    record_id: Optional[int] = None

    @property
    def is_checked_in(self) -> bool:
        return self.check_in_time is not None

    @property
    def is_checked_out(self) -> bool:
        return self.check_out_time is not None

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "employee": self.employee_id,
            "date": self.work_date.isoformat(),
            "checkInTime": self.check_in_time.isoformat() if self.check_in_time else None,
            "checkOutTime": self.check_out_time.isoformat() if self.check_out_time else None,
            "status": self.status.value,
            "totalHours": float(self.total_hours),
        }


@dataclass(frozen=True)
class AttendanceQuery:
    """Range filter understood by the record store. ``None`` means unfiltered."""

    employee_id: Optional[int] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    status: Optional[AttendanceStatus] = None


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model: a record joined with its employee's metadata."""

    record: AttendanceRecord
    employee: Employee

    def to_dict(self) -> dict:
        data = self.record.to_dict()
        data["employee"] = {
            "id": self.employee.employee_id,
            "name": self.employee.name,
            "email": self.employee.email,
            "employeeId": self.employee.employee_code,
            "department": self.employee.department,
        }
        return data
