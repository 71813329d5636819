from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceQuery, AttendanceRecord


class AttendanceRepository(Protocol):
    def find_one(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def save_checkin(self, record: AttendanceRecord) -> Optional[AttendanceRecord]:
        """Create the (employee_id, work_date) row, or fill in an existing row that has no check-in yet.

        Returns ``None`` without writing when the row is already checked in.
        """

        raise NotImplementedError

    def save_checkout(self, record: AttendanceRecord) -> Optional[AttendanceRecord]:
        """Store check-out, hours and status on a row still checked in at ``record.check_in_time``.

        Returns ``None`` without writing when the row is missing or already checked out.
        """

        raise NotImplementedError

    def find_range(self, criteria: AttendanceQuery, *, limit: Optional[int] = None) -> Sequence[AttendanceRecord]:
        """Matching records, newest ``work_date`` first."""

        raise NotImplementedError
