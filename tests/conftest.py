from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Iterable, Optional

import pytest

from src.attendance_tracker.attendance_tracker.attendance.model import AttendanceQuery, AttendanceRecord
from src.attendance_tracker.attendance_tracker.core.enums import Role
from src.attendance_tracker.attendance_tracker.users.model import Employee, Principal


class InMemoryAttendance:
    """Record store keyed by (employee_id, work_date), like the unique index in MySQL."""

    def __init__(self, records: Iterable[AttendanceRecord] = ()):
        self._by_key: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0
        self.writes = 0
        for r in records:
            self._put(r)

    def find_one(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_key.get((employee_id, work_date))

    def _put(self, record: AttendanceRecord) -> AttendanceRecord:
        key = (record.employee_id, record.work_date)
        existing = self._by_key.get(key)
        if existing:
            record = replace(record, record_id=existing.record_id)
        else:
            self._id += 1
            record = replace(record, record_id=self._id)
        self._by_key[key] = record
        return record

    def save_checkin(self, record: AttendanceRecord) -> Optional[AttendanceRecord]:
        existing = self._by_key.get((record.employee_id, record.work_date))
        if existing and existing.is_checked_in:
            return None
        self.writes += 1
        if existing:
            return self._put(replace(existing, check_in_time=record.check_in_time, status=record.status))
        return self._put(record)

    def save_checkout(self, record: AttendanceRecord) -> Optional[AttendanceRecord]:
        existing = self._by_key.get((record.employee_id, record.work_date))
        if (
            not existing
            or existing.check_in_time != record.check_in_time
            or existing.is_checked_out
        ):
            return None
        self.writes += 1
        return self._put(
            replace(
                existing,
                check_out_time=record.check_out_time,
                total_hours=record.total_hours,
                status=record.status,
            )
        )

    def find_range(self, criteria: AttendanceQuery, *, limit: Optional[int] = None):
        items = [
            r
            for r in self._by_key.values()
            if (criteria.employee_id is None or r.employee_id == criteria.employee_id)
            and (criteria.date_from is None or r.work_date >= criteria.date_from)
            and (criteria.date_to is None or r.work_date <= criteria.date_to)
            and (criteria.status is None or r.status == criteria.status)
        ]
        items.sort(key=lambda r: (-r.work_date.toordinal(), r.employee_id))
        return items[:limit] if limit is not None else items

    def all(self) -> list[AttendanceRecord]:
        return list(self._by_key.values())


class InterleavingAttendance(InMemoryAttendance):
    """Runs a callback once, right after the next read, to stand in for a concurrent request."""

    def __init__(self, records: Iterable[AttendanceRecord] = ()):
        super().__init__(records)
        self._pending: Optional[Callable[[], None]] = None

    def after_next_read(self, callback: Callable[[], None]) -> None:
        self._pending = callback

    def find_one(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        found = super().find_one(employee_id, work_date)
        callback, self._pending = self._pending, None
        if callback:
            callback()
        return found


class InMemoryUsers:
    def __init__(self, employees: Iterable[Employee] = ()):
        self._by_id: dict[int, Employee] = {e.employee_id: e for e in employees}

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(int(employee_id))

    def get_by_email(self, email: str) -> Optional[Employee]:
        return next((e for e in self._by_id.values() if e.email == email.strip().lower()), None)

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        return next((e for e in self._by_id.values() if e.employee_code == employee_code.strip().upper()), None)

    def list_by_ids(self, employee_ids):
        return [self._by_id[i] for i in employee_ids if i in self._by_id]

    def list_active(self, role: Role):
        return sorted(
            (e for e in self._by_id.values() if e.role == role and e.is_active),
            key=lambda e: e.employee_code,
        )

    def count_active(self, role: Role) -> int:
        return len(self.list_active(role))

    def next_employee_code(self, role: Role) -> str:
        prefix = "MGR" if role == Role.MANAGER else "EMP"
        taken = [int(e.employee_code[3:]) for e in self._by_id.values() if e.employee_code.startswith(prefix)]
        return f"{prefix}{max(taken, default=0) + 1:03d}"

    def create_user(self, *, name, email, password_hash, role, department, employee_code) -> int:
        employee_id = max(self._by_id, default=0) + 1
        self._by_id[employee_id] = Employee(
            employee_id=employee_id,
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            department=department,
            employee_code=employee_code,
        )
        return employee_id


def make_employee(
    employee_id: int,
    *,
    role: Role = Role.EMPLOYEE,
    department: str = "Engineering",
    password_hash: str = "not-a-real-hash",
    is_active: bool = True,
) -> Employee:
    prefix = "MGR" if role == Role.MANAGER else "EMP"
    return Employee(
        employee_id=employee_id,
        name=f"Person {employee_id}",
        email=f"person{employee_id}@company.com",
        password_hash=password_hash,
        role=role,
        department=department,
        employee_code=f"{prefix}{employee_id:03d}",
        is_active=is_active,
    )


@pytest.fixture
def fixed_now() -> datetime:
    # Monday
    return datetime(2026, 2, 2, 8, 30, 0)


@pytest.fixture
def roster() -> list[Employee]:
    return [
        make_employee(1, department="Engineering"),
        make_employee(2, department="Engineering"),
        make_employee(3, department="Marketing"),
        make_employee(4, department="Sales"),
        make_employee(5, department="HR"),
        make_employee(100, role=Role.MANAGER, department="Management"),
    ]


@pytest.fixture
def users_repo(roster) -> InMemoryUsers:
    return InMemoryUsers(roster)


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def employee() -> Principal:
    return Principal(employee_id=1, role=Role.EMPLOYEE, name="Person 1", employee_code="EMP001")


@pytest.fixture
def manager() -> Principal:
    return Principal(employee_id=100, role=Role.MANAGER, name="Person 100", employee_code="MGR100")
