from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import UserRepository

_COLUMNS = "employee_id, name, email, password_hash, role, department, employee_code, is_active"

_CODE_PREFIX = {
    Role.EMPLOYEE: "EMP",
    Role.MANAGER: "MGR",
}


def _to_employee(row: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        department=row.get("department") or "General",
        employee_code=row["employee_code"],
        is_active=bool(row.get("is_active", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, column: str, value: Any) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE {column}=%s", (value,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._get_one("employee_id", int(employee_id))

    def get_by_email(self, email: str) -> Optional[Employee]:
        return self._get_one("email", email.strip().lower())

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        return self._get_one("employee_code", employee_code.strip().upper())

    def list_by_ids(self, employee_ids: Iterable[int]) -> Sequence[Employee]:
        ids = sorted({int(i) for i in employee_ids})
        if not ids:
            return []
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id IN ({placeholders})", tuple(ids))
            return [_to_employee(r) for r in fetchall(cur)]

    def list_active(self, role: Role) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employees
                WHERE role=%s AND is_active=1
                ORDER BY employee_code ASC
                """,
                (role.value,),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def count_active(self, role: Role) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM employees WHERE role=%s AND is_active=1", (role.value,))
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def next_employee_code(self, role: Role) -> str:
        prefix = _CODE_PREFIX[role]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT MAX(CAST(SUBSTRING(employee_code, 4) AS UNSIGNED)) AS last_no
                FROM employees
                WHERE employee_code LIKE %s
                """,
                (f"{prefix}%",),
            )
            row = fetchone(cur)
            last_no = int(row["last_no"] or 0) if row else 0
            return f"{prefix}{last_no + 1:03d}"

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        department: str,
        employee_code: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(name, email, password_hash, role, department, employee_code, is_active)
                VALUES(%s,%s,%s,%s,%s,%s,1)
                """,
                (name, email, password_hash, role.value, department, employee_code),
            )
            return int(cur.lastrowid)
