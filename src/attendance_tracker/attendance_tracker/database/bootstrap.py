from __future__ import annotations

import random
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from pathlib import Path
from typing import Iterable, Optional, Sequence

import mysql.connector
from werkzeug.security import generate_password_hash

from ..attendance.model import AttendanceRecord
from ..attendance.rules import apply_half_day_override, compute_hours, determine_checkin_status
from ..core.enums import Role


@dataclass(frozen=True)
class DBTarget:
    host: str
    port: int
    user: str
    password: str
    database: str


def _as_target(db_config: dict) -> DBTarget:
    return DBTarget(
        host=str(db_config.get("host", "localhost")),
        port=int(db_config.get("port", 3306)),
        user=str(db_config.get("user", "root")),
        password=str(db_config.get("password", "")),
        database=str(db_config.get("database", "attendance_tracker")),
    )


def _connect(target: DBTarget):
    return mysql.connector.connect(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        database=target.database,
        use_pure=True,
    )


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
            buf.append(ch)
            continue

        if ch == '"' and not in_single:
            in_double = not in_double
            buf.append(ch)
            continue

        if ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _exec_sql(cur, sql: str) -> None:
    for stmt in _iter_sql_statements(sql):
        cur.execute(stmt)


def ensure_database_exists(db_config: dict) -> None:
    target = _as_target(db_config)
    conn = mysql.connector.connect(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    target = _as_target(db_config)
    ensure_database_exists(db_config)

    schema_path = Path(schema_path)
    sql = _strip_create_db_and_use(schema_path.read_text(encoding="utf-8"))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        _exec_sql(cur, sql)
        conn.commit()
    finally:
        conn.close()


DEMO_MANAGER = ("John Manager", "manager@company.com", "manager123", "Management")
DEMO_EMPLOYEES = [
    ("Alice Johnson", "alice@company.com", "Engineering"),
    ("Bob Smith", "bob@company.com", "Engineering"),
    ("Carol Williams", "carol@company.com", "Marketing"),
    ("David Brown", "david@company.com", "Sales"),
    ("Emma Davis", "emma@company.com", "HR"),
]
DEMO_EMPLOYEE_PASSWORD = "employee123"


def ensure_demo_users(db_config: dict) -> list[int]:
    """Upsert the demo manager and employees; returns the employee ids."""
    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor(dictionary=True)

        def upsert_user(name: str, email: str, password: str, role: Role, department: str, code: str) -> int:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT employee_id FROM employees WHERE email=%s", (email,))
            existing = cur.fetchone()
            if existing:
                cur.execute(
                    """
                    UPDATE employees
                    SET name=%s, password_hash=%s, role=%s, department=%s, employee_code=%s, is_active=1
                    WHERE email=%s
                    """,
                    (name, password_hash, role.value, department, code, email),
                )
                return int(existing["employee_id"])
            cur.execute(
                """
                INSERT INTO employees (name, email, password_hash, role, department, employee_code)
                VALUES (%s, %s, %s, %s, %s, %s)
                """,
                (name, email, password_hash, role.value, department, code),
            )
            return int(cur.lastrowid)

        name, email, password, department = DEMO_MANAGER
        upsert_user(name, email, password, Role.MANAGER, department, "MGR001")

        employee_ids = [
            upsert_user(name, email, DEMO_EMPLOYEE_PASSWORD, Role.EMPLOYEE, department, f"EMP{i:03d}")
            for i, (name, email, department) in enumerate(DEMO_EMPLOYEES, start=1)
        ]

        conn.commit()
        return employee_ids
    finally:
        conn.close()


def _demo_day(rng: random.Random, employee_id: int, work_date: date) -> AttendanceRecord:
    # ~80% attendance, check-in 08:00-09:59, check-out 17:00-18:59.
    if rng.random() <= 0.2:
        return AttendanceRecord(employee_id=employee_id, work_date=work_date)

    check_in = datetime.combine(work_date, time(8 + rng.randrange(2), rng.randrange(60)))
    check_out = datetime.combine(work_date, time(17 + rng.randrange(2), rng.randrange(60)))
    total_hours = compute_hours(check_in, check_out)
    status = apply_half_day_override(determine_checkin_status(check_in), total_hours)
    return AttendanceRecord(
        employee_id=employee_id,
        work_date=work_date,
        check_in_time=check_in,
        check_out_time=check_out,
        status=status,
        total_hours=total_hours,
    )


def seed_demo_attendance(
    db_config: dict,
    employee_ids: Sequence[int],
    *,
    today: date,
    days: int = 30,
    seed: Optional[int] = None,
) -> int:
    """Random weekday history for the past ``days`` days (today excluded). Returns rows written."""
    rng = random.Random(seed)
    conn = _connect(_as_target(db_config))
    written = 0
    try:
        cur = conn.cursor()
        for offset in range(1, days + 1):
            work_date = today - timedelta(days=offset)
            if work_date.weekday() >= 5:
                continue
            for employee_id in employee_ids:
                r = _demo_day(rng, employee_id, work_date)
                cur.execute(
                    """
                    INSERT INTO attendance_records(employee_id, work_date, check_in_time, check_out_time, status, total_hours)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    ON DUPLICATE KEY UPDATE
                        check_in_time=VALUES(check_in_time),
                        check_out_time=VALUES(check_out_time),
                        status=VALUES(status),
                        total_hours=VALUES(total_hours)
                    """,
                    (r.employee_id, r.work_date, r.check_in_time, r.check_out_time, r.status.value, r.total_hours),
                )
                written += 1
        conn.commit()
        return written
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    target = _as_target(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
