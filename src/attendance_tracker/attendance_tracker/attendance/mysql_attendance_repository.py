from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ZERO_HOURS, AttendanceQuery, AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "record_id, employee_id, work_date, check_in_time, check_out_time, status, total_hours"


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    total = r.get("total_hours")
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        check_in_time=r.get("check_in_time"),
        check_out_time=r.get("check_out_time"),
        status=AttendanceStatus(r["status"]),
        total_hours=Decimal(str(total)) if total is not None else ZERO_HOURS,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_one(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND work_date=%s
                """,
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def _reload(self, cur, employee_id: int, work_date: date) -> AttendanceRecord:
        cur.execute(
            f"SELECT {_COLUMNS} FROM attendance_records WHERE employee_id=%s AND work_date=%s",
            (int(employee_id), work_date),
        )
        return _to_record(fetchone(cur))

    def save_checkin(self, record: AttendanceRecord) -> Optional[AttendanceRecord]:
        # Only a row without check_in_time is touched; status is assigned before check_in_time
        # because MySQL evaluates the UPDATE list left to right.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(employee_id, work_date, check_in_time, check_out_time, status, total_hours)
                VALUES(%s,%s,%s,NULL,%s,0)
                ON DUPLICATE KEY UPDATE
                    status=IF(check_in_time IS NULL, VALUES(status), status),
                    check_in_time=IF(check_in_time IS NULL, VALUES(check_in_time), check_in_time)
                """,
                (
                    int(record.employee_id),
                    record.work_date,
                    record.check_in_time,
                    record.status.value,
                ),
            )
            # affected rows: 1 inserted, 2 updated, 0 already checked in
            if cur.rowcount == 0:
                return None
            return self._reload(cur, record.employee_id, record.work_date)

    def save_checkout(self, record: AttendanceRecord) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s, total_hours=%s, status=%s
                WHERE employee_id=%s AND work_date=%s
                  AND check_in_time=%s AND check_out_time IS NULL
                """,
                (
                    record.check_out_time,
                    record.total_hours,
                    record.status.value,
                    int(record.employee_id),
                    record.work_date,
                    record.check_in_time,
                ),
            )
            if cur.rowcount == 0:
                return None
            return self._reload(cur, record.employee_id, record.work_date)

    def find_range(self, criteria: AttendanceQuery, *, limit: Optional[int] = None) -> Sequence[AttendanceRecord]:
        clauses = ["1=1"]
        params: list[object] = []

        if criteria.employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(criteria.employee_id))
        if criteria.date_from is not None:
            clauses.append("work_date >= %s")
            params.append(criteria.date_from)
        if criteria.date_to is not None:
            clauses.append("work_date <= %s")
            params.append(criteria.date_to)
        if criteria.status is not None:
            clauses.append("status=%s")
            params.append(criteria.status.value)

        sql = f"""
            SELECT {_COLUMNS}
            FROM attendance_records
            WHERE {" AND ".join(clauses)}
            ORDER BY work_date DESC, employee_id ASC
        """
        if limit is not None:
            sql += " LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_record(r) for r in fetchall(cur)]
