"""CSV serialization of attendance rows (formatting only)."""
from __future__ import annotations

import csv
import io
from datetime import datetime
from typing import Iterable, Optional

from ..attendance.model import AttendanceReportRow

EXPORT_FIELDS = [
    "Employee ID",
    "Name",
    "Email",
    "Department",
    "Date",
    "Check In",
    "Check Out",
    "Status",
    "Total Hours",
]


def _fmt_ts(value: Optional[datetime]) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S") if value else "N/A"


def to_export_row(row: AttendanceReportRow) -> dict:
    r, e = row.record, row.employee
    return {
        "Employee ID": e.employee_code,
        "Name": e.name,
        "Email": e.email,
        "Department": e.department,
        "Date": r.work_date.strftime("%Y-%m-%d"),
        "Check In": _fmt_ts(r.check_in_time),
        "Check Out": _fmt_ts(r.check_out_time),
        "Status": r.status.value,
        "Total Hours": f"{r.total_hours:.2f}",
    }


def render_csv(rows: Iterable[AttendanceReportRow]) -> bytes:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=EXPORT_FIELDS)
    writer.writeheader()
    for row in rows:
        writer.writerow(to_export_row(row))

    # BOM so spreadsheet apps pick up UTF-8 names.
    return out.getvalue().encode("utf-8-sig")
