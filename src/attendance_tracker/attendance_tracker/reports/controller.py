from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.validators import optional_int
from ..container import Container
from ..users.model import public_profile
from ..users.session import current_principal, login_required
from .export import render_csv


def register(app: Flask, container: Container) -> None:
    def _month_args() -> dict:
        return {
            "month": optional_int(request.args.get("month"), "month"),
            "year": optional_int(request.args.get("year"), "year"),
        }

    def _date_arg(name: str):
        value = request.args.get(name)
        return parse_iso_date(value) if value else None

    @app.route("/api/attendance/my-summary", methods=["GET"], endpoint="attendance_my_summary")
    @login_required
    def my_summary():
        summary = container.report_service.monthly_summary(current_principal(), **_month_args())
        return jsonify(summary.to_dict())

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="attendance_team_summary")
    @login_required
    def team_summary():
        rows = container.report_service.team_summary(current_principal(), **_month_args())
        return jsonify({"summary": [r.to_dict() for r in rows]})

    @app.route("/api/attendance/today-status", methods=["GET"], endpoint="attendance_today_status")
    @login_required
    def today_status():
        status = container.report_service.today_status(current_principal())
        return jsonify(
            {
                "present": status.present,
                "absent": status.absent,
                "late": status.late,
                "presentEmployees": [
                    dict(public_profile(r.employee), checkInTime=r.record.check_in_time.isoformat(), status=r.record.status.value)
                    for r in status.present_rows
                ],
                "absentEmployees": [public_profile(e) for e in status.absent_employees],
            }
        )

    @app.route("/api/attendance/export", methods=["GET"], endpoint="attendance_export")
    @login_required
    def export_csv():
        rows = container.report_service.export_rows(
            current_principal(),
            start=_date_arg("startDate"),
            end=_date_arg("endDate"),
            employee_code=request.args.get("employeeId"),
        )
        return app.response_class(
            render_csv(rows),
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=attendance-export.csv"},
        )

    @app.route("/api/dashboard/employee", methods=["GET"], endpoint="dashboard_employee")
    @login_required
    def employee_dashboard():
        data = container.report_service.employee_dashboard(current_principal())
        today = data.today
        return jsonify(
            {
                "todayStatus": {
                    "isCheckedIn": bool(today and today.is_checked_in),
                    "isCheckedOut": bool(today and today.is_checked_out),
                    "checkInTime": today.check_in_time.isoformat() if today and today.check_in_time else None,
                    "checkOutTime": today.check_out_time.isoformat() if today and today.check_out_time else None,
                    "status": today.status.value if today else "absent",
                },
                "monthStats": data.month.to_dict(),
                "recentAttendance": [r.to_dict() for r in data.recent],
            }
        )

    @app.route("/api/dashboard/manager", methods=["GET"], endpoint="dashboard_manager")
    @login_required
    def manager_dashboard():
        data = container.report_service.manager_dashboard(current_principal())
        return jsonify(
            {
                "totalEmployees": data.total_employees,
                "todayStats": {
                    "present": data.today.present,
                    "absent": data.today.absent,
                    "late": data.today.late,
                },
                "weeklyTrend": [d.to_dict() for d in data.trend],
                "departmentStats": [d.to_dict() for d in data.departments],
                "absentEmployeesToday": [public_profile(e) for e in data.today.absent_employees],
            }
        )
