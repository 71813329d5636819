from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.validators import optional_int
from ..container import Container
from ..users.session import current_principal, login_required


def register(app: Flask, container: Container) -> None:
    def _date_arg(name: str):
        value = request.args.get(name)
        return parse_iso_date(value) if value else None

    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="attendance_checkin")
    @login_required
    def checkin():
        record = container.attendance_service.check_in(current_principal())
        return jsonify(
            {
                "message": "Checked in successfully",
                "attendance": {
                    "checkInTime": record.check_in_time.isoformat(),
                    "status": record.status.value,
                },
            }
        )

    @app.route("/api/attendance/checkout", methods=["POST"], endpoint="attendance_checkout")
    @login_required
    def checkout():
        record = container.attendance_service.check_out(current_principal())
        return jsonify(
            {
                "message": "Checked out successfully",
                "attendance": {
                    "checkOutTime": record.check_out_time.isoformat(),
                    "totalHours": float(record.total_hours),
                    "status": record.status.value,
                },
            }
        )

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def today():
        state = container.attendance_service.get_today(current_principal())
        return jsonify(
            {
                "attendance": state.record.to_dict() if state.record else None,
                "isCheckedIn": state.is_checked_in,
                "isCheckedOut": state.is_checked_out,
            }
        )

    @app.route("/api/attendance/my-history", methods=["GET"], endpoint="attendance_my_history")
    @login_required
    def my_history():
        records = container.attendance_service.get_history(
            current_principal(),
            month=optional_int(request.args.get("month"), "month"),
            year=optional_int(request.args.get("year"), "year"),
        )
        return jsonify({"attendance": [r.to_dict() for r in records]})

    @app.route("/api/attendance/all", methods=["GET"], endpoint="attendance_all")
    @login_required
    def all_attendance():
        rows = container.attendance_service.list_all(
            current_principal(),
            employee_code=request.args.get("employeeId"),
            start=_date_arg("startDate"),
            end=_date_arg("endDate"),
            status=request.args.get("status"),
        )
        return jsonify({"attendance": [r.to_dict() for r in rows]})

    @app.route("/api/attendance/employee/<int:employee_id>", methods=["GET"], endpoint="attendance_employee")
    @login_required
    def employee_attendance(employee_id: int):
        employee, records = container.attendance_service.get_employee_attendance(
            current_principal(),
            employee_id,
            month=optional_int(request.args.get("month"), "month"),
            year=optional_int(request.args.get("year"), "year"),
        )
        return jsonify(
            {
                "employee": {
                    "id": employee.employee_id,
                    "name": employee.name,
                    "email": employee.email,
                    "employeeId": employee.employee_code,
                    "department": employee.department,
                },
                "attendance": [r.to_dict() for r in records],
            }
        )
