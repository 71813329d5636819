"""Session-backed authorization gate.

Routes only need to know *who* is calling; role appropriateness is checked by
the services.
"""
from __future__ import annotations

from functools import wraps

from flask import jsonify, session

from ..core.enums import Role
from .model import Principal


def store_principal(principal: Principal) -> None:
    session["employee_id"] = principal.employee_id
    session["role"] = principal.role.value
    session["name"] = principal.name
    session["employee_code"] = principal.employee_code
    session["department"] = principal.department


def current_principal() -> Principal:
    return Principal(
        employee_id=int(session["employee_id"]),
        role=Role(session["role"]),
        name=session.get("name", ""),
        employee_code=session.get("employee_code", ""),
        department=session.get("department", ""),
    )


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "employee_id" not in session or "role" not in session:
            return jsonify({"message": "Not authorized, please log in"}), 401
        return view(*args, **kwargs)

    return wrapper
