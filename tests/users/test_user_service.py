from __future__ import annotations

import pytest
from werkzeug.security import generate_password_hash

from conftest import InMemoryUsers, make_employee
from src.attendance_tracker.attendance_tracker.core.enums import Role
from src.attendance_tracker.attendance_tracker.core.exceptions import AccessDenied, AuthenticationError, ValidationError
from src.attendance_tracker.attendance_tracker.users.model import Principal
from src.attendance_tracker.attendance_tracker.users.service import AuthService, UserService


def test_auth_wrong_password_raises():
    user = make_employee(1, password_hash=generate_password_hash("right"))
    auth = AuthService(InMemoryUsers([user]))

    with pytest.raises(AuthenticationError):
        auth.authenticate("person1@company.com", "wrong")


def test_auth_placeholder_hash_is_rejected():
    auth = AuthService(InMemoryUsers([make_employee(1, password_hash="CHANGE_ME")]))

    with pytest.raises(AuthenticationError):
        auth.authenticate("person1@company.com", "CHANGE_ME")


def test_auth_inactive_user_is_rejected():
    user = make_employee(1, password_hash=generate_password_hash("pw"), is_active=False)
    auth = AuthService(InMemoryUsers([user]))

    with pytest.raises(AuthenticationError):
        auth.authenticate("person1@company.com", "pw")


def test_auth_returns_principal():
    user = make_employee(1, password_hash=generate_password_hash("pw"), department="HR")
    auth = AuthService(InMemoryUsers([user]))

    principal = auth.authenticate(" Person1@Company.com ", "pw")

    assert principal == Principal(
        employee_id=1, role=Role.EMPLOYEE, name="Person 1", employee_code="EMP001", department="HR"
    )


def test_register_assigns_next_employee_code():
    users = InMemoryUsers([make_employee(1), make_employee(2)])

    created = UserService(users).register(name="New Person", email="new@company.com", password="secret1")

    assert created.employee_code == "EMP003"
    assert created.role == Role.EMPLOYEE
    assert created.department == "General"


def test_register_rejects_duplicate_email_and_bad_role():
    svc = UserService(InMemoryUsers([make_employee(1)]))

    with pytest.raises(ValidationError):
        svc.register(name="Dup", email="person1@company.com", password="secret1")
    with pytest.raises(ValidationError):
        svc.register(name="Boss", email="boss@company.com", password="secret1", role="admin")
    with pytest.raises(ValidationError):
        svc.register(name="Short", email="short@company.com", password="123")


def test_principal_require_role():
    Principal(employee_id=1, role=Role.MANAGER).require(Role.MANAGER)
    with pytest.raises(AccessDenied):
        Principal(employee_id=1, role=Role.EMPLOYEE).require(Role.MANAGER)
