from __future__ import annotations

import logging
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, NotFound, ValidationError
from .model import Employee, Principal
from .repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> Principal:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.info("Rejected login for %s", user.email)
            raise AuthenticationError("Invalid credentials")

        return Principal.from_employee(user)

    def current_user(self, principal: Principal) -> Employee:
        user = self._users.get_by_id(principal.employee_id)
        if not user or not user.is_active:
            raise NotFound("User not found")
        return user


class UserService:
    """Use case: register accounts."""

    def __init__(self, users: UserRepository):
        self._users = users

    def register(
        self,
        *,
        name: str,
        email: str,
        password: str,
        role: Optional[str] = None,
        department: Optional[str] = None,
    ) -> Employee:
        name = require_non_empty(name, "Name")
        email = require_email(email)
        require_min_length(password, "Password", 6)

        try:
            role_value = Role(role or Role.EMPLOYEE.value)
        except ValueError:
            raise ValidationError("Invalid role")

        if self._users.get_by_email(email):
            raise ValidationError("User already exists")

        employee_code = self._users.next_employee_code(role_value)
        employee_id = self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role_value,
            department=(department or "").strip() or "General",
            employee_code=employee_code,
        )
        logger.info("Registered %s %s (%s)", role_value.value, employee_code, email)

        user = self._users.get_by_id(employee_id)
        if not user:
            raise NotFound("User not found")
        return user
