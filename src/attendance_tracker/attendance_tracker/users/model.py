from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role
from ..core.exceptions import AccessDenied


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee or manager account.

    Plain data object, no database access code here.
    """

    employee_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    department: str
    employee_code: str
    is_active: bool = True


@dataclass(frozen=True)
class Principal:
    """Authenticated caller handed to services (stored in the Flask session)."""

    employee_id: int
    role: Role
    name: str = ""
    employee_code: str = ""
    department: str = ""

    @classmethod
    def from_employee(cls, employee: Employee) -> "Principal":
        return cls(
            employee_id=employee.employee_id,
            role=employee.role,
            name=employee.name,
            employee_code=employee.employee_code,
            department=employee.department,
        )

    def require(self, role: Role) -> None:
        if self.role != role:
            raise AccessDenied("Access denied")


def public_profile(employee: Employee) -> dict:
    return {
        "id": employee.employee_id,
        "name": employee.name,
        "email": employee.email,
        "role": employee.role.value,
        "employeeId": employee.employee_code,
        "department": employee.department,
    }
