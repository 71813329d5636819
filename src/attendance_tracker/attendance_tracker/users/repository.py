from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Employee


class UserRepository(Protocol):
    """Repository interface for the employee roster.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_by_ids(self, employee_ids: Iterable[int]) -> Sequence[Employee]:
        raise NotImplementedError

    def list_active(self, role: Role) -> Sequence[Employee]:
        raise NotImplementedError

    def count_active(self, role: Role) -> int:
        raise NotImplementedError

    def next_employee_code(self, role: Role) -> str:
        raise NotImplementedError

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
        raise NotImplementedError
