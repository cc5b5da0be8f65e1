from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import LeaveBalance, User


class UserRepository(Protocol):
    """Repository interface for users.

    Note (DIP): services depend on this protocol, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_leave_balance(self, user_id: int) -> Optional[LeaveBalance]:
        raise NotImplementedError

    def count_active_employees(self) -> int:
        raise NotImplementedError

    def insert_user(
        self,
        *,
        full_name: str,
        email: str,
        role: Role,
        department_id: Optional[int],
        designation_id: Optional[int],
        date_of_joining: Optional[date],
        salary: Decimal,
    ) -> User:
        """Raises ``DuplicateEmailError`` when the email is taken."""

        raise NotImplementedError

    def update_user(
        self,
        user_id: int,
        *,
        full_name: str,
        email: str,
        department_id: Optional[int],
        designation_id: Optional[int],
        salary: Decimal,
        leave_balance: LeaveBalance,
    ) -> bool:
        raise NotImplementedError

    def set_active(self, user_id: int, *, is_active: bool) -> bool:
        raise NotImplementedError

    def list_users(self, *, search: Optional[str] = None, include_inactive: bool = False) -> Sequence[User]:
        raise NotImplementedError
