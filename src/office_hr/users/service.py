from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..common.validators import parse_enum, require_non_empty, to_decimal
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..core.identity import Actor
from ..organization.repository import DepartmentRepository, DesignationRepository
from .model import LeaveBalance, User
from .repository import UserRepository

logger = logging.getLogger(__name__)


def _email(value: str) -> str:
    email = require_non_empty(value, "Email").lower()
    if "@" not in email:
        raise ValidationError("Email is not valid")
    return email


def _non_negative(value, field_name: str) -> Decimal:
    amount = to_decimal(value, field_name)
    if amount < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return amount


class EmployeeService:
    """Use case: admins maintain employee records (salary, placement, leave counters)."""

    def __init__(
        self,
        users: UserRepository,
        departments: DepartmentRepository,
        designations: DesignationRepository,
    ):
        self._users = users
        self._departments = departments
        self._designations = designations

    def _check_placement(self, department_id: Optional[int], designation_id: Optional[int]) -> None:
        if department_id is not None:
            department = self._departments.get_by_id(int(department_id))
            if not department or not department.is_active:
                raise ValidationError("Department does not exist")
        if designation_id is not None:
            designation = self._designations.get_by_id(int(designation_id))
            if not designation or not designation.is_active:
                raise ValidationError("Designation does not exist")

    def _get(self, employee_id: int) -> User:
        user = self._users.get_by_id(int(employee_id))
        if not user:
            raise NotFoundError("Employee not found")
        return user

    def create(
        self,
        actor: Actor,
        *,
        full_name: str,
        email: str,
        department_id: Optional[int] = None,
        designation_id: Optional[int] = None,
        date_of_joining: Optional[date] = None,
        salary=0,
        role: Role | str = Role.EMPLOYEE,
    ) -> User:
        actor.require_admin("Only admins can add employees")
        self._check_placement(department_id, designation_id)

        user = self._users.insert_user(
            full_name=require_non_empty(full_name, "Full name"),
            email=_email(email),
            role=parse_enum(Role, role, "Role"),
            department_id=department_id,
            designation_id=designation_id,
            date_of_joining=date_of_joining,
            salary=_non_negative(salary, "Salary"),
        )
        logger.info("Employee %s created by %s", user.user_id, actor.user_id)
        return user

    def update(
        self,
        actor: Actor,
        *,
        employee_id: int,
        full_name: Optional[str] = None,
        email: Optional[str] = None,
        department_id: Optional[int] = None,
        designation_id: Optional[int] = None,
        salary=None,
        leave_balance: Optional[dict] = None,
    ) -> User:
        """Partial update: ``None`` keeps the stored value."""

        actor.require_admin("Only admins can update employees")
        user = self._get(employee_id)
        self._check_placement(department_id, designation_id)

        balance = user.leave_balance
        if leave_balance is not None:
            if not isinstance(leave_balance, dict):
                raise ValidationError("Leave balance must be an object")
            balance = LeaveBalance(
                annual=_non_negative(leave_balance.get("annual", balance.annual), "Annual leave"),
                sick=_non_negative(leave_balance.get("sick", balance.sick), "Sick leave"),
                casual=_non_negative(leave_balance.get("casual", balance.casual), "Casual leave"),
            )

        self._users.update_user(
            user.user_id,
            full_name=require_non_empty(full_name, "Full name") if full_name is not None else user.full_name,
            email=_email(email) if email is not None else user.email,
            department_id=department_id if department_id is not None else user.department_id,
            designation_id=designation_id if designation_id is not None else user.designation_id,
            salary=_non_negative(salary, "Salary") if salary is not None else user.salary,
            leave_balance=balance,
        )
        logger.info("Employee %s updated by %s", user.user_id, actor.user_id)
        return self._get(user.user_id)

    def deactivate(self, actor: Actor, *, employee_id: int) -> None:
        actor.require_admin("Only admins can deactivate employees")
        if int(employee_id) == actor.user_id:
            raise ValidationError("You cannot deactivate your own account")
        user = self._get(employee_id)
        self._users.set_active(user.user_id, is_active=False)
        logger.info("Employee %s deactivated by %s", user.user_id, actor.user_id)

    def get(self, actor: Actor, *, employee_id: int) -> User:
        if int(employee_id) != actor.user_id and not actor.is_admin:
            raise AuthorizationError("You can only view your own profile")
        return self._get(employee_id)

    def list_employees(self, actor: Actor, *, search: Optional[str] = None) -> Sequence[User]:
        actor.require_admin("Only admins can list employees")
        return self._users.list_users(search=(search or "").strip() or None)
