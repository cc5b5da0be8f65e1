from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.serialization import dec, iso, parse_date, parse_decimal
from ..core.enums import LeaveType, Role


@dataclass(frozen=True)
class LeaveBalance:
    """Remaining leave days per type. Emergency leave has no counter."""

    annual: Decimal = Decimal("0")
    sick: Decimal = Decimal("0")
    casual: Decimal = Decimal("0")

    def get(self, leave_type: LeaveType) -> Optional[Decimal]:
        if leave_type == LeaveType.EMERGENCY:
            return None
        return getattr(self, leave_type.value)

    def deduct(self, leave_type: LeaveType, days: int) -> "LeaveBalance":
        current = self.get(leave_type)
        if current is None:
            return self
        return replace(self, **{leave_type.value: current - Decimal(days)})

    def to_dict(self) -> dict:
        return {"annual": dec(self.annual), "sick": dec(self.sick), "casual": dec(self.casual)}

    @classmethod
    def from_dict(cls, data: dict) -> "LeaveBalance":
        return cls(
            annual=parse_decimal(data.get("annual", 0)),
            sick=parse_decimal(data.get("sick", 0)),
            casual=parse_decimal(data.get("casual", 0)),
        )


@dataclass(frozen=True)
class User:
    """Domain entity: an employee or admin account.

    Plain data object; persistence lives in the repositories.
    """

    user_id: int
    full_name: str
    email: str
    role: Role
    department_id: Optional[int]
    designation_id: Optional[int]
    date_of_joining: Optional[date]
    salary: Decimal
    leave_balance: LeaveBalance
    is_active: bool = True

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "full_name": self.full_name,
            "email": self.email,
            "role": self.role.value,
            "department_id": self.department_id,
            "designation_id": self.designation_id,
            "date_of_joining": iso(self.date_of_joining),
            "salary": dec(self.salary),
            "leave_balance": self.leave_balance.to_dict(),
            "is_active": self.is_active,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            user_id=int(data["user_id"]),
            full_name=data["full_name"],
            email=data["email"],
            role=Role(data["role"]),
            department_id=data.get("department_id"),
            designation_id=data.get("designation_id"),
            date_of_joining=parse_date(data.get("date_of_joining")),
            salary=parse_decimal(data["salary"]),
            leave_balance=LeaveBalance.from_dict(data.get("leave_balance") or {}),
            is_active=bool(data.get("is_active", True)),
        )
