from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..common.serialization import dec, iso, parse_datetime, parse_decimal


@dataclass(frozen=True)
class Allowances:
    transport: Decimal
    medical: Decimal
    bonus: Decimal

    @property
    def total(self) -> Decimal:
        return self.transport + self.medical + self.bonus

    def to_dict(self) -> dict:
        return {"transport": dec(self.transport), "medical": dec(self.medical), "bonus": dec(self.bonus)}

    @classmethod
    def from_dict(cls, data: dict) -> "Allowances":
        return cls(
            transport=parse_decimal(data["transport"]),
            medical=parse_decimal(data["medical"]),
            bonus=parse_decimal(data["bonus"]),
        )


@dataclass(frozen=True)
class Deductions:
    tax: Decimal
    insurance: Decimal
    other: Decimal

    @property
    def total(self) -> Decimal:
        return self.tax + self.insurance + self.other

    def to_dict(self) -> dict:
        return {"tax": dec(self.tax), "insurance": dec(self.insurance), "other": dec(self.other)}

    @classmethod
    def from_dict(cls, data: dict) -> "Deductions":
        return cls(
            tax=parse_decimal(data["tax"]),
            insurance=parse_decimal(data["insurance"]),
            other=parse_decimal(data["other"]),
        )


@dataclass(frozen=True)
class PayrollBreakdown:
    """Output of a payroll calculator, before it is persisted."""

    basic_salary: Decimal
    allowances: Allowances
    deductions: Deductions
    total_days: int
    working_days: int
    gross_salary: Decimal
    net_salary: Decimal


@dataclass(frozen=True)
class SalaryRecord:
    """One generated salary per employee per (month, year).

    ``basic_salary`` is the pro-rated amount actually earned.
    """

    salary_id: int
    employee_id: int
    month: int
    year: int
    basic_salary: Decimal
    allowances: Allowances
    deductions: Deductions
    total_days: int
    working_days: int
    gross_salary: Decimal
    net_salary: Decimal
    is_paid: bool = False
    paid_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "salary_id": self.salary_id,
            "employee_id": self.employee_id,
            "month": self.month,
            "year": self.year,
            "basic_salary": dec(self.basic_salary),
            "allowances": self.allowances.to_dict(),
            "deductions": self.deductions.to_dict(),
            "total_days": self.total_days,
            "working_days": self.working_days,
            "gross_salary": dec(self.gross_salary),
            "net_salary": dec(self.net_salary),
            "is_paid": self.is_paid,
            "paid_at": iso(self.paid_at),
            "created_at": iso(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SalaryRecord":
        return cls(
            salary_id=int(data["salary_id"]),
            employee_id=int(data["employee_id"]),
            month=int(data["month"]),
            year=int(data["year"]),
            basic_salary=parse_decimal(data["basic_salary"]),
            allowances=Allowances.from_dict(data["allowances"]),
            deductions=Deductions.from_dict(data["deductions"]),
            total_days=int(data["total_days"]),
            working_days=int(data["working_days"]),
            gross_salary=parse_decimal(data["gross_salary"]),
            net_salary=parse_decimal(data["net_salary"]),
            is_paid=bool(data.get("is_paid", False)),
            paid_at=parse_datetime(data.get("paid_at")),
            created_at=parse_datetime(data.get("created_at")),
        )
