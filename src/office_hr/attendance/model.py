from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..common.serialization import dec, iso, parse_date, parse_datetime, parse_decimal
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance row per employee per day.

    ``working_hours`` is only set once ``check_out`` is.
    """

    attendance_id: int
    employee_id: int
    work_date: date
    check_in: datetime
    check_out: Optional[datetime]
    status: AttendanceStatus
    working_hours: Optional[Decimal] = None

    @property
    def is_checked_out(self) -> bool:
        return self.check_out is not None

    def to_dict(self) -> dict:
        return {
            "attendance_id": self.attendance_id,
            "employee_id": self.employee_id,
            "work_date": iso(self.work_date),
            "check_in": iso(self.check_in),
            "check_out": iso(self.check_out),
            "status": self.status.value,
            "working_hours": dec(self.working_hours),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AttendanceRecord":
        return cls(
            attendance_id=int(data["attendance_id"]),
            employee_id=int(data["employee_id"]),
            work_date=parse_date(data["work_date"]),
            check_in=parse_datetime(data["check_in"]),
            check_out=parse_datetime(data.get("check_out")),
            status=AttendanceStatus(data["status"]),
            working_hours=parse_decimal(data.get("working_hours")),
        )
