from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.serialization import iso, parse_date, parse_datetime
from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    leave_id: int
    employee_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    days: int
    reason: str
    status: LeaveStatus
    created_at: datetime
    approved_by: Optional[int] = None
    decided_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "leave_id": self.leave_id,
            "employee_id": self.employee_id,
            "leave_type": self.leave_type.value,
            "start_date": iso(self.start_date),
            "end_date": iso(self.end_date),
            "days": self.days,
            "reason": self.reason,
            "status": self.status.value,
            "created_at": iso(self.created_at),
            "approved_by": self.approved_by,
            "decided_at": iso(self.decided_at),
            "rejection_reason": self.rejection_reason,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LeaveRequest":
        approved_by = data.get("approved_by")
        return cls(
            leave_id=int(data["leave_id"]),
            employee_id=int(data["employee_id"]),
            leave_type=LeaveType(data["leave_type"]),
            start_date=parse_date(data["start_date"]),
            end_date=parse_date(data["end_date"]),
            days=int(data["days"]),
            reason=data["reason"],
            status=LeaveStatus(data["status"]),
            created_at=parse_datetime(data["created_at"]),
            approved_by=int(approved_by) if approved_by is not None else None,
            decided_at=parse_datetime(data.get("decided_at")),
            rejection_reason=data.get("rejection_reason"),
        )
