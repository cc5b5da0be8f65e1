from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def insert_leave(
        self,
        *,
        employee_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        days: int,
        reason: str,
    ) -> LeaveRequest:
        raise NotImplementedError

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def decide(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        approved_by: int,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        """Apply the decision only while the request is still pending."""

        raise NotImplementedError

    def approve(self, *, leave_id: int, approved_by: int, allow_negative_balance: bool = False) -> bool:
        """Mark a pending request approved and deduct its days in one transaction.

        Returns False when the request is no longer pending. Raises
        ``InsufficientLeaveBalanceError`` (and keeps the request pending) when the
        counter would go below zero and ``allow_negative_balance`` is off.
        """

        raise NotImplementedError

    def list_leaves(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Optional[LeaveStatus] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def count_by_status(self, status: LeaveStatus, *, employee_id: Optional[int] = None) -> int:
        raise NotImplementedError
