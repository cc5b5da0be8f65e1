from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.validators import parse_enum, require_non_empty
from ..core.constants import ADMIN_LIST_LIMIT, DEFAULT_LIST_LIMIT
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import (
    AuthorizationError,
    InsufficientLeaveBalanceError,
    InvalidStateTransitionError,
    NotFoundError,
)
from ..core.identity import Actor
from ..users.model import LeaveBalance
from ..users.repository import UserRepository
from .model import LeaveRequest
from .repository import LeaveRepository
from .rules import ensure_transition, leave_days

logger = logging.getLogger(__name__)


class LeaveService:
    """Use case: employees request leave, admins approve or reject it."""

    def __init__(self, leaves: LeaveRepository, users: UserRepository, *, allow_negative_balance: bool = False):
        self._leaves = leaves
        self._users = users
        self._allow_negative_balance = bool(allow_negative_balance)

    def create(
        self,
        actor: Actor,
        *,
        leave_type: LeaveType | str,
        start_date: date,
        end_date: date,
        reason: str,
    ) -> LeaveRequest:
        leave_type = parse_enum(LeaveType, leave_type, "Leave type")

        days = leave_days(start_date, end_date)
        reason = require_non_empty(reason, "Reason")

        leave = self._leaves.insert_leave(
            employee_id=actor.user_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            days=days,
            reason=reason,
        )
        logger.info("Employee %s requested %s day(s) of %s leave", actor.user_id, days, leave_type.value)
        return leave

    def _get_pending(self, leave_id: int, target: LeaveStatus) -> LeaveRequest:
        leave = self._leaves.get_by_id(int(leave_id))
        if not leave:
            raise NotFoundError("Leave request not found")
        ensure_transition(leave.status, target)
        return leave

    def _reload(self, leave: LeaveRequest, decided: bool) -> LeaveRequest:
        if not decided:
            # Someone else decided it between our read and write.
            raise InvalidStateTransitionError("Leave request has already been decided")

        updated = self._leaves.get_by_id(leave.leave_id)
        if not updated:
            raise NotFoundError("Leave request not found")
        return updated

    def approve(self, actor: Actor, *, leave_id: int) -> LeaveRequest:
        actor.require_admin("Only admins can update leave status")
        leave = self._get_pending(leave_id, LeaveStatus.APPROVED)

        balance = self._users.get_leave_balance(leave.employee_id)
        if balance is None:
            raise NotFoundError("Employee not found")
        remaining = balance.get(leave.leave_type)
        if remaining is not None and remaining < leave.days and not self._allow_negative_balance:
            raise InsufficientLeaveBalanceError(
                f"Only {remaining} {leave.leave_type.value} day(s) left, {leave.days} requested"
            )

        decided = self._leaves.approve(
            leave_id=leave.leave_id,
            approved_by=actor.user_id,
            allow_negative_balance=self._allow_negative_balance,
        )
        updated = self._reload(leave, decided)
        logger.info("Leave %s approved by %s", leave.leave_id, actor.user_id)
        return updated

    def reject(self, actor: Actor, *, leave_id: int, reason: Optional[str] = None) -> LeaveRequest:
        actor.require_admin("Only admins can update leave status")
        leave = self._get_pending(leave_id, LeaveStatus.REJECTED)
        decided = self._leaves.decide(
            leave_id=leave.leave_id,
            status=LeaveStatus.REJECTED,
            approved_by=actor.user_id,
            rejection_reason=(reason or "").strip() or None,
        )
        updated = self._reload(leave, decided)
        logger.info("Leave %s rejected by %s", leave.leave_id, actor.user_id)
        return updated

    def list_leaves(self, actor: Actor, *, status: Optional[LeaveStatus | str] = None) -> Sequence[LeaveRequest]:
        status = parse_enum(LeaveStatus, status, "Status") if status else None
        if actor.is_admin:
            return self._leaves.list_leaves(status=status, limit=ADMIN_LIST_LIMIT)
        return self._leaves.list_leaves(employee_id=actor.user_id, status=status, limit=DEFAULT_LIST_LIMIT)

    def get_balance(self, actor: Actor, *, employee_id: Optional[int] = None) -> LeaveBalance:
        employee_id = actor.user_id if employee_id is None else int(employee_id)
        if employee_id != actor.user_id and not actor.is_admin:
            raise AuthorizationError("You can only view your own leave balance")

        balance = self._users.get_leave_balance(employee_id)
        if balance is None:
            raise NotFoundError("Employee not found")
        return balance
