from __future__ import annotations

from datetime import date

from ..core.enums import LeaveStatus
from ..core.exceptions import InvalidDateRangeError, InvalidStateTransitionError

_ALLOWED = {
    LeaveStatus.PENDING: {LeaveStatus.APPROVED, LeaveStatus.REJECTED},
    LeaveStatus.APPROVED: set(),
    LeaveStatus.REJECTED: set(),
}


def leave_days(start_date: date, end_date: date) -> int:
    """Number of leave days, both ends inclusive."""
    if end_date < start_date:
        raise InvalidDateRangeError("End date must be on or after start date")
    return (end_date - start_date).days + 1


def ensure_transition(current: LeaveStatus, target: LeaveStatus) -> None:
    if target not in _ALLOWED[current]:
        raise InvalidStateTransitionError(f"Leave request is already {current.value}")
