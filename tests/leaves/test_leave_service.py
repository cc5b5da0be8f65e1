from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from office_hr.core.enums import LeaveStatus, LeaveType, Role
from office_hr.core.exceptions import (
    AuthorizationError,
    InsufficientLeaveBalanceError,
    InvalidDateRangeError,
    InvalidStateTransitionError,
    NotFoundError,
    ValidationError,
)
from office_hr.core.identity import Actor
from office_hr.leaves.service import LeaveService
from office_hr.users.model import LeaveBalance
from tests.fakes import InMemoryLeaves, InMemoryUsers, make_user

ADMIN = Actor(user_id=1, role=Role.ADMIN)
EMPLOYEE = Actor(user_id=2, role=Role.EMPLOYEE)


def _service(balance: LeaveBalance | None = None, **kwargs):
    users = InMemoryUsers(make_user(1, role=Role.ADMIN), make_user(2, balance=balance))
    leaves = InMemoryLeaves(users)
    return LeaveService(leaves, users, **kwargs), leaves, users


def _request(svc, leave_type="annual", start=date(2026, 3, 2), end=date(2026, 3, 4)):
    return svc.create(EMPLOYEE, leave_type=leave_type, start_date=start, end_date=end, reason="Family trip")


def test_create_computes_days_and_starts_pending():
    svc, _, _ = _service()
    leave = _request(svc)

    assert leave.days == 3
    assert leave.status == LeaveStatus.PENDING
    assert leave.employee_id == 2
    assert leave.leave_type == LeaveType.ANNUAL


def test_create_rejects_inverted_range():
    svc, _, _ = _service()
    with pytest.raises(InvalidDateRangeError):
        _request(svc, start=date(2026, 3, 4), end=date(2026, 3, 2))


def test_create_rejects_unknown_type_and_blank_reason():
    svc, _, _ = _service()
    with pytest.raises(ValidationError):
        _request(svc, leave_type="vacation")
    with pytest.raises(ValidationError):
        svc.create(EMPLOYEE, leave_type="sick", start_date=date(2026, 3, 2), end_date=date(2026, 3, 2), reason="  ")


def test_approve_deducts_matching_balance():
    svc, _, users = _service()
    leave = _request(svc)

    approved = svc.approve(ADMIN, leave_id=leave.leave_id)

    assert approved.status == LeaveStatus.APPROVED
    assert approved.approved_by == 1
    balance = users.get_leave_balance(2)
    assert balance.annual == Decimal(17)
    assert balance.sick == Decimal(10)
    assert balance.casual == Decimal(5)


def test_reject_keeps_balance_and_records_reason():
    svc, _, users = _service()
    leave = _request(svc)

    rejected = svc.reject(ADMIN, leave_id=leave.leave_id, reason="Busy season")

    assert rejected.status == LeaveStatus.REJECTED
    assert rejected.rejection_reason == "Busy season"
    assert users.get_leave_balance(2).annual == Decimal(20)


@pytest.mark.parametrize("first", ["approve", "reject"])
@pytest.mark.parametrize("second", ["approve", "reject"])
def test_no_transition_out_of_terminal_state(first, second):
    svc, _, _ = _service()
    leave = _request(svc)
    getattr(svc, first)(ADMIN, leave_id=leave.leave_id)

    with pytest.raises(InvalidStateTransitionError):
        getattr(svc, second)(ADMIN, leave_id=leave.leave_id)


def test_employee_cannot_decide():
    svc, _, _ = _service()
    leave = _request(svc)

    with pytest.raises(AuthorizationError):
        svc.approve(EMPLOYEE, leave_id=leave.leave_id)
    with pytest.raises(AuthorizationError):
        svc.reject(EMPLOYEE, leave_id=leave.leave_id)


def test_unknown_leave_is_not_found():
    svc, _, _ = _service()
    with pytest.raises(NotFoundError):
        svc.approve(ADMIN, leave_id=99)


def test_overdraw_is_rejected_by_default():
    svc, leaves, users = _service(balance=LeaveBalance(annual=Decimal(2), sick=Decimal(10), casual=Decimal(5)))
    leave = _request(svc)

    with pytest.raises(InsufficientLeaveBalanceError):
        svc.approve(ADMIN, leave_id=leave.leave_id)

    assert leaves.get_by_id(leave.leave_id).status == LeaveStatus.PENDING
    assert users.get_leave_balance(2).annual == Decimal(2)


def test_overdraw_allowed_when_configured():
    svc, _, users = _service(
        balance=LeaveBalance(annual=Decimal(2), sick=Decimal(10), casual=Decimal(5)),
        allow_negative_balance=True,
    )
    leave = _request(svc)

    svc.approve(ADMIN, leave_id=leave.leave_id)

    assert users.get_leave_balance(2).annual == Decimal(-1)


def test_emergency_leave_does_not_touch_balance():
    svc, _, users = _service(balance=LeaveBalance())
    leave = _request(svc, leave_type="emergency")

    approved = svc.approve(ADMIN, leave_id=leave.leave_id)

    assert approved.status == LeaveStatus.APPROVED
    assert users.get_leave_balance(2) == LeaveBalance()


def test_listing_is_scoped_to_employee():
    svc, _, _ = _service()
    _request(svc)
    svc.create(ADMIN, leave_type="sick", start_date=date(2026, 3, 2), end_date=date(2026, 3, 2), reason="Flu")

    assert [l.employee_id for l in svc.list_leaves(EMPLOYEE)] == [2]
    assert len(svc.list_leaves(ADMIN)) == 2
    assert len(svc.list_leaves(ADMIN, status="approved")) == 0


def test_balance_of_someone_else_requires_admin():
    svc, _, _ = _service()

    assert svc.get_balance(ADMIN, employee_id=2).annual == Decimal(20)
    with pytest.raises(AuthorizationError):
        svc.get_balance(EMPLOYEE, employee_id=1)


class StaleBalanceUsers(InMemoryUsers):
    """Reports the balance as it was before another approval drained it."""

    def __init__(self, *users, stale: LeaveBalance):
        super().__init__(*users)
        self._stale = stale

    def get_leave_balance(self, user_id):
        return self._stale


def test_balance_drained_after_check_keeps_request_pending():
    users = StaleBalanceUsers(
        make_user(1, role=Role.ADMIN),
        make_user(2, balance=LeaveBalance(annual=Decimal(2), sick=Decimal(10), casual=Decimal(5))),
        stale=LeaveBalance(annual=Decimal(20), sick=Decimal(10), casual=Decimal(5)),
    )
    leaves = InMemoryLeaves(users)
    svc = LeaveService(leaves, users)
    leave = _request(svc)

    with pytest.raises(InsufficientLeaveBalanceError):
        svc.approve(ADMIN, leave_id=leave.leave_id)

    assert leaves.get_by_id(leave.leave_id).status == LeaveStatus.PENDING
    assert users.users[2].leave_balance.annual == Decimal(2)
