from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from office_hr.attendance.model import AttendanceRecord
from office_hr.core.enums import AttendanceStatus, Role
from office_hr.core.exceptions import (
    AlreadyPaidError,
    AuthorizationError,
    DuplicatePeriodError,
    NotFoundError,
    ValidationError,
)
from office_hr.core.identity import Actor
from office_hr.payroll.service import PayrollService
from tests.fakes import InMemoryAttendance, InMemorySalaries, InMemoryUsers, make_user

ADMIN = Actor(user_id=1, role=Role.ADMIN)
EMPLOYEE = Actor(user_id=2, role=Role.EMPLOYEE)


def _attend(repo: InMemoryAttendance, employee_id: int, day: date, status: AttendanceStatus, rid: int) -> None:
    repo.add(
        AttendanceRecord(
            attendance_id=rid,
            employee_id=employee_id,
            work_date=day,
            check_in=datetime.combine(day, datetime.min.time()).replace(hour=9),
            check_out=None,
            status=status,
        )
    )


def _service():
    users = InMemoryUsers(make_user(1, role=Role.ADMIN), make_user(2, salary="30000"), make_user(3, is_active=False))
    attendance = InMemoryAttendance()
    salaries = InMemorySalaries()
    return PayrollService(salaries, users, attendance), attendance, salaries


def test_generate_counts_present_and_late_days_in_month():
    svc, attendance, _ = _service()
    # April 2026 has 30 days.
    rid = 0
    for day in range(1, 26):
        rid += 1
        status = AttendanceStatus.LATE if day % 5 == 0 else AttendanceStatus.PRESENT
        _attend(attendance, 2, date(2026, 4, day), status, rid)
    _attend(attendance, 2, date(2026, 4, 26), AttendanceStatus.ABSENT, 100)
    _attend(attendance, 2, date(2026, 3, 31), AttendanceStatus.PRESENT, 101)
    _attend(attendance, 2, date(2026, 5, 1), AttendanceStatus.PRESENT, 102)

    record = svc.generate(ADMIN, employee_id=2, month=4, year=2026)

    assert record.total_days == 30
    assert record.working_days == 25
    assert record.basic_salary == Decimal("25000")
    assert record.gross_salary == Decimal("29500")
    assert record.net_salary == Decimal("28600")
    assert record.is_paid is False


def test_second_generation_for_same_period_fails():
    svc, _, salaries = _service()
    first = svc.generate(ADMIN, employee_id=2, month=4, year=2026)

    with pytest.raises(DuplicatePeriodError):
        svc.generate(ADMIN, employee_id=2, month=4, year=2026)

    assert salaries.get_by_id(first.salary_id) == first


def test_other_period_is_independent():
    svc, _, _ = _service()
    svc.generate(ADMIN, employee_id=2, month=4, year=2026)
    svc.generate(ADMIN, employee_id=2, month=5, year=2026)


def test_february_leap_year_total_days():
    svc, _, _ = _service()
    assert svc.generate(ADMIN, employee_id=2, month=2, year=2028).total_days == 29


def test_generate_requires_admin():
    svc, _, _ = _service()
    with pytest.raises(AuthorizationError):
        svc.generate(EMPLOYEE, employee_id=2, month=4, year=2026)


def test_generate_validates_inputs():
    svc, _, _ = _service()
    with pytest.raises(ValidationError):
        svc.generate(ADMIN, employee_id=2, month=13, year=2026)
    with pytest.raises(NotFoundError):
        svc.generate(ADMIN, employee_id=42, month=4, year=2026)
    with pytest.raises(ValidationError):
        svc.generate(ADMIN, employee_id=3, month=4, year=2026)


def test_mark_paid_once():
    svc, _, _ = _service()
    record = svc.generate(ADMIN, employee_id=2, month=4, year=2026)

    paid = svc.mark_paid(ADMIN, salary_id=record.salary_id)
    assert paid.is_paid is True
    assert paid.paid_at is not None
    assert paid.net_salary == record.net_salary

    with pytest.raises(AlreadyPaidError):
        svc.mark_paid(ADMIN, salary_id=record.salary_id)


def test_mark_paid_requires_admin():
    svc, _, _ = _service()
    record = svc.generate(ADMIN, employee_id=2, month=4, year=2026)
    with pytest.raises(AuthorizationError):
        svc.mark_paid(EMPLOYEE, salary_id=record.salary_id)


def test_employee_only_sees_own_salaries():
    svc, _, salaries = _service()
    svc.generate(ADMIN, employee_id=2, month=4, year=2026)
    svc.generate(ADMIN, employee_id=1, month=4, year=2026)

    assert [r.employee_id for r in svc.list_salaries(EMPLOYEE, employee_id=1)] == [2]
    assert len(svc.list_salaries(ADMIN, month=4, year=2026)) == 2
