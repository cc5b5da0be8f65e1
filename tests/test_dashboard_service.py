from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from office_hr.attendance.model import AttendanceRecord
from office_hr.core.enums import AttendanceStatus, LeaveType, Role
from office_hr.core.exceptions import AuthorizationError
from office_hr.core.identity import Actor
from office_hr.dashboard.service import DashboardService
from office_hr.payroll.calculator.standard_calculator import StandardPayrollCalculator
from tests.fakes import InMemoryAttendance, InMemoryLeaves, InMemorySalaries, InMemoryUsers, make_user

TODAY = date(2026, 3, 5)
ADMIN = Actor(user_id=1, role=Role.ADMIN)
EMPLOYEE = Actor(user_id=2, role=Role.EMPLOYEE)


@pytest.fixture
def dashboard():
    users = InMemoryUsers(make_user(1, role=Role.ADMIN), make_user(2), make_user(3), make_user(4, is_active=False))
    attendance = InMemoryAttendance()
    leaves = InMemoryLeaves()
    salaries = InMemorySalaries()

    for offset, status in enumerate([AttendanceStatus.PRESENT, AttendanceStatus.LATE, AttendanceStatus.ABSENT]):
        day = TODAY - timedelta(days=offset)
        attendance.add(
            AttendanceRecord(
                attendance_id=offset + 1,
                employee_id=2,
                work_date=day,
                check_in=datetime.combine(day, datetime.min.time()).replace(hour=9),
                check_out=None,
                status=status,
            )
        )
    attendance.add(
        AttendanceRecord(
            attendance_id=10,
            employee_id=3,
            work_date=TODAY,
            check_in=datetime(2026, 3, 5, 9, 30),
            check_out=None,
            status=AttendanceStatus.LATE,
        )
    )
    leaves.insert_leave(
        employee_id=2, leave_type=LeaveType.ANNUAL, start_date=TODAY, end_date=TODAY, days=1, reason=""
    )
    leaves.insert_leave(
        employee_id=3, leave_type=LeaveType.SICK, start_date=TODAY, end_date=TODAY, days=1, reason=""
    )
    breakdown = StandardPayrollCalculator().calculate(basic_salary=Decimal("30000"), total_days=31, working_days=20)
    salaries.insert_salary_record(employee_id=2, month=3, year=2026, breakdown=breakdown)
    salaries.insert_salary_record(employee_id=3, month=2, year=2026, breakdown=breakdown)

    return DashboardService(users, attendance, leaves, salaries)


def test_employee_stats(dashboard):
    stats = dashboard.employee_stats(EMPLOYEE, today=TODAY)

    assert stats["today_attendance"]["status"] == "present"
    assert stats["monthly_attendance"] == 2
    assert stats["leave_balance"] == {"annual": "20", "sick": "10", "casual": "5"}
    assert stats["pending_leaves"] == 1
    assert stats["days_in_month"] == 31


def test_admin_stats(dashboard):
    stats = dashboard.admin_stats(ADMIN, today=TODAY)

    assert stats == {
        "total_employees": 2,
        "today_attendance": 2,
        "pending_leaves": 2,
        "unpaid_salaries": 1,
    }


def test_admin_stats_requires_admin(dashboard):
    with pytest.raises(AuthorizationError):
        dashboard.admin_stats(EMPLOYEE, today=TODAY)
