from datetime import date, datetime
from decimal import Decimal

import mysql.connector
import pytest
from mysql.connector import errorcode

from office_hr.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from office_hr.core.enums import AttendanceStatus
from office_hr.core.exceptions import DuplicateCheckInError, DuplicatePeriodError
from office_hr.database.mysql_base import unique_violation_as
from office_hr.payroll.calculator.standard_calculator import StandardPayrollCalculator
from office_hr.payroll.mysql_salary_repository import MySQLSalaryRepository
from tests.database.scripted import ScriptedConnection, ScriptedConnectionFactory


def _duplicate_key():
    return mysql.connector.IntegrityError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY)


def test_duplicate_key_becomes_domain_error():
    with pytest.raises(DuplicatePeriodError, match="already generated") as info:
        with unique_violation_as(DuplicatePeriodError, "Salary already generated"):
            raise _duplicate_key()

    assert isinstance(info.value.__cause__, mysql.connector.IntegrityError)


def test_other_integrity_errors_pass_through():
    original = mysql.connector.IntegrityError(msg="FK failed", errno=errorcode.ER_NO_REFERENCED_ROW_2)

    with pytest.raises(mysql.connector.IntegrityError) as info:
        with unique_violation_as(DuplicateCheckInError, "Already checked in today"):
            raise original

    assert info.value is original


def test_second_checkin_row_is_reported_as_duplicate_and_rolled_back():
    conn = ScriptedConnection(_duplicate_key())
    repo = MySQLAttendanceRepository(ScriptedConnectionFactory(conn))

    with pytest.raises(DuplicateCheckInError):
        repo.insert_checkin(
            employee_id=2,
            work_date=date(2026, 3, 2),
            check_in=datetime(2026, 3, 2, 8, 55),
            status=AttendanceStatus.PRESENT,
        )

    assert conn.rolled_back
    assert not conn.committed


def test_second_salary_for_period_is_reported_as_duplicate():
    conn = ScriptedConnection(_duplicate_key())
    repo = MySQLSalaryRepository(ScriptedConnectionFactory(conn))
    breakdown = StandardPayrollCalculator().calculate(basic_salary=Decimal("30000"), total_days=30, working_days=25)

    with pytest.raises(DuplicatePeriodError):
        repo.insert_salary_record(employee_id=2, month=4, year=2026, breakdown=breakdown)

    assert conn.rolled_back
