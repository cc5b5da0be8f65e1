from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds
from ..common.validators import require_month
from ..core.exceptions import DuplicatePeriodError, NotFoundError, ValidationError
from ..core.identity import Actor
from ..users.repository import UserRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import SalaryRecord
from .repository import SalaryRepository

logger = logging.getLogger(__name__)


class PayrollService:
    """Use case: generate monthly salaries from attendance and pay them."""

    def __init__(
        self,
        salaries: SalaryRepository,
        users: UserRepository,
        attendance: AttendanceRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._salaries = salaries
        self._users = users
        self._attendance = attendance
        self._calculator = calculator or StandardPayrollCalculator()

    def generate(self, actor: Actor, *, employee_id: int, month: int, year: int) -> SalaryRecord:
        actor.require_admin("Only admins can generate salaries")
        month, year = require_month(month, year)

        employee = self._users.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        if not employee.is_active:
            raise ValidationError("Employee is not active")

        # Fast path; the unique index is what actually guards against races.
        if self._salaries.get_for_period(employee_id=employee.user_id, month=month, year=year):
            raise DuplicatePeriodError("Salary already generated for this period")

        start, end, total_days = month_bounds(year, month)
        working_days = self._attendance.count_attended_days(
            employee_id=employee.user_id,
            start_date=start,
            end_date=end,
        )
        breakdown = self._calculator.calculate(
            basic_salary=employee.salary,
            total_days=total_days,
            working_days=working_days,
        )

        record = self._salaries.insert_salary_record(
            employee_id=employee.user_id,
            month=month,
            year=year,
            breakdown=breakdown,
        )
        logger.info(
            "Generated salary %s for employee %s (%02d/%s): net %s",
            record.salary_id, employee.user_id, month, year, record.net_salary,
        )
        return record

    def mark_paid(self, actor: Actor, *, salary_id: int) -> SalaryRecord:
        actor.require_admin("Only admins can mark salaries as paid")
        record = self._salaries.mark_paid(int(salary_id))
        logger.info("Salary %s marked as paid by %s", record.salary_id, actor.user_id)
        return record

    def list_salaries(
        self,
        actor: Actor,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[SalaryRecord]:
        if not actor.is_admin:
            employee_id = actor.user_id
        return self._salaries.list_salaries(employee_id=employee_id, month=month, year=year)
