from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import PayrollBreakdown, SalaryRecord


class SalaryRepository(Protocol):
    def insert_salary_record(self, *, employee_id: int, month: int, year: int, breakdown: PayrollBreakdown) -> SalaryRecord:
        """Must raise DuplicatePeriodError if (employee, month, year) exists."""

        raise NotImplementedError

    def get_for_period(self, *, employee_id: int, month: int, year: int) -> Optional[SalaryRecord]:
        raise NotImplementedError

    def get_by_id(self, salary_id: int) -> Optional[SalaryRecord]:
        raise NotImplementedError

    def mark_paid(self, salary_id: int) -> SalaryRecord:
        """Must raise AlreadyPaidError if the record is already paid."""

        raise NotImplementedError

    def list_salaries(
        self,
        *,
        employee_id: Optional[int] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> Sequence[SalaryRecord]:
        raise NotImplementedError

    def count_unpaid(self, *, month: int, year: int) -> int:
        raise NotImplementedError
