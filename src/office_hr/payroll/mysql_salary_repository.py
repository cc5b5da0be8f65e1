from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..core.exceptions import AlreadyPaidError, DuplicatePeriodError, NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, unique_violation_as, where_clause
from .model import Allowances, Deductions, PayrollBreakdown, SalaryRecord
from .repository import SalaryRepository

_COLUMNS = """
    salary_id, employee_id, month, year, basic_salary,
    transport, medical, bonus, tax, insurance, other_deductions,
    total_days, working_days, gross_salary, net_salary, is_paid, paid_at, created_at
"""


def _to_salary(r: dict) -> SalaryRecord:
    return SalaryRecord(
        salary_id=int(r["salary_id"]),
        employee_id=int(r["employee_id"]),
        month=int(r["month"]),
        year=int(r["year"]),
        basic_salary=Decimal(r["basic_salary"]),
        allowances=Allowances(
            transport=Decimal(r["transport"]),
            medical=Decimal(r["medical"]),
            bonus=Decimal(r["bonus"]),
        ),
        deductions=Deductions(
            tax=Decimal(r["tax"]),
            insurance=Decimal(r["insurance"]),
            other=Decimal(r["other_deductions"]),
        ),
        total_days=int(r["total_days"]),
        working_days=int(r["working_days"]),
        gross_salary=Decimal(r["gross_salary"]),
        net_salary=Decimal(r["net_salary"]),
        is_paid=bool(r["is_paid"]),
        paid_at=r.get("paid_at"),
        created_at=r.get("created_at"),
    )


class MySQLSalaryRepository(SalaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select_one(self, cur, clause: str, params: tuple) -> Optional[SalaryRecord]:
        cur.execute(f"SELECT {_COLUMNS} FROM salaries WHERE {clause}", params)
        r = fetchone(cur)
        return _to_salary(r) if r else None

    def insert_salary_record(self, *, employee_id: int, month: int, year: int, breakdown: PayrollBreakdown) -> SalaryRecord:
        b = breakdown
        with unique_violation_as(DuplicatePeriodError, "Salary already generated for this period"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO salaries(
                        employee_id, month, year, basic_salary,
                        transport, medical, bonus, tax, insurance, other_deductions,
                        total_days, working_days, gross_salary, net_salary
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(employee_id),
                        int(month),
                        int(year),
                        b.basic_salary,
                        b.allowances.transport,
                        b.allowances.medical,
                        b.allowances.bonus,
                        b.deductions.tax,
                        b.deductions.insurance,
                        b.deductions.other,
                        b.total_days,
                        b.working_days,
                        b.gross_salary,
                        b.net_salary,
                    ),
                )
                record = self._select_one(cur, "salary_id=%s", (int(cur.lastrowid),))
        if record is None:
            raise NotFoundError("Salary record not found after insert")
        return record

    def get_for_period(self, *, employee_id: int, month: int, year: int) -> Optional[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._select_one(
                cur,
                "employee_id=%s AND month=%s AND year=%s",
                (int(employee_id), int(month), int(year)),
            )

    def get_by_id(self, salary_id: int) -> Optional[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._select_one(cur, "salary_id=%s", (int(salary_id),))

    def mark_paid(self, salary_id: int) -> SalaryRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE salaries SET is_paid=1, paid_at=NOW() WHERE salary_id=%s AND is_paid=0",
                (int(salary_id),),
            )
            updated = cur.rowcount > 0
            record = self._select_one(cur, "salary_id=%s", (int(salary_id),))

        if record is None:
            raise NotFoundError("Salary record not found")
        if not updated:
            raise AlreadyPaidError("Salary has already been paid")
        return record

    def list_salaries(
        self,
        *,
        employee_id: Optional[int] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> Sequence[SalaryRecord]:
        clauses: list[str] = []
        params: list[object] = []
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))
        if month is not None:
            clauses.append("month=%s")
            params.append(int(month))
        if year is not None:
            clauses.append("year=%s")
            params.append(int(year))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM salaries
                {where_clause(clauses)}
                ORDER BY year DESC, month DESC, employee_id ASC
                """,
                tuple(params),
            )
            return [_to_salary(r) for r in fetchall(cur)]

    def count_unpaid(self, *, month: int, year: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS total FROM salaries WHERE month=%s AND year=%s AND is_paid=0",
                (int(month), int(year)),
            )
            r = fetchone(cur)
            return int(r["total"]) if r else 0
