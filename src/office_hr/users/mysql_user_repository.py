from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import LeaveType, Role
from ..core.exceptions import DuplicateEmailError, NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, unique_violation_as, where_clause
from .model import LeaveBalance, User
from .repository import UserRepository

BALANCE_COLUMNS = {
    LeaveType.ANNUAL: "leave_annual",
    LeaveType.SICK: "leave_sick",
    LeaveType.CASUAL: "leave_casual",
}

_COLUMNS = """
    user_id, full_name, email, role, department_id, designation_id,
    date_of_joining, salary, leave_annual, leave_sick, leave_casual, is_active
"""


def _balance_from_row(r: dict) -> LeaveBalance:
    return LeaveBalance(
        annual=Decimal(r["leave_annual"]),
        sick=Decimal(r["leave_sick"]),
        casual=Decimal(r["leave_casual"]),
    )


def _to_user(r: dict) -> User:
    return User(
        user_id=int(r["user_id"]),
        full_name=r["full_name"],
        email=r["email"],
        role=Role(r["role"]),
        department_id=r.get("department_id"),
        designation_id=r.get("designation_id"),
        date_of_joining=r.get("date_of_joining"),
        salary=Decimal(r["salary"]),
        leave_balance=_balance_from_row(r),
        is_active=bool(r["is_active"]),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            r = fetchone(cur)
            return _to_user(r) if r else None

    def get_leave_balance(self, user_id: int) -> Optional[LeaveBalance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT leave_annual, leave_sick, leave_casual FROM users WHERE user_id=%s",
                (int(user_id),),
            )
            r = fetchone(cur)
            return _balance_from_row(r) if r else None

    def count_active_employees(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS total FROM users WHERE role=%s AND is_active=1",
                (Role.EMPLOYEE.value,),
            )
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def insert_user(
        self,
        *,
        full_name: str,
        email: str,
        role: Role,
        department_id: Optional[int],
        designation_id: Optional[int],
        date_of_joining: Optional[date],
        salary: Decimal,
    ) -> User:
        with unique_violation_as(DuplicateEmailError, "Email is already registered"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO users(full_name, email, role, department_id, designation_id, date_of_joining, salary)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (full_name, email, role.value, department_id, designation_id, date_of_joining, salary),
                )
                cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (int(cur.lastrowid),))
                r = fetchone(cur)
        if not r:
            raise NotFoundError("Employee not found after insert")
        return _to_user(r)

    def update_user(
        self,
        user_id: int,
        *,
        full_name: str,
        email: str,
        department_id: Optional[int],
        designation_id: Optional[int],
        salary: Decimal,
        leave_balance: LeaveBalance,
    ) -> bool:
        with unique_violation_as(DuplicateEmailError, "Email is already registered"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE users
                    SET full_name=%s, email=%s, department_id=%s, designation_id=%s, salary=%s,
                        leave_annual=%s, leave_sick=%s, leave_casual=%s
                    WHERE user_id=%s
                    """,
                    (
                        full_name,
                        email,
                        department_id,
                        designation_id,
                        salary,
                        leave_balance.annual,
                        leave_balance.sick,
                        leave_balance.casual,
                        int(user_id),
                    ),
                )
                # MySQL reports 0 affected rows when nothing changed, so check existence separately.
                if cur.rowcount > 0:
                    return True
                cur.execute("SELECT 1 AS found FROM users WHERE user_id=%s", (int(user_id),))
                return fetchone(cur) is not None

    def set_active(self, user_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET is_active=%s WHERE user_id=%s", (1 if is_active else 0, int(user_id)))
            return cur.rowcount > 0

    def list_users(self, *, search: Optional[str] = None, include_inactive: bool = False) -> Sequence[User]:
        clauses: list[str] = []
        params: list[object] = []
        if not include_inactive:
            clauses.append("is_active=1")
        if search:
            clauses.append("(full_name LIKE %s OR email LIKE %s)")
            pattern = f"%{search.strip()}%"
            params.extend([pattern, pattern])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM users {where_clause(clauses)} ORDER BY created_at DESC",
                tuple(params),
            )
            return [_to_user(r) for r in fetchall(cur)]
