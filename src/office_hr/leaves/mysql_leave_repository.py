from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import InsufficientLeaveBalanceError, NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, where_clause
from ..users.mysql_user_repository import BALANCE_COLUMNS
from .model import LeaveRequest
from .repository import LeaveRepository

_COLUMNS = """
    leave_id, employee_id, leave_type, start_date, end_date, days, reason, status,
    created_at, approved_by, decided_at, rejection_reason
"""


def _to_leave(r: dict) -> LeaveRequest:
    approved_by = r.get("approved_by")
    return LeaveRequest(
        leave_id=int(r["leave_id"]),
        employee_id=int(r["employee_id"]),
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        days=int(r["days"]),
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        created_at=r["created_at"],
        approved_by=int(approved_by) if approved_by is not None else None,
        decided_at=r.get("decided_at"),
        rejection_reason=r.get("rejection_reason"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert_leave(
        self,
        *,
        employee_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        days: int,
        reason: str,
    ) -> LeaveRequest:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leaves(employee_id, leave_type, start_date, end_date, days, reason)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(employee_id), leave_type.value, start_date, end_date, int(days), reason),
            )
            leave_id = int(cur.lastrowid)
            cur.execute(f"SELECT {_COLUMNS} FROM leaves WHERE leave_id=%s", (leave_id,))
            r = fetchone(cur)
        if not r:
            raise NotFoundError("Leave request not found after insert")
        return _to_leave(r)

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leaves WHERE leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def decide(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        approved_by: int,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leaves
                SET status=%s, approved_by=%s, decided_at=NOW(), rejection_reason=%s
                WHERE leave_id=%s AND status=%s
                """,
                (
                    status.value,
                    int(approved_by),
                    rejection_reason,
                    int(leave_id),
                    LeaveStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def approve(self, *, leave_id: int, approved_by: int, allow_negative_balance: bool = False) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT employee_id, leave_type, days FROM leaves WHERE leave_id=%s AND status=%s FOR UPDATE",
                (int(leave_id), LeaveStatus.PENDING.value),
            )
            r = fetchone(cur)
            if not r:
                return False

            cur.execute(
                """
                UPDATE leaves
                SET status=%s, approved_by=%s, decided_at=NOW(), rejection_reason=NULL
                WHERE leave_id=%s AND status=%s
                """,
                (LeaveStatus.APPROVED.value, int(approved_by), int(leave_id), LeaveStatus.PENDING.value),
            )
            if cur.rowcount == 0:
                return False

            column = BALANCE_COLUMNS.get(LeaveType(r["leave_type"]))
            if column is None:
                return True

            days = int(r["days"])
            sql = f"UPDATE users SET {column} = {column} - %s WHERE user_id=%s"
            params: list[object] = [days, int(r["employee_id"])]
            if not allow_negative_balance:
                sql += f" AND {column} >= %s"
                params.append(days)
            cur.execute(sql, tuple(params))
            if cur.rowcount == 0:
                # Raising rolls the status change back with the rest of the transaction.
                raise InsufficientLeaveBalanceError("Not enough leave balance to approve this request")
            return True

    def list_leaves(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Optional[LeaveStatus] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        clauses: list[str] = []
        params: list[object] = []
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leaves
                {where_clause(clauses)}
                ORDER BY created_at DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def count_by_status(self, status: LeaveStatus, *, employee_id: Optional[int] = None) -> int:
        clauses = ["status=%s"]
        params: list[object] = [status.value]
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM leaves {where_clause(clauses)}", tuple(params))
            r = fetchone(cur)
            return int(r["total"]) if r else 0
