from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..core.exceptions import AlreadyCheckedOutError, DuplicateCheckInError, NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, unique_violation_as, where_clause
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, employee_id, work_date, check_in, check_out, status, working_hours"
_ATTENDED = (AttendanceStatus.PRESENT.value, AttendanceStatus.LATE.value)


def _to_record(r: dict) -> AttendanceRecord:
    hours = r.get("working_hours")
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        check_in=r["check_in"],
        check_out=r.get("check_out"),
        status=AttendanceStatus(r["status"]),
        working_hours=Decimal(hours) if hours is not None else None,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_by_id(self, cur, attendance_id: int) -> Optional[AttendanceRecord]:
        cur.execute(f"SELECT {_COLUMNS} FROM attendance WHERE attendance_id=%s", (int(attendance_id),))
        r = fetchone(cur)
        return _to_record(r) if r else None

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE employee_id=%s AND work_date=%s
                """,
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def insert_checkin(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in: datetime,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        with unique_violation_as(DuplicateCheckInError, "Already checked in today"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance(employee_id, work_date, check_in, status)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (int(employee_id), work_date, check_in, status.value),
                )
                attendance_id = int(cur.lastrowid)
        return AttendanceRecord(
            attendance_id=attendance_id,
            employee_id=int(employee_id),
            work_date=work_date,
            check_in=check_in,
            check_out=None,
            status=status,
        )

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out: datetime,
        working_hours: Decimal,
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET check_out=%s, working_hours=%s
                WHERE attendance_id=%s AND check_out IS NULL
                """,
                (check_out, working_hours, int(attendance_id)),
            )
            updated = cur.rowcount > 0
            record = self._get_by_id(cur, attendance_id)

        if record is None:
            raise NotFoundError("Attendance record not found")
        if not updated:
            raise AlreadyCheckedOutError("Already checked out today")
        return record

    def list_attendance(
        self,
        *,
        employee_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses: list[str] = []
        params: list[object] = []

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))
        if start_date is not None:
            clauses.append("work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("work_date <= %s")
            params.append(end_date)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                {where_clause(clauses)}
                ORDER BY work_date DESC, employee_id ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def count_attended_days(self, *, employee_id: int, start_date: date, end_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS total
                FROM attendance
                WHERE employee_id=%s AND work_date BETWEEN %s AND %s AND status IN (%s, %s)
                """,
                (int(employee_id), start_date, end_date, *_ATTENDED),
            )
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def count_attended_on(self, work_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS total FROM attendance WHERE work_date=%s AND status IN (%s, %s)",
                (work_date, *_ATTENDED),
            )
            r = fetchone(cur)
            return int(r["total"]) if r else 0
