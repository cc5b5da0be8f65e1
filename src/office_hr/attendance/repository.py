from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def insert_checkin(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in: datetime,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        """Must raise DuplicateCheckInError if a row exists for (employee, date)."""

        raise NotImplementedError

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out: datetime,
        working_hours: Decimal,
    ) -> AttendanceRecord:
        """Must raise AlreadyCheckedOutError if the row already has a check-out."""

        raise NotImplementedError

    def list_attendance(
        self,
        *,
        employee_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def count_attended_days(self, *, employee_id: int, start_date: date, end_date: date) -> int:
        """Rows with status present or late between the two dates (inclusive)."""

        raise NotImplementedError

    def count_attended_on(self, work_date: date) -> int:
        raise NotImplementedError
