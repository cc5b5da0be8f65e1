from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.exceptions import AlreadyCheckedOutError, DuplicateCheckInError, MissingCheckInError, ValidationError
from ..core.identity import Actor
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord
from .repository import AttendanceRepository
from .working_hours import compute_working_hours

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use case: daily check-in / check-out and attendance listing."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
    ):
        self._attendance = attendance
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def check_in(self, actor: Actor, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()

        if self._attendance.get_for_employee_and_date(actor.user_id, today):
            raise DuplicateCheckInError("Already checked in today")

        decision = self._factory.for_checkin(check_in=now).decide_checkin(check_in=now)
        record = self._attendance.insert_checkin(
            employee_id=actor.user_id,
            work_date=today,
            check_in=now,
            status=decision.status,
        )
        logger.info("Employee %s checked in at %s (%s)", actor.user_id, now.isoformat(), decision.status.value)
        return record

    def check_out(self, actor: Actor, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()

        record = self._attendance.get_for_employee_and_date(actor.user_id, today)
        if not record:
            raise MissingCheckInError("No check-in found for today")
        if record.is_checked_out:
            raise AlreadyCheckedOutError("Already checked out today")

        hours = compute_working_hours(record.check_in, now)
        updated = self._attendance.update_checkout(
            attendance_id=record.attendance_id,
            check_out=now,
            working_hours=hours,
        )
        logger.info("Employee %s checked out after %s hours", actor.user_id, hours)
        return updated

    def get_today(self, actor: Actor, today: date | None = None) -> Optional[AttendanceRecord]:
        today = today or now_local().date()
        return self._attendance.get_for_employee_and_date(actor.user_id, today)

    def list_attendance(
        self,
        actor: Actor,
        *,
        employee_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        """Admins see everyone (optionally one employee); employees only themselves."""

        if start and end and end < start:
            raise ValidationError("End date must not be before start date")

        if not actor.is_admin:
            employee_id = actor.user_id

        return self._attendance.list_attendance(employee_id=employee_id, start_date=start, end_date=end)
