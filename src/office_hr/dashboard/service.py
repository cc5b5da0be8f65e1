from __future__ import annotations

from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds, now_local
from ..core.enums import LeaveStatus
from ..core.exceptions import NotFoundError
from ..core.identity import Actor
from ..leaves.repository import LeaveRepository
from ..payroll.repository import SalaryRepository
from ..users.repository import UserRepository


class DashboardService:
    """Read-only summaries for the admin and employee landing pages."""

    def __init__(
        self,
        users: UserRepository,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        salaries: SalaryRepository,
    ):
        self._users = users
        self._attendance = attendance
        self._leaves = leaves
        self._salaries = salaries

    def employee_stats(self, actor: Actor, *, today: Optional[date] = None) -> dict:
        today = today or now_local().date()
        start, end, total_days = month_bounds(today.year, today.month)

        balance = self._users.get_leave_balance(actor.user_id)
        if balance is None:
            raise NotFoundError("Employee not found")

        today_record = self._attendance.get_for_employee_and_date(actor.user_id, today)
        return {
            "today_attendance": today_record.to_dict() if today_record else None,
            "monthly_attendance": self._attendance.count_attended_days(
                employee_id=actor.user_id, start_date=start, end_date=end
            ),
            "leave_balance": balance.to_dict(),
            "pending_leaves": self._leaves.count_by_status(LeaveStatus.PENDING, employee_id=actor.user_id),
            "days_in_month": total_days,
        }

    def admin_stats(self, actor: Actor, *, today: Optional[date] = None) -> dict:
        actor.require_admin()
        today = today or now_local().date()
        return {
            "total_employees": self._users.count_active_employees(),
            "today_attendance": self._attendance.count_attended_on(today),
            "pending_leaves": self._leaves.count_by_status(LeaveStatus.PENDING),
            "unpaid_salaries": self._salaries.count_unpaid(month=today.month, year=today.year),
        }
