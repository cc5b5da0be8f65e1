from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import parse_time_of_day
from .core.constants import DEFAULT_CHECKIN_CUTOFF
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.service import LeaveService
from .organization.mysql_organization_repository import MySQLDepartmentRepository, MySQLDesignationRepository
from .organization.service import OrganizationService
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.mysql_salary_repository import MySQLSalaryRepository
from .payroll.rates import PayrollRates
from .payroll.service import PayrollService
from .tasks.mysql_task_repository import MySQLTaskRepository
from .tasks.service import TaskService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import EmployeeService


@dataclass(frozen=True)
class Container:
    attendance_service: AttendanceService
    leave_service: LeaveService
    payroll_service: PayrollService
    task_service: TaskService
    dashboard_service: DashboardService
    employee_service: EmployeeService
    organization_service: OrganizationService


def build_services(
    *,
    users,
    attendance,
    leaves,
    salaries,
    tasks,
    departments,
    designations,
    settings: ModuleType | object,
) -> Container:
    """Wire services on top of any repositories honouring the protocols."""

    cutoff_value = getattr(settings, "ATTENDANCE_CUTOFF", None)
    cutoff = parse_time_of_day(cutoff_value) if cutoff_value else DEFAULT_CHECKIN_CUTOFF
    rates = PayrollRates.from_mapping(getattr(settings, "PAYROLL_RATES", None))

    return Container(
        attendance_service=AttendanceService(
            attendance,
            strategy_factory=AttendanceStrategyFactory(cutoff=cutoff),
        ),
        leave_service=LeaveService(
            leaves,
            users,
            allow_negative_balance=bool(getattr(settings, "ALLOW_NEGATIVE_LEAVE_BALANCE", False)),
        ),
        payroll_service=PayrollService(
            salaries,
            users,
            attendance,
            calculator=StandardPayrollCalculator(rates),
        ),
        task_service=TaskService(tasks),
        dashboard_service=DashboardService(users, attendance, leaves, salaries),
        employee_service=EmployeeService(users, departments, designations),
        organization_service=OrganizationService(departments, designations),
    )


def build_container(*, conn: DatabaseConnection, settings: ModuleType | object) -> Container:
    return build_services(
        users=MySQLUserRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        leaves=MySQLLeaveRepository(conn),
        salaries=MySQLSalaryRepository(conn),
        tasks=MySQLTaskRepository(conn),
        departments=MySQLDepartmentRepository(conn),
        designations=MySQLDesignationRepository(conn),
        settings=settings,
    )


def connect(settings: ModuleType | object) -> DatabaseConnection:
    return DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))
