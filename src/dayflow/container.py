from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .attendance.sweep import AbsenteeSweepService
from .common.datetime_utils import Clock, make_clock
from .core.constants import DEFAULT_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_directory import MySQLEmployeeDirectory
from .employees.repository import EmployeeDirectory
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .reports.service import AttendanceStatsService
from .shifts.model import ShiftPolicy


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    attendance_repo: AttendanceRepository
    employee_directory: EmployeeDirectory
    leave_repo: LeaveRepository

    attendance_service: AttendanceService
    sweep_service: AbsenteeSweepService
    stats_service: AttendanceStatsService


def shift_policy_from_settings(settings: Optional[ModuleType]) -> ShiftPolicy:
    if settings is None:
        return ShiftPolicy()
    defaults = ShiftPolicy()
    return ShiftPolicy(
        start_time=str(getattr(settings, "SHIFT_START_TIME", defaults.start_time)),
        end_time=str(getattr(settings, "SHIFT_END_TIME", defaults.end_time)),
        expected_work_hours=float(getattr(settings, "EXPECTED_WORK_HOURS", defaults.expected_work_hours)),
    )


def wire_container(
    *,
    attendance_repo: AttendanceRepository,
    employee_directory: EmployeeDirectory,
    leave_repo: LeaveRepository,
    shift_policy: Optional[ShiftPolicy] = None,
    clock: Optional[Clock] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Assemble the services around already-built repositories."""

    clock = clock or make_clock(DEFAULT_TIMEZONE)

    attendance_service = AttendanceService(
        attendance_repo,
        shift_policy=shift_policy,
        clock=clock,
        strategy_factory=AttendanceStrategyFactory(),
    )
    sweep_service = AbsenteeSweepService(attendance_repo, employee_directory, leave_repo, clock=clock)
    stats_service = AttendanceStatsService(attendance_repo, clock=clock)

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        employee_directory=employee_directory,
        leave_repo=leave_repo,
        attendance_service=attendance_service,
        sweep_service=sweep_service,
        stats_service=stats_service,
    )


def build_container(*, db_config: dict, settings: Optional[ModuleType] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    tz_name = str(getattr(settings, "ATTENDANCE_TIMEZONE", DEFAULT_TIMEZONE))

    return wire_container(
        attendance_repo=MySQLAttendanceRepository(conn),
        employee_directory=MySQLEmployeeDirectory(conn),
        leave_repo=MySQLLeaveRepository(conn),
        shift_policy=shift_policy_from_settings(settings),
        clock=make_clock(tz_name),
        conn=conn,
    )
