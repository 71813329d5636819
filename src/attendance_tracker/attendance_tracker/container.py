from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core import constants
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import ReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    report_service: ReportService

    conn: Optional[DatabaseConnection] = None


def build_services(
    *,
    users_repo: UserRepository,
    attendance_repo: AttendanceRepository,
    settings: Any = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services around any repository pair (MySQL in production, in-memory in tests)."""

    def opt(name: str, default):
        return getattr(settings, name, default) if settings is not None else default

    factory = AttendanceStrategyFactory(
        late_hour=int(opt("LATE_HOUR", constants.DEFAULT_LATE_HOUR)),
        half_day_hours=Decimal(str(opt("HALF_DAY_HOURS", constants.DEFAULT_HALF_DAY_HOURS))),
    )
    attendance_service = AttendanceService(
        attendance_repo,
        users_repo,
        strategy_factory=factory,
        non_working_weekday=int(opt("NON_WORKING_WEEKDAY", constants.DEFAULT_NON_WORKING_WEEKDAY)),
        history_limit=int(opt("HISTORY_LIMIT", constants.DEFAULT_HISTORY_LIMIT)),
        manager_query_limit=int(opt("MANAGER_QUERY_LIMIT", constants.DEFAULT_MANAGER_QUERY_LIMIT)),
    )

    return Container(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        attendance_service=attendance_service,
        report_service=ReportService(
            attendance_repo,
            users_repo,
            trend_days=int(opt("TREND_DAYS", constants.DEFAULT_TREND_DAYS)),
        ),
        conn=conn,
    )


def build_container(*, db_config: dict, settings: Any = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(db_config))

    return build_services(
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        settings=settings,
        conn=conn,
    )
