from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_AVERAGE_ZONE_MIN, DEFAULT_SAFE_ZONE_MIN, DEFAULT_TARGET_THRESHOLD
from .database.connection import DBConfig, DatabaseConnection
from .stats.dashboard import DashboardService
from .stats.engine import StatisticsEngine, ZoneBands
from .subjects.mysql_subject_repository import MySQLSubjectRepository
from .subjects.repository import SubjectRepository
from .subjects.service import SubjectService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, ProfileService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    subjects_repo: SubjectRepository
    attendance_repo: AttendanceRepository

    engine: StatisticsEngine

    auth_service: AuthService
    profile_service: ProfileService
    subject_service: SubjectService
    attendance_service: AttendanceService
    dashboard_service: DashboardService


def wire_container(
    *,
    users_repo: UserRepository,
    subjects_repo: SubjectRepository,
    attendance_repo: AttendanceRepository,
    engine: Optional[StatisticsEngine] = None,
    **service_kwargs,
) -> Container:
    """Build services on top of the given repositories (MySQL or in-memory)."""

    engine = engine or StatisticsEngine()
    return Container(
        users_repo=users_repo,
        subjects_repo=subjects_repo,
        attendance_repo=attendance_repo,
        engine=engine,
        auth_service=AuthService(users_repo),
        profile_service=ProfileService(users_repo),
        subject_service=SubjectService(subjects_repo),
        attendance_service=AttendanceService(attendance_repo, subjects_repo, engine=engine, **service_kwargs),
        dashboard_service=DashboardService(subjects_repo, attendance_repo, engine=engine),
    )


def build_container(
    *,
    db_config: dict,
    target_threshold: float = DEFAULT_TARGET_THRESHOLD,
    safe_zone_min: int = DEFAULT_SAFE_ZONE_MIN,
    average_zone_min: int = DEFAULT_AVERAGE_ZONE_MIN,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    engine = StatisticsEngine(
        target_threshold=target_threshold,
        bands=ZoneBands(safe_min=int(safe_zone_min), average_min=int(average_zone_min)),
    )
    return wire_container(
        users_repo=MySQLUserRepository(conn),
        subjects_repo=MySQLSubjectRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        engine=engine,
    )
