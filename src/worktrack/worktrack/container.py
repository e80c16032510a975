from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_RESET_TOKEN_MAX_AGE, DEFAULT_WORKDAY_START
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .events.channel import ChangeChannel
from .leave.mysql_leave_repository import MySQLLeaveRepository
from .leave.repository import LeaveRepository
from .leave.service import LeaveService
from .mail.mailer import MailConfig, Mailer, SMTPMailer
from .preferences.store import PreferenceStore
from .tasks.mysql_task_repository import MySQLTaskRepository
from .tasks.repository import TaskRepository
from .tasks.service import TaskService
from .users.gate import SessionGate
from .users.mysql_profile_repository import MySQLProfileRepository
from .users.repository import ProfileRepository
from .users.service import AuthService, ProfileService


@dataclass(frozen=True)
class Container:
    profiles_repo: ProfileRepository
    attendance_repo: AttendanceRepository
    leave_repo: LeaveRepository
    tasks_repo: TaskRepository

    mailer: Mailer
    change_channel: ChangeChannel
    preference_store: PreferenceStore

    auth_service: AuthService
    profile_service: ProfileService
    session_gate: SessionGate
    attendance_service: AttendanceService
    leave_service: LeaveService
    task_service: TaskService
    dashboard_service: DashboardService


def assemble_container(
    *,
    profiles_repo: ProfileRepository,
    attendance_repo: AttendanceRepository,
    leave_repo: LeaveRepository,
    tasks_repo: TaskRepository,
    mailer: Mailer,
    secret_key: str,
    workday_start: time = DEFAULT_WORKDAY_START,
    reset_token_max_age: int = DEFAULT_RESET_TOKEN_MAX_AGE,
    default_theme: str = "system",
    default_language: str = "en",
) -> Container:
    """Wire services on top of the given repositories.

    Kept separate from build_container so an app can run on in-memory repositories.
    """

    change_channel = ChangeChannel()

    auth_service = AuthService(
        profiles_repo,
        secret_key=secret_key,
        mailer=mailer,
        reset_token_max_age=reset_token_max_age,
    )
    attendance_service = AttendanceService(
        attendance_repo,
        strategy_factory=AttendanceStrategyFactory(cutoff=workday_start),
    )

    return Container(
        profiles_repo=profiles_repo,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        tasks_repo=tasks_repo,
        mailer=mailer,
        change_channel=change_channel,
        preference_store=PreferenceStore(default_theme=default_theme, default_language=default_language),
        auth_service=auth_service,
        profile_service=ProfileService(profiles_repo),
        session_gate=SessionGate(auth_service),
        attendance_service=attendance_service,
        leave_service=LeaveService(leave_repo),
        task_service=TaskService(tasks_repo, profiles_repo, change_channel),
        dashboard_service=DashboardService(attendance_repo, tasks_repo),
    )


def build_container(
    *,
    db_config: dict,
    secret_key: str,
    mail: Optional[dict] = None,
    workday_start: time = DEFAULT_WORKDAY_START,
    reset_token_max_age: int = DEFAULT_RESET_TOKEN_MAX_AGE,
    default_theme: str = "system",
    default_language: str = "en",
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble_container(
        profiles_repo=MySQLProfileRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leave_repo=MySQLLeaveRepository(conn),
        tasks_repo=MySQLTaskRepository(conn),
        mailer=SMTPMailer(MailConfig.from_dict(mail)),
        secret_key=secret_key,
        workday_start=workday_start,
        reset_token_max_age=reset_token_max_age,
        default_theme=default_theme,
        default_language=default_language,
    )
