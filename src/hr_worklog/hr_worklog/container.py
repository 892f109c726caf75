from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .common.datetime_utils import now_local
from .common.locks import KeyedLock
from .common.pagination import PerPagePolicy
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import WorkLogReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService
from .worklog.mysql_report_repository import MySQLWorkLogReportRepository
from .worklog.mysql_worklog_repository import MySQLWorkLogRepository
from .worklog.repository import WorkLogReportRepository, WorkLogRepository
from .worklog.service import WorkLogService
from .worklog.sweeper import AutoEndSweeper
from .worklog.synchronizer import DailyReportSynchronizer


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    work_logs_repo: WorkLogRepository
    reports_repo: WorkLogReportRepository

    auth_service: AuthService
    synchronizer: DailyReportSynchronizer
    work_log_service: WorkLogService
    report_service: WorkLogReportService
    sweeper: AutoEndSweeper


def build_services(
    *,
    users_repo: UserRepository,
    work_logs_repo: WorkLogRepository,
    reports_repo: WorkLogReportRepository,
    conn: Optional[DatabaseConnection] = None,
    per_page_policy: Optional[PerPagePolicy] = None,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    """Wire services on top of any repository implementations."""
    synchronizer = DailyReportSynchronizer(work_logs_repo, reports_repo)
    work_log_service = WorkLogService(
        work_logs_repo,
        users_repo,
        synchronizer,
        transaction=conn.transaction if conn is not None else None,
        locks=KeyedLock(),
        clock=clock,
    )

    return Container(
        conn=conn,
        users_repo=users_repo,
        work_logs_repo=work_logs_repo,
        reports_repo=reports_repo,
        auth_service=AuthService(users_repo),
        synchronizer=synchronizer,
        work_log_service=work_log_service,
        report_service=WorkLogReportService(reports_repo, users_repo, per_page_policy=per_page_policy),
        sweeper=AutoEndSweeper(work_logs_repo, work_log_service, clock=clock),
    )


def build_container(*, db_config: dict, per_page_policy: Optional[PerPagePolicy] = None) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    return build_services(
        users_repo=MySQLUserRepository(conn),
        work_logs_repo=MySQLWorkLogRepository(conn),
        reports_repo=MySQLWorkLogReportRepository(conn),
        conn=conn,
        per_page_policy=per_page_policy,
    )
