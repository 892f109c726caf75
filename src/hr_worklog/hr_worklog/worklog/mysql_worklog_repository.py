from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import WorkLogStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import WorkEvent
from .repository import WorkLogRepository


def _to_event(row: Dict[str, Any]) -> WorkEvent:
    return WorkEvent(
        event_id=int(row["work_log_id"]),
        user_id=int(row["user_id"]),
        status=WorkLogStatus(row["status"]),
        occurred_at=row["occurred_at"],
    )


class MySQLWorkLogRepository(WorkLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def lock_user(self, user_id: int) -> None:
        # Only meaningful inside DatabaseConnection.transaction(); the row lock
        # is held until that transaction commits or rolls back.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id FROM users WHERE user_id=%s FOR UPDATE", (int(user_id),))
            fetchall(cur)

    def append(self, *, user_id: int, status: WorkLogStatus, occurred_at: datetime) -> WorkEvent:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO work_logs(user_id, status, occurred_at)
                VALUES(%s,%s,%s)
                """,
                (int(user_id), status.value, occurred_at),
            )
            return WorkEvent(
                event_id=int(cur.lastrowid),
                user_id=int(user_id),
                status=status,
                occurred_at=occurred_at,
            )

    def most_recent(self, user_id: int) -> Optional[WorkEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT work_log_id, user_id, status, occurred_at
                FROM work_logs
                WHERE user_id=%s
                ORDER BY occurred_at DESC, work_log_id DESC
                LIMIT 1
                """,
                (int(user_id),),
            )
            row = fetchone(cur)
            return _to_event(row) if row else None

    def list_between(self, *, user_id: int, start: datetime, end: datetime) -> Sequence[WorkEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT work_log_id, user_id, status, occurred_at
                FROM work_logs
                WHERE user_id=%s AND occurred_at >= %s AND occurred_at < %s
                ORDER BY occurred_at ASC, work_log_id ASC
                """,
                (int(user_id), start, end),
            )
            return [_to_event(r) for r in fetchall(cur)]

    def list_running_user_ids(self) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT u.user_id
                FROM users u
                JOIN work_logs wl ON wl.work_log_id = (
                    SELECT w2.work_log_id
                    FROM work_logs w2
                    WHERE w2.user_id = u.user_id
                    ORDER BY w2.occurred_at DESC, w2.work_log_id DESC
                    LIMIT 1
                )
                WHERE u.is_active = 1 AND wl.status = %s
                ORDER BY u.user_id ASC
                """,
                (WorkLogStatus.RUNNING.value,),
            )
            return [int(r["user_id"]) for r in fetchall(cur)]
