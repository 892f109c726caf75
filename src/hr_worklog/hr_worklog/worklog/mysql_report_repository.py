from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import DailySummary
from .repository import WorkLogReportRepository

_REPORT_COLUMNS = "report_id, user_id, work_date, time_worked_minutes, notes, created_at, updated_at"


def _to_summary(row: Dict[str, Any]) -> DailySummary:
    return DailySummary(
        summary_id=int(row["report_id"]),
        user_id=int(row["user_id"]),
        work_date=row["work_date"],
        total_minutes=int(row["time_worked_minutes"] or 0),
        notes=row.get("notes"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLWorkLogReportRepository(WorkLogReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert_total(self, *, user_id: int, work_date: date, total_minutes: int) -> DailySummary:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO work_log_reports(user_id, work_date, time_worked_minutes)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE time_worked_minutes=VALUES(time_worked_minutes)
                """,
                (int(user_id), work_date, int(total_minutes)),
            )
            cur.execute(
                f"SELECT {_REPORT_COLUMNS} FROM work_log_reports WHERE user_id=%s AND work_date=%s",
                (int(user_id), work_date),
            )
            return _to_summary(fetchone(cur))

    def get_by_id(self, summary_id: int) -> Optional[DailySummary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_REPORT_COLUMNS} FROM work_log_reports WHERE report_id=%s", (int(summary_id),))
            row = fetchone(cur)
            return _to_summary(row) if row else None

    def count_in_range(self, *, user_id: int, start_date: date, end_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS total
                FROM work_log_reports
                WHERE user_id=%s AND work_date BETWEEN %s AND %s
                """,
                (int(user_id), start_date, end_date),
            )
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def list_in_range(
        self,
        *,
        user_id: int,
        start_date: date,
        end_date: date,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Sequence[DailySummary]:
        sql = f"""
            SELECT {_REPORT_COLUMNS}
            FROM work_log_reports
            WHERE user_id=%s AND work_date BETWEEN %s AND %s
            ORDER BY work_date ASC
        """
        params: list[object] = [int(user_id), start_date, end_date]
        if limit is not None:
            sql += " LIMIT %s OFFSET %s"
            params.extend([int(limit), int(offset)])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_summary(r) for r in fetchall(cur)]

    def update_notes(self, *, summary_id: int, notes: str) -> Optional[DailySummary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE work_log_reports SET notes=%s WHERE report_id=%s", (notes, int(summary_id)))
            cur.execute(f"SELECT {_REPORT_COLUMNS} FROM work_log_reports WHERE report_id=%s", (int(summary_id),))
            row = fetchone(cur)
            return _to_summary(row) if row else None
