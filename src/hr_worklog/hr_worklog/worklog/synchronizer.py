from __future__ import annotations

import logging
from datetime import date

from ..common.datetime_utils import day_bounds
from .aggregator import aggregate
from .model import DailySummary
from .repository import WorkLogReportRepository, WorkLogRepository

logger = logging.getLogger(__name__)


class DailyReportSynchronizer:
    """Keeps one summary row per (user, day) equal to that day's closed minutes.

    The total is rebuilt from every event of the day on each call, never
    incremented, so re-running ``sync_day`` repairs a row left stale by an
    earlier failure.
    """

    def __init__(self, logs: WorkLogRepository, reports: WorkLogReportRepository):
        self._logs = logs
        self._reports = reports

    def sync_day(self, user_id: int, work_date: date) -> DailySummary:
        start, end = day_bounds(work_date)
        events = self._logs.list_between(user_id=int(user_id), start=start, end=end)
        result = aggregate(events)

        summary = self._reports.upsert_total(
            user_id=int(user_id),
            work_date=work_date,
            total_minutes=result.total_minutes,
        )
        logger.debug(
            "Synced work log report user=%s date=%s total_minutes=%s (events=%d)",
            user_id,
            work_date,
            summary.total_minutes,
            len(events),
        )
        return summary
