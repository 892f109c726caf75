from __future__ import annotations

import logging
from contextlib import nullcontext
from datetime import date, datetime
from itertools import groupby
from typing import Callable, ContextManager, Optional

from ..common.datetime_utils import day_bounds, now_local
from ..common.locks import KeyedLock
from ..common.validators import require_date_range
from ..core.enums import WorkLogStatus
from ..core.exceptions import InvalidSequenceError, UnknownUserError
from ..users.repository import UserRepository
from .aggregator import aggregate, chronological
from .model import CurrentStatusSnapshot, DayWorkReport, WorkEvent
from .repository import WorkLogRepository
from .synchronizer import DailyReportSynchronizer

logger = logging.getLogger(__name__)


class WorkLogService:
    """Use cases: record START/STOP transitions and read computed work time."""

    def __init__(
        self,
        logs: WorkLogRepository,
        users: UserRepository,
        synchronizer: DailyReportSynchronizer,
        *,
        transaction: Optional[Callable[[], ContextManager]] = None,
        locks: Optional[KeyedLock] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._logs = logs
        self._users = users
        self._synchronizer = synchronizer
        self._transaction = transaction or nullcontext
        self._locks = locks or KeyedLock()
        self._clock = clock

    def _require_user(self, user_id: int) -> None:
        user = self._users.get_by_id(int(user_id))
        if not user or not user.is_active:
            raise UnknownUserError(f"User {user_id} not found")

    @staticmethod
    def _ensure_valid_sequence(last: Optional[WorkEvent], requested: WorkLogStatus) -> None:
        if last is None:
            if requested is WorkLogStatus.STOPPED:
                raise InvalidSequenceError("Invalid action sequence: no running session to stop")
            return
        if last.status is requested:
            raise InvalidSequenceError(f"Invalid action sequence: already {requested.value}")

    def record_transition(self, user_id: int, status: WorkLogStatus, *, now: Optional[datetime] = None) -> WorkEvent:
        """Append one START/STOP event; a STOP also re-syncs that day's summary.

        Append and sync run in one transaction under a per-user lock, so two
        concurrent requests for the same user cannot both pass validation.
        The store lock is taken before the first read of the transaction.
        """
        user_id = int(user_id)
        status = WorkLogStatus.parse(status)
        # Stored as DATETIME(0); keep the synced date equal to the stored one.
        occurred_at = (now or self._clock()).replace(microsecond=0)

        with self._locks.hold(user_id):
            with self._transaction():
                self._logs.lock_user(user_id)
                self._require_user(user_id)

                last = self._logs.most_recent(user_id)
                try:
                    self._ensure_valid_sequence(last, status)
                except InvalidSequenceError:
                    logger.info("Rejected %s for user=%s; last event %s", status.value, user_id, last)
                    raise

                event = self._logs.append(user_id=user_id, status=status, occurred_at=occurred_at)

                if event.status.is_stopped:
                    work_date = event.occurred_at.date()
                    try:
                        self._synchronizer.sync_day(user_id, work_date)
                    except Exception:
                        logger.exception(
                            "Daily summary sync failed for user=%s date=%s after event id=%s; "
                            "the next sync of that day repairs it",
                            user_id,
                            work_date,
                            event.event_id,
                        )
                        raise

        return event

    def today_status(self, user_id: int, *, now: Optional[datetime] = None) -> CurrentStatusSnapshot:
        """Live view: closed sessions today plus the running one up to ``now``."""
        now = now or self._clock()
        self._require_user(user_id)

        start, end = day_bounds(now.date())
        events = self._logs.list_between(user_id=int(user_id), start=start, end=end)
        result = aggregate(events, now=now)

        return CurrentStatusSnapshot(
            total_minutes_today=result.total_minutes,
            last_status=result.last_status,
            last_status_at=result.last_status_at,
        )

    def worked_minutes_by_date_range(
        self,
        user_id: int,
        start_date: date,
        end_date: Optional[date] = None,
    ) -> dict[date, DayWorkReport]:
        """Closed-session totals for each day in range that has any event."""
        end_date = end_date or start_date
        require_date_range(start_date, end_date)
        self._require_user(user_id)

        start, _ = day_bounds(start_date)
        _, end = day_bounds(end_date)
        events = self._logs.list_between(user_id=int(user_id), start=start, end=end)

        reports: dict[date, DayWorkReport] = {}
        for work_date, day_events in groupby(chronological(events), key=lambda e: e.occurred_at.date()):
            result = aggregate(list(day_events))
            reports[work_date] = DayWorkReport(
                work_date=work_date,
                total_minutes=result.total_minutes,
                last_status=result.last_status,
                last_status_at=result.last_status_at,
            )
        return reports
