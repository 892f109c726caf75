from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from ..common.datetime_utils import day_bounds, now_local
from ..core.enums import WorkLogStatus
from ..core.exceptions import InvalidSequenceError
from .repository import WorkLogRepository
from .service import WorkLogService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SweepResult:
    ended: int
    failed_user_ids: tuple[int, ...] = ()
    # Stopped by someone else between listing and the forced stop.
    skipped_user_ids: tuple[int, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failed_user_ids


class AutoEndSweeper:
    """Force-stops every user left in a running session (end-of-day job).

    A session is closed on the calendar day it started, at 23:59:59 at the
    latest, so running the sweep after midnight still credits that day.
    """

    def __init__(
        self,
        logs: WorkLogRepository,
        work_logs: WorkLogService,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._logs = logs
        self._work_logs = work_logs
        self._clock = clock

    def _stop_time(self, user_id: int, now: datetime) -> datetime:
        last = self._logs.most_recent(user_id)
        if last is None or not last.status.is_running:
            return now
        _, next_midnight = day_bounds(last.occurred_at.date())
        return min(now, next_midnight - timedelta(seconds=1))

    def sweep(self, *, now: Optional[datetime] = None) -> SweepResult:
        now = now or self._clock()
        running = list(self._logs.list_running_user_ids())
        logger.info("Auto-end sweep: %d running session(s) found", len(running))

        ended = 0
        failed: list[int] = []
        skipped: list[int] = []
        for user_id in running:
            try:
                stop_at = self._stop_time(user_id, now)
                self._work_logs.record_transition(user_id, WorkLogStatus.STOPPED, now=stop_at)
            except InvalidSequenceError:
                logger.info("Auto-end sweep: user=%s already stopped, skipping", user_id)
                skipped.append(user_id)
            except Exception:
                logger.exception("Auto-end sweep: failed to stop session for user=%s", user_id)
                failed.append(user_id)
            else:
                logger.info("Auto-end sweep: stopped session for user=%s at %s", user_id, stop_at)
                ended += 1

        logger.info("Auto-ended %d work session(s); %d failed", ended, len(failed))
        return SweepResult(ended=ended, failed_user_ids=tuple(failed), skipped_user_ids=tuple(skipped))
