from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import WorkLogStatus
from .model import DailySummary, WorkEvent


class WorkLogRepository(Protocol):
    """Append-only store of START/STOP events."""

    def lock_user(self, user_id: int) -> None:
        """Serialize writers for one user until the current transaction ends."""

        raise NotImplementedError

    def append(self, *, user_id: int, status: WorkLogStatus, occurred_at: datetime) -> WorkEvent:
        raise NotImplementedError

    def most_recent(self, user_id: int) -> Optional[WorkEvent]:
        raise NotImplementedError

    def list_between(self, *, user_id: int, start: datetime, end: datetime) -> Sequence[WorkEvent]:
        """Events with start <= occurred_at < end, oldest first."""

        raise NotImplementedError

    def list_running_user_ids(self) -> Sequence[int]:
        """Active users whose most recent event is a START."""

        raise NotImplementedError


class WorkLogReportRepository(Protocol):
    """Per-day summaries derived from the event log."""

    def upsert_total(self, *, user_id: int, work_date: date, total_minutes: int) -> DailySummary:
        """Create the row or overwrite its total; notes stay untouched."""

        raise NotImplementedError

    def get_by_id(self, summary_id: int) -> Optional[DailySummary]:
        raise NotImplementedError

    def count_in_range(self, *, user_id: int, start_date: date, end_date: date) -> int:
        raise NotImplementedError

    def list_in_range(
        self,
        *,
        user_id: int,
        start_date: date,
        end_date: date,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Sequence[DailySummary]:
        """Summaries with start_date <= work_date <= end_date, oldest first."""

        raise NotImplementedError

    def update_notes(self, *, summary_id: int, notes: str) -> Optional[DailySummary]:
        raise NotImplementedError
