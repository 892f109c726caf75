from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import WorkLogStatus


@dataclass(frozen=True)
class WorkEvent:
    """Domain entity: one START/STOP fact. Immutable once appended."""

    event_id: int
    user_id: int
    status: WorkLogStatus
    occurred_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.event_id,
            "user_id": self.user_id,
            "status": self.status.value,
            "created_at": self.occurred_at.strftime("%Y-%m-%d %H:%M:%S"),
        }


@dataclass(frozen=True)
class DailySummary:
    """Persisted per-user, per-day total of closed session minutes."""

    summary_id: int
    user_id: int
    work_date: date
    total_minutes: int
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.summary_id,
            "user_id": self.user_id,
            "work_date": self.work_date.strftime("%Y-%m-%d"),
            "time_worked_minutes": self.total_minutes,
            "notes": self.notes or "",
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass(frozen=True)
class SessionWindow:
    """A matched START/STOP pair (transient, never stored)."""

    started_at: datetime
    stopped_at: datetime

    @property
    def duration_minutes(self) -> int:
        return whole_minutes_between(self.started_at, self.stopped_at)


@dataclass(frozen=True)
class CurrentStatusSnapshot:
    """Live projection for the running timer; recomputed on every request."""

    total_minutes_today: int
    last_status: Optional[WorkLogStatus]
    last_status_at: Optional[datetime]

    @property
    def is_running(self) -> bool:
        return self.last_status is WorkLogStatus.RUNNING

    def to_dict(self) -> dict:
        return {
            "total_minutes": self.total_minutes_today,
            "hours": self.total_minutes_today // 60,
            "minutes": self.total_minutes_today % 60,
            "last_status": self.last_status.value if self.last_status else None,
            "last_status_time": self.last_status_at.strftime("%Y-%m-%d %H:%M:%S") if self.last_status_at else None,
            "is_running": self.is_running,
        }


@dataclass(frozen=True)
class DayWorkReport:
    """Read-model for the per-day calculation endpoint."""

    work_date: date
    total_minutes: int
    last_status: Optional[WorkLogStatus]
    last_status_at: Optional[datetime]

    @property
    def hours(self) -> int:
        return self.total_minutes // 60

    @property
    def minutes(self) -> int:
        return self.total_minutes % 60

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.strftime("%Y-%m-%d"),
            "total_minutes": self.total_minutes,
            "hours": self.hours,
            "minutes": self.minutes,
            "last_status": self.last_status.value if self.last_status else None,
            "last_status_time": self.last_status_at.strftime("%Y-%m-%d %H:%M:%S") if self.last_status_at else None,
        }


def whole_minutes_between(start: datetime, end: datetime) -> int:
    """Elapsed whole minutes (floored), never negative."""
    seconds = (end - start).total_seconds()
    if seconds <= 0:
        return 0
    return int(seconds // 60)
