from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.hr_worklog.hr_worklog.container import build_services
from src.hr_worklog.hr_worklog.core.enums import Role, WorkLogStatus
from src.hr_worklog.hr_worklog.users.model import User
from src.hr_worklog.hr_worklog.worklog.model import DailySummary, WorkEvent

HR_ID = 1
EMPLOYEE_ID = 2
OTHER_EMPLOYEE_ID = 3
INACTIVE_ID = 4


class InMemoryUsers:
    def __init__(self, users: list[User]):
        self.users_by_id = {u.user_id: u for u in users}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users_by_id.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users_by_id.values() if u.email == email), None)


class InMemoryWorkLogs:
    def __init__(self, users: InMemoryUsers):
        self._users = users
        self.events: list[WorkEvent] = []
        self.locked: list[int] = []
        self._id = 0

    def add(self, user_id: int, status: WorkLogStatus, occurred_at: datetime) -> WorkEvent:
        """Seed history directly, bypassing the service checks."""
        return self.append(user_id=user_id, status=status, occurred_at=occurred_at)

    def lock_user(self, user_id: int) -> None:
        self.locked.append(int(user_id))

    def append(self, *, user_id: int, status: WorkLogStatus, occurred_at: datetime) -> WorkEvent:
        self._id += 1
        event = WorkEvent(event_id=self._id, user_id=int(user_id), status=status, occurred_at=occurred_at)
        self.events.append(event)
        return event

    def _for_user(self, user_id: int) -> list[WorkEvent]:
        items = [e for e in self.events if e.user_id == int(user_id)]
        items.sort(key=lambda e: (e.occurred_at, e.event_id))
        return items

    def most_recent(self, user_id: int) -> Optional[WorkEvent]:
        items = self._for_user(user_id)
        return items[-1] if items else None

    def list_between(self, *, user_id: int, start: datetime, end: datetime):
        return [e for e in self._for_user(user_id) if start <= e.occurred_at < end]

    def list_running_user_ids(self):
        out = []
        for user_id, user in sorted(self._users.users_by_id.items()):
            last = self.most_recent(user_id)
            if user.is_active and last and last.status is WorkLogStatus.RUNNING:
                out.append(user_id)
        return out


class InMemoryReports:
    def __init__(self):
        self.rows: dict[tuple[int, date], DailySummary] = {}
        self.upserts = 0
        self._id = 0

    def add(self, user_id: int, work_date: date, total_minutes: int, notes: Optional[str] = None) -> DailySummary:
        summary = self.upsert_total(user_id=user_id, work_date=work_date, total_minutes=total_minutes)
        if notes is not None:
            summary = self.update_notes(summary_id=summary.summary_id, notes=notes)
        return summary

    def upsert_total(self, *, user_id: int, work_date: date, total_minutes: int) -> DailySummary:
        self.upserts += 1
        key = (int(user_id), work_date)
        existing = self.rows.get(key)
        if existing:
            summary = replace(existing, total_minutes=int(total_minutes))
        else:
            self._id += 1
            summary = DailySummary(
                summary_id=self._id,
                user_id=int(user_id),
                work_date=work_date,
                total_minutes=int(total_minutes),
            )
        self.rows[key] = summary
        return summary

    def get_by_id(self, summary_id: int) -> Optional[DailySummary]:
        return next((s for s in self.rows.values() if s.summary_id == int(summary_id)), None)

    def _in_range(self, user_id: int, start_date: date, end_date: date) -> list[DailySummary]:
        items = [
            s for s in self.rows.values() if s.user_id == int(user_id) and start_date <= s.work_date <= end_date
        ]
        return sorted(items, key=lambda s: s.work_date)

    def count_in_range(self, *, user_id: int, start_date: date, end_date: date) -> int:
        return len(self._in_range(user_id, start_date, end_date))

    def list_in_range(self, *, user_id: int, start_date: date, end_date: date, limit=None, offset: int = 0):
        items = self._in_range(user_id, start_date, end_date)[offset:]
        return items[:limit] if limit is not None else items

    def update_notes(self, *, summary_id: int, notes: str) -> Optional[DailySummary]:
        summary = self.get_by_id(summary_id)
        if not summary:
            return None
        updated = replace(summary, notes=notes)
        self.rows[(summary.user_id, summary.work_date)] = updated
        return updated


def make_user(user_id: int, role: Role = Role.EMPLOYEE, *, password: str = "secret123", is_active: bool = True) -> User:
    return User(
        user_id=user_id,
        full_name=f"User {user_id}",
        email=f"user{user_id}@example.com",
        password_hash=generate_password_hash(password),
        role=role,
        department="Engineering",
        is_active=is_active,
    )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 1, 18, 9, 0, 0)


@pytest.fixture
def users() -> InMemoryUsers:
    return InMemoryUsers(
        [
            make_user(HR_ID, Role.HR),
            make_user(EMPLOYEE_ID),
            make_user(OTHER_EMPLOYEE_ID),
            make_user(INACTIVE_ID, is_active=False),
        ]
    )


@pytest.fixture
def work_logs(users) -> InMemoryWorkLogs:
    return InMemoryWorkLogs(users)


@pytest.fixture
def reports() -> InMemoryReports:
    return InMemoryReports()


@pytest.fixture
def container(users, work_logs, reports, fixed_now):
    return build_services(
        users_repo=users,
        work_logs_repo=work_logs,
        reports_repo=reports,
        clock=lambda: fixed_now,
    )
