from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import format_hours
from ..common.pagination import Page, PerPagePolicy, require_page
from ..common.validators import require_date_range, require_max_length
from ..core.constants import NOTES_MAX_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, UnknownUserError
from ..users.repository import UserRepository
from ..worklog.model import DailySummary
from ..worklog.repository import WorkLogReportRepository


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    total_minutes: int

    @property
    def total_hours(self) -> str:
        return format_hours(self.total_minutes)


class WorkLogReportService:
    """Read access over synchronized daily summaries, plus the notes edit."""

    def __init__(
        self,
        reports: WorkLogReportRepository,
        users: UserRepository,
        *,
        per_page_policy: Optional[PerPagePolicy] = None,
    ):
        self._reports = reports
        self._users = users
        self._per_page = per_page_policy or PerPagePolicy()

    def resolve_target_user(self, *, current_user_id: int, current_role: Role, requested_user_id: Optional[int]) -> int:
        """HR may look at anyone; everybody else only at themselves."""
        if current_role != Role.HR or requested_user_id is None:
            return int(current_user_id)

        user = self._users.get_by_id(int(requested_user_id))
        if not user:
            raise UnknownUserError("User not found")
        return user.user_id

    def query_reports(
        self,
        *,
        user_id: int,
        start_date: date,
        end_date: date,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
    ) -> Page[DailySummary]:
        require_date_range(start_date, end_date)
        page = require_page(page)
        per_page = self._per_page.clamp(per_page)

        total = self._reports.count_in_range(user_id=int(user_id), start_date=start_date, end_date=end_date)
        items = self._reports.list_in_range(
            user_id=int(user_id),
            start_date=start_date,
            end_date=end_date,
            limit=per_page,
            offset=(page - 1) * per_page,
        )
        return Page(items=list(items), page=page, per_page=per_page, total=total)

    def build_export(self, *, user_id: int, start_date: date, end_date: date) -> ReportData:
        require_date_range(start_date, end_date)
        summaries = self._reports.list_in_range(user_id=int(user_id), start_date=start_date, end_date=end_date)

        rows = [
            {
                "work_date": s.work_date.strftime("%Y-%m-%d"),
                "user_id": s.user_id,
                "total_minutes": s.total_minutes,
                "worked_hours": format_hours(s.total_minutes),
                "notes": s.notes or "",
            }
            for s in summaries
        ]
        return ReportData(rows=rows, total_minutes=sum(s.total_minutes for s in summaries))

    def update_notes(
        self,
        *,
        current_user_id: int,
        current_role: Role,
        summary_id: int,
        notes: Optional[str],
    ) -> DailySummary:
        """Replace the free-text notes; the minute total is never touched here."""
        notes = require_max_length(notes, "Notes", NOTES_MAX_LENGTH)

        summary = self._reports.get_by_id(int(summary_id))
        if not summary:
            raise NotFoundError("Work log report not found")
        if current_role != Role.HR and summary.user_id != int(current_user_id):
            raise AuthorizationError("You are not allowed to edit this report")

        updated = self._reports.update_notes(summary_id=summary.summary_id, notes=notes)
        if not updated:
            raise NotFoundError("Work log report not found")
        return updated
