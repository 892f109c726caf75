from __future__ import annotations

from enum import Enum

from .exceptions import ValidationError


class Role(str, Enum):
    """User roles used for authorization."""

    HR = "hr"
    EMPLOYEE = "employee"


class WorkLogStatus(str, Enum):
    """Status carried by a work-log event (START / STOP)."""

    RUNNING = "running"
    STOPPED = "stopped"

    @property
    def is_running(self) -> bool:
        return self is WorkLogStatus.RUNNING

    @property
    def is_stopped(self) -> bool:
        return self is WorkLogStatus.STOPPED

    @classmethod
    def parse(cls, value: object) -> "WorkLogStatus":
        """Accept canonical values plus the legacy start/end/stop aliases."""
        if isinstance(value, cls):
            return value
        status = _STATUS_ALIASES.get(str(value or "").strip().lower())
        if status is None:
            raise ValidationError("Status must be one of: running, stopped")
        return status


_STATUS_ALIASES = {
    "running": WorkLogStatus.RUNNING,
    "start": WorkLogStatus.RUNNING,
    "stopped": WorkLogStatus.STOPPED,
    "stop": WorkLogStatus.STOPPED,
    "end": WorkLogStatus.STOPPED,
}
