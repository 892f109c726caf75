from __future__ import annotations

from datetime import date, datetime, time, timedelta

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def now_local() -> datetime:
    """Current local time, truncated to whole seconds.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now().replace(microsecond=0)


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Half-open [start, end) datetime window covering one calendar day."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def format_hours(total_minutes: int) -> str:
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"
