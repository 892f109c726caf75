"""Session aggregation over an ordered START/STOP event log.

Pure functions: nothing here reads or writes a store. Totals are always
recomputed from the full event list, so repeated calls over the same events
return the same result.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..core.enums import WorkLogStatus
from .model import SessionWindow, WorkEvent, whole_minutes_between

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregateResult:
    total_minutes: int
    last_status: Optional[WorkLogStatus]
    last_status_at: Optional[datetime]
    # Start of the trailing unmatched START, i.e. a session still running.
    open_since: Optional[datetime] = None


def chronological(events: Iterable[WorkEvent]) -> list[WorkEvent]:
    """Order by occurrence time, ties broken by insertion id."""
    return sorted(events, key=lambda e: (e.occurred_at, e.event_id))


def _scan(ordered: Sequence[WorkEvent]) -> tuple[list[SessionWindow], Optional[WorkEvent]]:
    windows: list[SessionWindow] = []
    open_start: Optional[WorkEvent] = None

    for event in ordered:
        if event.status is WorkLogStatus.RUNNING:
            if open_start is None:
                open_start = event
            else:
                logger.warning(
                    "Ignoring repeated START id=%s for user=%s; session open since %s",
                    event.event_id,
                    event.user_id,
                    open_start.occurred_at,
                )
        elif open_start is None:
            logger.warning(
                "Ignoring STOP id=%s for user=%s with no open session",
                event.event_id,
                event.user_id,
            )
        else:
            windows.append(SessionWindow(started_at=open_start.occurred_at, stopped_at=event.occurred_at))
            open_start = None

    return windows, open_start


def sessions(events: Iterable[WorkEvent]) -> list[SessionWindow]:
    """Matched START/STOP windows; unmatched events are skipped."""
    windows, _ = _scan(chronological(events))
    return windows


def aggregate(events: Iterable[WorkEvent], *, now: Optional[datetime] = None) -> AggregateResult:
    """Total closed-session minutes plus last status.

    With ``now`` given, a still-running trailing session contributes its
    elapsed minutes up to ``now`` (live view). Without it only closed
    sessions count, which is what the persisted daily summary stores.
    """
    ordered = chronological(events)
    if not ordered:
        return AggregateResult(total_minutes=0, last_status=None, last_status_at=None)

    windows, open_start = _scan(ordered)
    total = sum(w.duration_minutes for w in windows)

    open_since = open_start.occurred_at if open_start else None
    if open_since is not None and now is not None:
        total += whole_minutes_between(open_since, now)

    last = ordered[-1]
    return AggregateResult(
        total_minutes=total,
        last_status=last.status,
        last_status_at=last.occurred_at,
        open_since=open_since,
    )
