from datetime import datetime, timedelta

from src.hr_worklog.hr_worklog.core.enums import WorkLogStatus
from src.hr_worklog.hr_worklog.worklog.aggregator import aggregate, chronological, sessions
from src.hr_worklog.hr_worklog.worklog.model import WorkEvent, whole_minutes_between

START = WorkLogStatus.RUNNING
STOP = WorkLogStatus.STOPPED


def _events(*pairs, user_id=2):
    return [
        WorkEvent(event_id=i, user_id=user_id, status=status, occurred_at=at)
        for i, (status, at) in enumerate(pairs, start=1)
    ]


def _at(hour, minute=0, second=0):
    return datetime(2026, 1, 15, hour, minute, second)


def test_empty_event_list_has_no_status():
    result = aggregate([])

    assert result.total_minutes == 0
    assert result.last_status is None
    assert result.last_status_at is None


def test_full_day_with_lunch_break_totals_435_minutes():
    events = _events(
        (START, _at(8, 15)),
        (STOP, _at(10, 0)),
        (START, _at(10, 30)),
        (STOP, _at(16, 0)),
    )

    result = aggregate(events)

    assert result.total_minutes == 435
    assert result.last_status is STOP
    assert result.last_status_at == _at(16, 0)


def test_trailing_start_counts_only_in_live_view():
    events = _events((START, _at(9, 0)), (STOP, _at(10, 0)), (START, _at(11, 0)))

    closed = aggregate(events)
    live = aggregate(events, now=_at(11, 45))

    assert closed.total_minutes == 60
    assert closed.open_since == _at(11, 0)
    assert live.total_minutes == 105
    assert live.last_status is START


def test_live_view_without_open_session_ignores_now():
    events = _events((START, _at(9, 0)), (STOP, _at(10, 0)))

    assert aggregate(events, now=_at(18, 0)).total_minutes == 60


def test_unmatched_stop_contributes_nothing(caplog):
    events = _events((STOP, _at(9, 0)))

    with caplog.at_level("WARNING"):
        result = aggregate(events)

    assert result.total_minutes == 0
    assert result.last_status is STOP
    assert "no open session" in caplog.text


def test_repeated_start_keeps_the_first_one():
    events = _events((START, _at(9, 0)), (START, _at(9, 30)), (STOP, _at(10, 0)))

    assert aggregate(events).total_minutes == 60


def test_sessions_are_additive():
    events = _events(
        (START, _at(8, 0)),
        (STOP, _at(9, 20)),
        (START, _at(13, 0)),
        (STOP, _at(13, 7)),
    )

    windows = sessions(events)

    assert [w.duration_minutes for w in windows] == [80, 7]
    assert aggregate(events).total_minutes == sum(w.duration_minutes for w in windows)


def test_partial_minutes_are_floored():
    events = _events((START, _at(9, 0, 0)), (STOP, _at(9, 0, 59)), (START, _at(9, 1, 0)), (STOP, _at(9, 3, 30)))

    assert aggregate(events).total_minutes == 2


def test_input_order_does_not_matter():
    events = _events(
        (START, _at(8, 15)),
        (STOP, _at(10, 0)),
        (START, _at(10, 30)),
        (STOP, _at(16, 0)),
    )

    assert aggregate(list(reversed(events))) == aggregate(events)


def test_ties_on_timestamp_follow_insertion_order():
    same = _at(9, 0)
    events = _events((START, same), (STOP, same))

    ordered = chronological(reversed(events))

    assert [e.status for e in ordered] == [START, STOP]
    assert aggregate(events).total_minutes == 0
    assert aggregate(events).last_status is STOP


def test_aggregation_is_deterministic():
    events = _events((START, _at(9, 0)), (STOP, _at(12, 0)))

    assert aggregate(events) == aggregate(events)


def test_whole_minutes_never_negative():
    start = _at(10, 0)

    assert whole_minutes_between(start, start - timedelta(minutes=5)) == 0
    assert whole_minutes_between(start, start + timedelta(seconds=119)) == 1
