from datetime import date, datetime

from src.hr_worklog.hr_worklog.core.enums import WorkLogStatus
from src.hr_worklog.hr_worklog.worklog.sweeper import AutoEndSweeper

START = WorkLogStatus.RUNNING
STOP = WorkLogStatus.STOPPED

EMPLOYEE_ID = 2
OTHER_EMPLOYEE_ID = 3
INACTIVE_ID = 4

SWEEP_AT = datetime(2026, 1, 15, 23, 59)


def test_only_running_users_are_stopped(container, work_logs, reports):
    work_logs.add(EMPLOYEE_ID, START, datetime(2026, 1, 15, 9, 0))
    work_logs.add(OTHER_EMPLOYEE_ID, START, datetime(2026, 1, 15, 8, 0))
    work_logs.add(OTHER_EMPLOYEE_ID, STOP, datetime(2026, 1, 15, 17, 0))

    result = container.sweeper.sweep(now=SWEEP_AT)

    assert result.ended == 1
    assert result.ok
    assert work_logs.most_recent(EMPLOYEE_ID).status is STOP
    assert work_logs.most_recent(EMPLOYEE_ID).occurred_at == SWEEP_AT
    assert len([e for e in work_logs.events if e.user_id == OTHER_EMPLOYEE_ID]) == 2
    assert reports.rows[(EMPLOYEE_ID, SWEEP_AT.date())].total_minutes == 899


def test_sweep_twice_ends_nothing_the_second_time(container, work_logs):
    work_logs.add(EMPLOYEE_ID, START, datetime(2026, 1, 15, 9, 0))

    assert container.sweeper.sweep(now=SWEEP_AT).ended == 1
    assert container.sweeper.sweep(now=SWEEP_AT).ended == 0


def test_inactive_users_are_left_alone(container, work_logs):
    work_logs.add(INACTIVE_ID, START, datetime(2026, 1, 15, 9, 0))

    result = container.sweeper.sweep(now=SWEEP_AT)

    assert result.ended == 0
    assert work_logs.most_recent(INACTIVE_ID).status is START


def test_one_failure_does_not_stop_the_sweep(container, work_logs, caplog):
    work_logs.add(EMPLOYEE_ID, START, datetime(2026, 1, 15, 9, 0))
    work_logs.add(OTHER_EMPLOYEE_ID, START, datetime(2026, 1, 15, 9, 0))

    class FlakyService:
        def record_transition(self, user_id, status, *, now=None):
            if user_id == EMPLOYEE_ID:
                raise RuntimeError("connection reset")
            return container.work_log_service.record_transition(user_id, status, now=now)

    with caplog.at_level("ERROR"):
        result = AutoEndSweeper(work_logs, FlakyService()).sweep(now=SWEEP_AT)

    assert result.ended == 1
    assert result.failed_user_ids == (EMPLOYEE_ID,)
    assert not result.ok
    assert work_logs.most_recent(OTHER_EMPLOYEE_ID).status is STOP
    assert "failed to stop session" in caplog.text


def test_user_stopped_meanwhile_is_skipped(container, work_logs):
    work_logs.add(EMPLOYEE_ID, START, datetime(2026, 1, 15, 9, 0))

    class StaleListing:
        def most_recent(self, user_id):
            return work_logs.most_recent(user_id)

        def list_running_user_ids(self):
            return [EMPLOYEE_ID]

    container.work_log_service.record_transition(EMPLOYEE_ID, STOP, now=datetime(2026, 1, 15, 18, 0))
    result = AutoEndSweeper(StaleListing(), container.work_log_service).sweep(now=SWEEP_AT)

    assert result.ended == 0
    assert result.skipped_user_ids == (EMPLOYEE_ID,)
    assert result.ok


def test_sweep_after_midnight_closes_session_on_its_own_day(container, work_logs, reports):
    work_logs.add(EMPLOYEE_ID, START, datetime(2026, 1, 15, 9, 0))

    result = container.sweeper.sweep(now=datetime(2026, 1, 16, 0, 5))

    assert result.ended == 1
    assert work_logs.most_recent(EMPLOYEE_ID).occurred_at == datetime(2026, 1, 15, 23, 59, 59)
    assert reports.rows[(EMPLOYEE_ID, date(2026, 1, 15))].total_minutes == 899
    assert (EMPLOYEE_ID, date(2026, 1, 16)) not in reports.rows


def test_sweep_without_time_uses_the_clock(container, work_logs, fixed_now):
    work_logs.add(EMPLOYEE_ID, START, fixed_now.replace(hour=8))

    container.sweeper.sweep()

    assert work_logs.most_recent(EMPLOYEE_ID).occurred_at == fixed_now
