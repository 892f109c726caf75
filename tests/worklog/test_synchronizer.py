from datetime import date, datetime

from src.hr_worklog.hr_worklog.core.enums import WorkLogStatus
from src.hr_worklog.hr_worklog.worklog.synchronizer import DailyReportSynchronizer

START = WorkLogStatus.RUNNING
STOP = WorkLogStatus.STOPPED

EMPLOYEE_ID = 2
DAY = date(2026, 1, 15)


def _seed_full_day(work_logs):
    work_logs.add(EMPLOYEE_ID, START, datetime(2026, 1, 15, 8, 15))
    work_logs.add(EMPLOYEE_ID, STOP, datetime(2026, 1, 15, 10, 0))
    work_logs.add(EMPLOYEE_ID, START, datetime(2026, 1, 15, 10, 30))
    work_logs.add(EMPLOYEE_ID, STOP, datetime(2026, 1, 15, 16, 0))


def test_sync_day_stores_closed_minutes(work_logs, reports):
    _seed_full_day(work_logs)

    summary = DailyReportSynchronizer(work_logs, reports).sync_day(EMPLOYEE_ID, DAY)

    assert summary.total_minutes == 435
    assert summary.work_date == DAY


def test_sync_day_is_idempotent(work_logs, reports):
    _seed_full_day(work_logs)
    sync = DailyReportSynchronizer(work_logs, reports)

    first = sync.sync_day(EMPLOYEE_ID, DAY)
    second = sync.sync_day(EMPLOYEE_ID, DAY)

    assert first == second
    assert len(reports.rows) == 1


def test_sync_day_repairs_stale_total_and_keeps_notes(work_logs, reports):
    reports.add(EMPLOYEE_ID, DAY, 12, notes="Client visit")
    _seed_full_day(work_logs)

    summary = DailyReportSynchronizer(work_logs, reports).sync_day(EMPLOYEE_ID, DAY)

    assert summary.total_minutes == 435
    assert summary.notes == "Client visit"


def test_open_session_is_not_persisted(work_logs, reports):
    work_logs.add(EMPLOYEE_ID, START, datetime(2026, 1, 15, 8, 0))
    work_logs.add(EMPLOYEE_ID, STOP, datetime(2026, 1, 15, 9, 0))
    work_logs.add(EMPLOYEE_ID, START, datetime(2026, 1, 15, 10, 0))

    summary = DailyReportSynchronizer(work_logs, reports).sync_day(EMPLOYEE_ID, DAY)

    assert summary.total_minutes == 60


def test_other_days_are_ignored(work_logs, reports):
    _seed_full_day(work_logs)
    work_logs.add(EMPLOYEE_ID, START, datetime(2026, 1, 16, 8, 0))
    work_logs.add(EMPLOYEE_ID, STOP, datetime(2026, 1, 16, 9, 0))

    summary = DailyReportSynchronizer(work_logs, reports).sync_day(EMPLOYEE_ID, date(2026, 1, 16))

    assert summary.total_minutes == 60
    assert (EMPLOYEE_ID, DAY) not in reports.rows
