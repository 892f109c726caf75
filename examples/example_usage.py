"""Example: use the service layer directly (without Flask).

Controllers are a thin layer; the work-log rules live in the services.
"""

from datetime import date, timedelta

from src.hr_worklog.hr_worklog.container import build_container
from src.hr_worklog.hr_worklog.main import load_settings


def main():
    settings = load_settings()
    container = build_container(db_config=settings.DB_CONFIG)

    print(container.work_log_service.today_status(2))

    end = date.today()
    page = container.report_service.query_reports(user_id=2, start_date=end - timedelta(days=30), end_date=end)
    for summary in page.items:
        print(summary.work_date, summary.total_minutes, summary.notes or "")


if __name__ == "__main__":
    main()
