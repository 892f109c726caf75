"""Force-stop every work session still running.

Meant for a scheduler (cron / Task Scheduler), e.g. once a day just after midnight:

    5 0 * * *  cd /srv/hr-worklog && python scripts/auto_end_work_sessions.py

Each forced STOP is dated 23:59:59 of the day its session started, so a run
after midnight still credits the previous day.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.hr_worklog.hr_worklog.main import configure_logging, container_from_settings, load_settings

logger = logging.getLogger("hr_worklog.auto_end")


def main() -> int:
    settings = load_settings()
    configure_logging(settings)

    print("Starting auto-end check...")
    result = container_from_settings(settings).sweeper.sweep()
    print(f"Completed. Auto-ended {result.ended} sessions.")

    if not result.ok:
        logger.error("Auto-end failed for user ids: %s", ", ".join(map(str, result.failed_user_ids)))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
