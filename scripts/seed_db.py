"""Load database/seed.sql and (re)create the demo logins.

The demo work-log rows give employee@example.com one finished day so that
/api/work-log/reports has something to page through.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.hr_worklog.hr_worklog.database.bootstrap import DEMO_USERS, apply_seed_sql, ensure_demo_users
from src.hr_worklog.hr_worklog.main import configure_logging, load_settings

logger = logging.getLogger("hr_worklog.seed_db")


def main() -> None:
    settings = load_settings()
    configure_logging(settings)
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_demo_users(db_config)

    logger.info("Seeded %s", db_config.get("database"))
    for _, email, password, role, _ in DEMO_USERS:
        print(f"  {role:<9} {email} / {password}")


if __name__ == "__main__":
    main()
