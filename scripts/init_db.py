"""Create the database (if missing) and apply database/schema.sql.

Safe to re-run: every table is created with IF NOT EXISTS.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.hr_worklog.hr_worklog.database.bootstrap import apply_schema, list_tables
from src.hr_worklog.hr_worklog.main import configure_logging, load_settings

logger = logging.getLogger("hr_worklog.init_db")


def main() -> None:
    settings = load_settings()
    configure_logging(settings)
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = list_tables(db_config)
    logger.info("Schema applied to %s (%s)", db_config.get("database"), ", ".join(sorted(tables)))


if __name__ == "__main__":
    main()
