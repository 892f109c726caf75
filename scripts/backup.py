"""Dump the work-log tables with mysqldump into backups/.

Only users, work_logs and work_log_reports are dumped; the dump is taken in a
single transaction so events and daily summaries stay consistent.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.hr_worklog.hr_worklog.main import configure_logging, load_settings

logger = logging.getLogger("hr_worklog.backup")

TABLES = ("users", "work_logs", "work_log_reports")


def mysqldump_command(db: dict) -> list[str]:
    return [
        "mysqldump",
        f"--host={db['host']}",
        f"--port={db.get('port', 3306)}",
        f"--user={db['user']}",
        f"--password={db['password']}",
        "--single-transaction",
        db["database"],
        *TABLES,
    ]


def main() -> int:
    settings = load_settings()
    configure_logging(settings)
    db = settings.DB_CONFIG

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)
    out_file = out_dir / f"{db['database']}_{datetime.now():%Y%m%d_%H%M%S}.sql"

    try:
        with out_file.open("wb") as f:
            subprocess.run(mysqldump_command(db), stdout=f, stderr=subprocess.PIPE, check=True)
    except FileNotFoundError:
        logger.error("mysqldump not found; install the MySQL client tools first")
        return 1
    except subprocess.CalledProcessError as exc:
        out_file.unlink(missing_ok=True)
        logger.error("mysqldump failed: %s", exc.stderr.decode(errors="replace").strip())
        return 1

    logger.info("Backup written to %s", out_file)
    return 0


if __name__ == "__main__":
    sys.exit(main())
