from __future__ import annotations

import importlib
import logging
from pathlib import Path
from types import ModuleType
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.pagination import PerPagePolicy
from .common.web import register_error_handlers
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .reports.controller import register as register_reports
from .users.controller import register as register_users
from .worklog.controller import register as register_work_log

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def load_settings() -> ModuleType:
    load_dotenv(override=False)
    return importlib.import_module(get_settings_module())


def configure_logging(settings: ModuleType) -> None:
    level = str(getattr(settings, "LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)


def per_page_policy(settings: ModuleType) -> PerPagePolicy:
    defaults = PerPagePolicy()
    return PerPagePolicy(
        default=int(getattr(settings, "REPORTS_DEFAULT_PER_PAGE", defaults.default)),
        minimum=int(getattr(settings, "REPORTS_MIN_PER_PAGE", defaults.minimum)),
        maximum=int(getattr(settings, "REPORTS_MAX_PER_PAGE", defaults.maximum)),
    )


def container_from_settings(settings: ModuleType) -> Container:
    return build_container(db_config=getattr(settings, "DB_CONFIG"), per_page_policy=per_page_policy(settings))


def _prepare_database(settings: ModuleType) -> None:
    db_config = getattr(settings, "DB_CONFIG")
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
        ensure_demo_users(db_config)
        logger.info("Demo seed ready")


def create_app(*, container: Optional[Container] = None) -> Flask:
    settings = load_settings()
    configure_logging(settings)

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings.__name__,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        _prepare_database(settings)
        container = container_from_settings(settings)

    app.extensions["hr_worklog"] = container
    register_error_handlers(app)

    register_users(app, container)
    register_work_log(app, container)
    register_reports(app, container)

    return app
