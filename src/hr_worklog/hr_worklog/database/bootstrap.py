from __future__ import annotations

import re
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

import mysql.connector
from werkzeug.security import generate_password_hash


@dataclass(frozen=True)
class DBTarget:
    host: str
    port: int
    user: str
    password: str
    database: str


DEMO_USERS = (
    # (full_name, email, password, role, department)
    ("HR Demo", "hr@example.com", "hr123456", "hr", "Human Resources"),
    ("Employee Demo", "employee@example.com", "employee123", "employee", "Engineering"),
)


def _as_target(db_config: dict) -> DBTarget:
    return DBTarget(
        host=str(db_config.get("host", "localhost")),
        port=int(db_config.get("port", 3306)),
        user=str(db_config.get("user", "root")),
        password=str(db_config.get("password", "")),
        database=str(db_config.get("database", "hr_worklog")),
    )


@contextmanager
def _connect(db_config: dict, *, with_database: bool = True) -> Iterator:
    target = _as_target(db_config)
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    conn = mysql.connector.connect(**kwargs)
    try:
        yield conn
    finally:
        conn.close()


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql usable regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' outside quotes; '--' line comments are dropped."""
    buf: list[str] = []
    quote: str | None = None
    escape = False

    lines = [line for line in sql.splitlines() if not line.lstrip().startswith("--")]
    for ch in "\n".join(lines):
        if escape:
            buf.append(ch)
            escape = False
            continue
        if ch == "\\":
            buf.append(ch)
            escape = True
            continue
        if ch in ("'", '"'):
            if quote is None:
                quote = ch
            elif quote == ch:
                quote = None
            buf.append(ch)
            continue
        if ch == ";" and quote is None:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue
        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_script(db_config: dict, path: str | Path) -> None:
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))
    with _connect(db_config) as conn:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()


def ensure_database_exists(db_config: dict) -> None:
    target = _as_target(db_config)
    with _connect(db_config, with_database=False) as conn:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _run_script(db_config, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _run_script(db_config, seed_path)


def ensure_demo_users(db_config: dict) -> None:
    """Create or refresh the demo HR/employee logins with known passwords."""
    with _connect(db_config) as conn:
        cur = conn.cursor()
        for full_name, email, password, role, department in DEMO_USERS:
            cur.execute(
                """
                INSERT INTO users(full_name, email, password_hash, role, department, is_active)
                VALUES(%s,%s,%s,%s,%s,1)
                ON DUPLICATE KEY UPDATE
                    full_name=VALUES(full_name), password_hash=VALUES(password_hash),
                    role=VALUES(role), department=VALUES(department), is_active=1
                """,
                (full_name, email, generate_password_hash(password), role, department),
            )
        conn.commit()


def list_tables(db_config: dict) -> list[str]:
    with _connect(db_config) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
