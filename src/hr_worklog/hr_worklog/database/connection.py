from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, Optional

import mysql.connector

from ..core.exceptions import StoreUnavailableError


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str


class DatabaseConnection:
    """Singleton-like DB connection factory.

    Note: We create short-lived connections per operation (safe for simple Flask apps).
    Inside ``transaction()`` every repository call on the same thread reuses one
    connection, committed or rolled back as a unit.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config
        self._local = threading.local()

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self):
        try:
            return mysql.connector.connect(
                host=self._config.host,
                port=int(self._config.port),
                user=self._config.user,
                password=self._config.password,
                database=self._config.database,
            )
        except mysql.connector.Error as exc:
            raise StoreUnavailableError(str(exc)) from exc

    def active(self) -> Any:
        """Connection of the transaction open on this thread, if any."""
        return getattr(self._local, "conn", None)

    @contextmanager
    def transaction(self) -> Iterator[Any]:
        if self.active() is not None:
            # Nested: join the outer unit of work.
            yield self.active()
            return

        conn = self.connect()
        self._local.conn = conn
        try:
            # Reads after a row lock must see rows committed while waiting.
            conn.start_transaction(isolation_level="READ COMMITTED")
            yield conn
            conn.commit()
        except mysql.connector.Error as exc:
            conn.rollback()
            raise StoreUnavailableError(str(exc)) from exc
        except Exception:
            conn.rollback()
            raise
        finally:
            self._local.conn = None
            conn.close()
