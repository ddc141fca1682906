"""Shared SQLite connection with explicit open/close lifecycle."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from threading import Lock
from typing import Iterator

from petconnect.core.migrations import apply_migrations

LOGGER = logging.getLogger(__name__)

# Largest value an SQLite INTEGER column can bind.
MAX_ROW_ID = 2**63 - 1


class DatabaseNotOpenError(RuntimeError):
    """Raised when storage is used before startup or after shutdown."""


class Database:
    """Single SQLite connection guarded by a lock.

    Request handlers run in a thread pool, so every statement goes through
    ``transaction()`` which serializes access and commits or rolls back.
    """

    def __init__(self, database_path: Path) -> None:
        self._database_path = database_path
        self._connection: sqlite3.Connection | None = None
        self._lock = Lock()

    @property
    def path(self) -> Path:
        return self._database_path

    @property
    def is_open(self) -> bool:
        return self._connection is not None

    def open(self) -> None:
        """Connect and apply pending migrations. Safe to call twice."""
        with self._lock:
            if self._connection is not None:
                return
            self._database_path.parent.mkdir(parents=True, exist_ok=True)
            connection = sqlite3.connect(
                str(self._database_path),
                check_same_thread=False,
            )
            connection.row_factory = sqlite3.Row
            connection.execute("PRAGMA foreign_keys = ON")
            apply_migrations(connection)
            self._connection = connection
        LOGGER.info("database_opened: %s", self._database_path)

    def close(self) -> None:
        with self._lock:
            if self._connection is None:
                return
            self._connection.close()
            self._connection = None
        LOGGER.info("database_closed: %s", self._database_path)

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor inside one atomic unit of work."""
        with self._lock:
            if self._connection is None:
                raise DatabaseNotOpenError("Database is not open")
            cursor = self._connection.cursor()
            try:
                yield cursor
            except BaseException:
                self._connection.rollback()
                raise
            else:
                self._connection.commit()
            finally:
                cursor.close()
