from __future__ import annotations

import sqlite3
from pathlib import Path

from petconnect.core.database import Database
from petconnect.core.migrations import apply_migrations


def test_apply_migrations_creates_schema_once(tmp_path: Path) -> None:
    connection = sqlite3.connect(str(tmp_path / "state.db"))
    try:
        first = apply_migrations(connection)
        second = apply_migrations(connection)
        tables = {
            row[0]
            for row in connection.execute(
                "SELECT name FROM sqlite_master WHERE type='table'"
            ).fetchall()
        }
    finally:
        connection.close()

    assert first[0] == "0001_users.sql"
    assert "0003_applications.sql" in first
    assert second == []
    assert {"users", "pets", "applications", "favorites", "login_attempts"} <= tables


def test_database_lifecycle(tmp_path: Path) -> None:
    database = Database(tmp_path / "nested" / "petconnect.db")
    assert not database.is_open

    database.open()
    database.open()
    with database.transaction() as cursor:
        total = cursor.execute("SELECT COUNT(*) FROM schema_migrations").fetchone()[0]
    database.close()

    assert total >= 5
    assert not database.is_open
    assert database.path.exists()
