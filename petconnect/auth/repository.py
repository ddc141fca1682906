"""Repository for persisted users."""

from __future__ import annotations

import sqlite3
from typing import Any

from petconnect.auth.models import User, UserRole, normalize_email
from petconnect.core.database import Database


class EmailAlreadyExistsError(Exception):
    """Raised when a user row with the same email already exists."""


def _user_from_row(row: Any) -> User:
    return User(
        id=int(row["id"]),
        name=str(row["name"]),
        email=str(row["email"]),
        password_hash=str(row["password_hash"]),
        role=UserRole(str(row["role"])),
    )


class UserRepository:
    """SQLite-backed user store. Emails are matched case-insensitively."""

    def __init__(self, database: Database) -> None:
        self._database = database

    def get_by_email(self, email: str) -> User | None:
        with self._database.transaction() as cursor:
            row = cursor.execute(
                "SELECT id, name, email, password_hash, role FROM users WHERE email = ?",
                (normalize_email(email),),
            ).fetchone()
        return _user_from_row(row) if row else None

    def get_by_id(self, user_id: int) -> User | None:
        with self._database.transaction() as cursor:
            row = cursor.execute(
                "SELECT id, name, email, password_hash, role FROM users WHERE id = ?",
                (user_id,),
            ).fetchone()
        return _user_from_row(row) if row else None

    def create(
        self, *, name: str, email: str, password_hash: str, role: UserRole
    ) -> User:
        """Insert a user, relying on the unique index to reject duplicates."""
        normalized = normalize_email(email)
        try:
            with self._database.transaction() as cursor:
                cursor.execute(
                    "INSERT INTO users (name, email, password_hash, role) VALUES (?, ?, ?, ?)",
                    (name, normalized, password_hash, role.value),
                )
                user_id = int(cursor.lastrowid)
        except sqlite3.IntegrityError as exc:
            raise EmailAlreadyExistsError(normalized) from exc
        return User(
            id=user_id,
            name=name,
            email=normalized,
            password_hash=password_hash,
            role=role,
        )

    def count(self) -> int:
        with self._database.transaction() as cursor:
            row = cursor.execute("SELECT COUNT(*) AS total FROM users").fetchone()
        return int(row["total"])
