"""Repository for per-user favorite pets."""

from __future__ import annotations

from petconnect.core.database import Database
from petconnect.pets.models import Pet
from petconnect.pets.repository import PET_COLUMNS, pet_from_row

_PET_COLUMNS_P = ", ".join(f"p.{column.strip()}" for column in PET_COLUMNS.split(","))


class FavoriteRepository:
    def __init__(self, database: Database) -> None:
        self._database = database

    def list_pets(self, user_id: int) -> list[Pet]:
        with self._database.transaction() as cursor:
            rows = cursor.execute(
                f"""
                SELECT {_PET_COLUMNS_P}
                FROM favorites f
                JOIN pets p ON p.id = f.pet_id
                WHERE f.user_id = ?
                ORDER BY p.id
                """,
                (user_id,),
            ).fetchall()
        return [pet_from_row(row) for row in rows]

    def add(self, user_id: int, pet_id: int) -> bool:
        """Insert the pair if absent; return whether a row was created."""
        with self._database.transaction() as cursor:
            cursor.execute(
                "INSERT OR IGNORE INTO favorites (user_id, pet_id) VALUES (?, ?)",
                (user_id, pet_id),
            )
            return cursor.rowcount > 0

    def remove(self, user_id: int, pet_id: int) -> bool:
        with self._database.transaction() as cursor:
            cursor.execute(
                "DELETE FROM favorites WHERE user_id = ? AND pet_id = ?",
                (user_id, pet_id),
            )
            return cursor.rowcount > 0
