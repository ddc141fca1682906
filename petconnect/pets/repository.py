"""Repository for pet listings."""

from __future__ import annotations

import json
from typing import Any

from petconnect.core.database import Database
from petconnect.pets.models import CreatePetRequest, Pet, PetFilters

PET_COLUMNS = (
    "id, name, species, breed, age, size, gender, color, energy, "
    "good_with_kids, good_with_pets, description, traits, location, "
    "shelter, shelter_id, image, images"
)


def _json_list(raw: Any) -> list[str]:
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        return []
    return [str(item) for item in value] if isinstance(value, list) else []


def pet_from_row(row: Any) -> Pet:
    """Decode a ``pets`` row: 0/1 flags to bools, JSON text to lists."""
    return Pet(
        id=int(row["id"]),
        name=row["name"],
        species=row["species"],
        breed=row["breed"],
        age=row["age"],
        size=row["size"],
        gender=row["gender"],
        color=row["color"],
        energy=row["energy"],
        good_with_kids=bool(row["good_with_kids"]),
        good_with_pets=bool(row["good_with_pets"]),
        description=row["description"],
        traits=_json_list(row["traits"]),
        location=row["location"],
        shelter=row["shelter"],
        shelter_id=int(row["shelter_id"]),
        image=row["image"],
        images=_json_list(row["images"]),
    )


class PetRepository:
    def __init__(self, database: Database) -> None:
        self._database = database

    def search(self, filters: PetFilters | None = None) -> list[Pet]:
        clauses: list[str] = []
        params: list[Any] = []
        if filters is not None:
            for column in ("species", "size", "energy"):
                value = getattr(filters, column)
                if value:
                    clauses.append(f"{column} = ?")
                    params.append(value)
            if filters.location:
                clauses.append("LOWER(location) LIKE ?")
                params.append(f"%{filters.location.lower()}%")

        query = f"SELECT {PET_COLUMNS} FROM pets"
        if clauses:
            query += " WHERE " + " AND ".join(clauses)
        query += " ORDER BY id"
        with self._database.transaction() as cursor:
            rows = cursor.execute(query, params).fetchall()
        return [pet_from_row(row) for row in rows]

    def get(self, pet_id: int) -> Pet | None:
        with self._database.transaction() as cursor:
            row = cursor.execute(
                f"SELECT {PET_COLUMNS} FROM pets WHERE id = ?", (pet_id,)
            ).fetchone()
        return pet_from_row(row) if row else None

    def create(self, req: CreatePetRequest, *, shelter_id: int, shelter_name: str) -> Pet:
        with self._database.transaction() as cursor:
            cursor.execute(
                """
                INSERT INTO pets (
                  name, species, breed, age, size, gender, color, energy,
                  good_with_kids, good_with_pets, description, traits, location,
                  shelter, shelter_id, image, images
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    req.name,
                    req.species,
                    req.breed,
                    req.age,
                    req.size,
                    req.gender,
                    req.color,
                    req.energy,
                    int(req.good_with_kids),
                    int(req.good_with_pets),
                    req.description,
                    json.dumps(req.traits, ensure_ascii=False),
                    req.location,
                    req.shelter or shelter_name,
                    shelter_id,
                    req.image,
                    json.dumps(req.images, ensure_ascii=False),
                ),
            )
            row = cursor.execute(
                f"SELECT {PET_COLUMNS} FROM pets WHERE id = ?", (cursor.lastrowid,)
            ).fetchone()
        return pet_from_row(row)
