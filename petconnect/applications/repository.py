"""Repository for adoption applications."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from petconnect.applications.models import Application, SubmitApplicationRequest
from petconnect.applications.state_machine import INITIAL_STATUS, ApplicationStatus
from petconnect.core.database import Database

_SELECT_WITH_PET = """
    SELECT
      a.id, a.pet_id, a.applicant_id, a.applicant_name, a.applicant_email,
      a.applicant_phone, a.home_type, a.has_yard, a.has_pets, a.experience,
      a.reason, a.status, a.submitted_date, a.shelter_id,
      p.name AS pet_name,
      p.image AS pet_image
    FROM applications a
    JOIN pets p ON p.id = a.pet_id
"""


def application_from_row(row: Any) -> Application:
    return Application(
        id=int(row["id"]),
        pet_id=int(row["pet_id"]),
        applicant_id=int(row["applicant_id"]),
        applicant_name=row["applicant_name"],
        applicant_email=row["applicant_email"],
        applicant_phone=row["applicant_phone"],
        home_type=row["home_type"],
        has_yard=bool(row["has_yard"]),
        has_pets=bool(row["has_pets"]),
        experience=row["experience"],
        reason=row["reason"],
        status=ApplicationStatus(row["status"]),
        submitted_date=datetime.fromisoformat(row["submitted_date"]),
        shelter_id=int(row["shelter_id"]),
        pet_name=row["pet_name"],
        pet_image=row["pet_image"],
    )


class ApplicationRepository:
    def __init__(self, database: Database) -> None:
        self._database = database

    def create(
        self,
        req: SubmitApplicationRequest,
        *,
        applicant_id: int,
        applicant_name: str,
        applicant_email: str,
        shelter_id: int,
        submitted_date: datetime,
    ) -> Application:
        """Insert a new application in the initial status."""
        with self._database.transaction() as cursor:
            cursor.execute(
                """
                INSERT INTO applications (
                  pet_id, applicant_id, applicant_name, applicant_email, applicant_phone,
                  home_type, has_yard, has_pets, experience, reason, status,
                  submitted_date, shelter_id
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    req.pet_id,
                    applicant_id,
                    applicant_name,
                    applicant_email,
                    req.applicant_phone,
                    req.home_type,
                    int(req.has_yard),
                    int(req.has_pets),
                    req.experience,
                    req.reason,
                    INITIAL_STATUS.value,
                    submitted_date.isoformat(),
                    shelter_id,
                ),
            )
            row = cursor.execute(
                _SELECT_WITH_PET + " WHERE a.id = ?", (cursor.lastrowid,)
            ).fetchone()
        return application_from_row(row)

    def list_for_applicant(self, applicant_id: int) -> list[Application]:
        return self._list_where("a.applicant_id = ?", applicant_id)

    def list_for_shelter(self, shelter_id: int) -> list[Application]:
        return self._list_where("a.shelter_id = ?", shelter_id)

    def get_for_shelter(self, application_id: int, shelter_id: int) -> Application | None:
        """Return the application only when ``shelter_id`` owns it."""
        with self._database.transaction() as cursor:
            row = cursor.execute(
                _SELECT_WITH_PET + " WHERE a.id = ? AND a.shelter_id = ?",
                (application_id, shelter_id),
            ).fetchone()
        return application_from_row(row) if row else None

    def compare_and_set_status(
        self,
        application_id: int,
        *,
        shelter_id: int,
        expected: ApplicationStatus,
        new: ApplicationStatus,
    ) -> Application | None:
        """Write ``new`` only if the row still has ``expected``.

        Returns the updated application, or ``None`` if the row changed or
        is not owned by ``shelter_id``.
        """
        with self._database.transaction() as cursor:
            cursor.execute(
                """
                UPDATE applications
                SET status = ?
                WHERE id = ? AND shelter_id = ? AND status = ?
                """,
                (new.value, application_id, shelter_id, expected.value),
            )
            if cursor.rowcount == 0:
                return None
            row = cursor.execute(
                _SELECT_WITH_PET + " WHERE a.id = ?", (application_id,)
            ).fetchone()
        return application_from_row(row)

    def _list_where(self, clause: str, value: int) -> list[Application]:
        with self._database.transaction() as cursor:
            rows = cursor.execute(
                _SELECT_WITH_PET + f" WHERE {clause} ORDER BY a.submitted_date DESC, a.id DESC",
                (value,),
            ).fetchall()
        return [application_from_row(row) for row in rows]
