"""Business logic for submitting and reviewing adoption applications."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from petconnect.api.errors import ApiError, ApiErrorCode
from petconnect.applications.models import Application, SubmitApplicationRequest
from petconnect.applications.repository import ApplicationRepository
from petconnect.applications.state_machine import (
    InvalidStatusError,
    InvalidTransitionError,
    parse_status,
    transition,
)
from petconnect.auth.access import ensure_role
from petconnect.auth.models import SessionUser, UserRole
from petconnect.pets.repository import PetRepository

LOGGER = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _application_not_found(application_id: int) -> ApiError:
    # Also used for applications owned by another shelter.
    return ApiError(
        status_code=404,
        error_code=ApiErrorCode.APPLICATION_NOT_FOUND,
        message=f"Application not found: {application_id}",
    )


class ApplicationService:
    """Creates applications and drives their status lifecycle."""

    def __init__(
        self,
        *,
        repo: ApplicationRepository,
        pets: PetRepository,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._repo = repo
        self._pets = pets
        self._clock = clock

    def submit(self, actor: SessionUser, req: SubmitApplicationRequest) -> Application:
        """Create a pending application for an existing pet.

        The owning shelter is copied from the pet row, never from the client.
        """
        ensure_role(actor, UserRole.ADOPTER)
        pet = self._pets.get(req.pet_id)
        if pet is None:
            raise ApiError(
                status_code=404,
                error_code=ApiErrorCode.PET_NOT_FOUND,
                message=f"Pet not found: {req.pet_id}",
            )

        application = self._repo.create(
            req,
            applicant_id=actor.user_id,
            applicant_name=(req.applicant_name or "").strip() or actor.name,
            applicant_email=(req.applicant_email or "").strip() or actor.email,
            shelter_id=pet.shelter_id,
            submitted_date=self._clock(),
        )
        LOGGER.info(
            "application_submitted",
            extra={
                "application_id": application.id,
                "pet_id": pet.id,
                "user_id": actor.user_id,
            },
        )
        return application

    def list_for(self, actor: SessionUser) -> list[Application]:
        """Adopters see their own applications; shelters see those for their pets."""
        if actor.role == UserRole.SHELTER:
            return self._repo.list_for_shelter(actor.user_id)
        return self._repo.list_for_applicant(actor.user_id)

    def update_status(
        self, actor: SessionUser, application_id: int, requested: str
    ) -> Application:
        ensure_role(actor, UserRole.SHELTER)
        application = self._repo.get_for_shelter(application_id, actor.user_id)
        if application is None:
            raise _application_not_found(application_id)

        try:
            target = parse_status(requested)
        except InvalidStatusError as exc:
            raise ApiError(
                status_code=400,
                error_code=ApiErrorCode.APPLICATION_INVALID_STATUS,
                message="Invalid status",
            ) from exc

        try:
            new_status = transition(application.status, target)
        except InvalidTransitionError as exc:
            raise ApiError(
                status_code=409,
                error_code=ApiErrorCode.APPLICATION_INVALID_TRANSITION,
                message=str(exc),
            ) from exc
        if new_status == application.status:
            return application

        updated = self._repo.compare_and_set_status(
            application_id,
            shelter_id=actor.user_id,
            expected=application.status,
            new=new_status,
        )
        if updated is None:
            raise ApiError(
                status_code=409,
                error_code=ApiErrorCode.APPLICATION_INVALID_TRANSITION,
                message="Application status changed concurrently; reload and retry",
            )
        LOGGER.info(
            "application_status_changed",
            extra={
                "application_id": application_id,
                "user_id": actor.user_id,
                "from_status": application.status.value,
                "to_status": new_status.value,
            },
        )
        return updated
