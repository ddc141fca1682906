"""FastAPI router for pet listings."""

from __future__ import annotations

from fastapi import APIRouter, Path, Query, Request

from petconnect.api.contracts import ApiErrorResponse
from petconnect.api.errors import ApiError, ApiErrorCode
from petconnect.auth.access import require_role
from petconnect.auth.models import UserRole
from petconnect.core.database import MAX_ROW_ID
from petconnect.pets.models import CreatePetRequest, Pet, PetFilters
from petconnect.pets.repository import PetRepository


def pet_not_found(pet_id: int) -> ApiError:
    return ApiError(
        status_code=404,
        error_code=ApiErrorCode.PET_NOT_FOUND,
        message=f"Pet not found: {pet_id}",
    )


def create_pets_router(repo: PetRepository) -> APIRouter:
    router = APIRouter(tags=["pets"])

    @router.get("/api/pets", response_model=list[Pet])
    def list_pets(
        species: str | None = Query(default=None),
        size: str | None = Query(default=None),
        energy: str | None = Query(default=None),
        location: str | None = Query(default=None),
    ) -> list[Pet]:
        """List pets, optionally filtered. Public."""
        return repo.search(
            PetFilters(species=species, size=size, energy=energy, location=location)
        )

    @router.get(
        "/api/pets/{pet_id}",
        response_model=Pet,
        responses={404: {"model": ApiErrorResponse}},
    )
    def get_pet(pet_id: int = Path(gt=0, le=MAX_ROW_ID)) -> Pet:
        pet = repo.get(pet_id)
        if pet is None:
            raise pet_not_found(pet_id)
        return pet

    @router.post(
        "/api/pets",
        status_code=201,
        response_model=Pet,
        responses={
            400: {"model": ApiErrorResponse},
            401: {"model": ApiErrorResponse},
            403: {"model": ApiErrorResponse},
        },
    )
    def create_pet(req: CreatePetRequest, request: Request) -> Pet:
        """Create a listing owned by the calling shelter."""
        shelter = require_role(request, UserRole.SHELTER)
        return repo.create(req, shelter_id=shelter.user_id, shelter_name=shelter.name)

    return router
