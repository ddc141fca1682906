"""FastAPI router for favorites; every operation is scoped to the caller."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Path, Request
from pydantic import Field

from petconnect.api.contracts import ApiErrorResponse, ApiModel, OkResponse
from petconnect.auth.access import current_user
from petconnect.core.database import MAX_ROW_ID
from petconnect.favorites.repository import FavoriteRepository
from petconnect.pets.models import Pet
from petconnect.pets.repository import PetRepository
from petconnect.pets.router import pet_not_found

LOGGER = logging.getLogger(__name__)


class AddFavoriteRequest(ApiModel):
    pet_id: int = Field(gt=0, le=MAX_ROW_ID)


def create_favorites_router(repo: FavoriteRepository, pets: PetRepository) -> APIRouter:
    router = APIRouter(tags=["favorites"])

    @router.get("/api/favorites", response_model=list[Pet])
    def list_favorites(request: Request) -> list[Pet]:
        return repo.list_pets(current_user(request).user_id)

    @router.post(
        "/api/favorites",
        status_code=201,
        response_model=OkResponse,
        responses={400: {"model": ApiErrorResponse}, 404: {"model": ApiErrorResponse}},
    )
    def add_favorite(req: AddFavoriteRequest, request: Request) -> OkResponse:
        """Favorite a pet; repeating the call is a no-op success."""
        user = current_user(request)
        if pets.get(req.pet_id) is None:
            raise pet_not_found(req.pet_id)
        if repo.add(user.user_id, req.pet_id):
            LOGGER.info("favorite_added", extra={"user_id": user.user_id, "pet_id": req.pet_id})
        return OkResponse()

    @router.delete(
        "/api/favorites/{pet_id}",
        response_model=OkResponse,
        responses={400: {"model": ApiErrorResponse}},
    )
    def remove_favorite(
        request: Request, pet_id: int = Path(gt=0, le=MAX_ROW_ID)
    ) -> OkResponse:
        user = current_user(request)
        if repo.remove(user.user_id, pet_id):
            LOGGER.info("favorite_removed", extra={"user_id": user.user_id, "pet_id": pet_id})
        return OkResponse()

    return router
