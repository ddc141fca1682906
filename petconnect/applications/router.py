"""FastAPI router for adoption applications."""

from __future__ import annotations

from fastapi import APIRouter, Path, Request

from petconnect.api.contracts import ApiErrorResponse
from petconnect.applications.models import (
    Application,
    SubmitApplicationRequest,
    UpdateStatusRequest,
)
from petconnect.applications.service import ApplicationService
from petconnect.auth.access import current_user
from petconnect.core.database import MAX_ROW_ID


class ApplicationsRouter:
    """Factory wrapper that builds the applications router from a service."""

    def __init__(self, service: ApplicationService) -> None:
        self._service = service

    def build(self) -> APIRouter:
        router = APIRouter(tags=["applications"])

        @router.post(
            "/api/applications",
            status_code=201,
            response_model=Application,
            responses={
                400: {"model": ApiErrorResponse},
                403: {"model": ApiErrorResponse},
                404: {"model": ApiErrorResponse},
            },
        )
        def submit_application(
            req: SubmitApplicationRequest, request: Request
        ) -> Application:
            """Submit an application for a pet (adopters only)."""
            return self._service.submit(current_user(request), req)

        @router.get("/api/applications", response_model=list[Application])
        def list_applications(request: Request) -> list[Application]:
            """List applications visible to the caller."""
            return self._service.list_for(current_user(request))

        @router.patch(
            "/api/applications/{application_id}/status",
            response_model=Application,
            responses={
                400: {"model": ApiErrorResponse},
                403: {"model": ApiErrorResponse},
                404: {"model": ApiErrorResponse},
                409: {"model": ApiErrorResponse},
            },
        )
        def update_application_status(
            req: UpdateStatusRequest,
            request: Request,
            application_id: int = Path(gt=0, le=MAX_ROW_ID),
        ) -> Application:
            """Move an application owned by the calling shelter to a new status."""
            return self._service.update_status(
                current_user(request), application_id, req.status
            )

        return router


def create_applications_router(service: ApplicationService) -> APIRouter:
    return ApplicationsRouter(service=service).build()
