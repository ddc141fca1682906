"""Authentication API router."""

from __future__ import annotations

from fastapi import APIRouter, Request, Response

from petconnect.api.contracts import (
    ApiErrorResponse,
    AuthMeResponse,
    AuthSessionResponse,
)
from petconnect.api.errors import ApiError, ApiErrorCode
from petconnect.auth.access import current_user
from petconnect.auth.models import GoogleAuthRequest, LoginRequest, RegisterRequest
from petconnect.auth.rate_limiter import LoginRateLimiter
from petconnect.auth.service import AuthResult, AuthService


def _session_response(result: AuthResult) -> AuthSessionResponse:
    return AuthSessionResponse(user=result.user, token=result.token)


def create_auth_router(
    service: AuthService, rate_limiter: LoginRateLimiter
) -> APIRouter:
    """Build authentication router with register/login/google/me endpoints."""
    router = APIRouter(tags=["auth"])

    @router.post(
        "/api/auth/register",
        status_code=201,
        response_model=AuthSessionResponse,
        responses={400: {"model": ApiErrorResponse}, 409: {"model": ApiErrorResponse}},
    )
    def register(req: RegisterRequest) -> AuthSessionResponse:
        result = service.register(
            name=req.name,
            email=req.email,
            password=req.password,
            role=req.resolved_role,
        )
        return _session_response(result)

    @router.post(
        "/api/auth/login",
        response_model=AuthSessionResponse,
        responses={
            400: {"model": ApiErrorResponse},
            401: {"model": ApiErrorResponse},
            429: {"model": ApiErrorResponse},
        },
    )
    def login(req: LoginRequest, request: Request) -> AuthSessionResponse:
        client_ip = (request.client.host if request.client else "") or "unknown"
        rate_limiter.assert_allowed(email=req.email, client_ip=client_ip)
        try:
            result = service.login(req.email, req.password)
        except ApiError as exc:
            if exc.error_code == ApiErrorCode.AUTH_INVALID_CREDENTIALS:
                rate_limiter.record_failure(email=req.email, client_ip=client_ip)
            raise
        rate_limiter.record_success(email=req.email, client_ip=client_ip)
        return _session_response(result)

    @router.post(
        "/api/auth/google",
        response_model=AuthSessionResponse,
        responses={
            201: {"model": AuthSessionResponse},
            400: {"model": ApiErrorResponse},
            502: {"model": ApiErrorResponse},
        },
    )
    def google_login(req: GoogleAuthRequest, response: Response) -> AuthSessionResponse:
        """Sign in with a Google authorization code (201 when the account is new)."""
        result = service.login_with_google(req.code)
        if result.created:
            response.status_code = 201
        return _session_response(result)

    @router.get(
        "/api/auth/me",
        response_model=AuthMeResponse,
        responses={401: {"model": ApiErrorResponse}, 403: {"model": ApiErrorResponse}},
    )
    def me(request: Request) -> AuthMeResponse:
        return AuthMeResponse(user=service.current_user(current_user(request)))

    return router
