"""HTTP middleware that authenticates protected API routes."""

from __future__ import annotations

import re
from typing import Callable

from fastapi import Request
from fastapi.responses import JSONResponse

from petconnect.api.contracts import ApiErrorResponse
from petconnect.api.errors import ApiError, ApiErrorCode, to_error_payload
from petconnect.auth.service import AuthService

PUBLIC_ROUTES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("GET", re.compile(r"^/api/health$")),
    ("GET", re.compile(r"^/api/pets/?$")),
    ("GET", re.compile(r"^/api/pets/[^/]+$")),
    ("POST", re.compile(r"^/api/auth/register$")),
    ("POST", re.compile(r"^/api/auth/login$")),
    ("POST", re.compile(r"^/api/auth/google$")),
)


def extract_bearer_token(authorization: str | None) -> str:
    """Extract bearer token from authorization header value."""
    parts = (authorization or "").strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return ""
    return parts[1].strip()


def is_public_route(method: str, path: str) -> bool:
    if not path.startswith("/api/") or method == "OPTIONS":
        return True
    return any(
        method == public_method and pattern.match(path)
        for public_method, pattern in PUBLIC_ROUTES
    )


def create_auth_middleware(service: AuthService) -> Callable:
    """Create middleware that validates bearer tokens on protected paths."""

    async def auth_middleware(request: Request, call_next: Callable):
        if is_public_route(request.method, request.url.path):
            return await call_next(request)

        token = extract_bearer_token(request.headers.get("authorization"))
        if not token:
            return JSONResponse(
                status_code=401,
                content=ApiErrorResponse(
                    error_code=ApiErrorCode.AUTH_MISSING_TOKEN,
                    message="Missing bearer token",
                ).model_dump(),
            )

        try:
            user = service.verify_session_token(token)
        except ApiError as exc:
            return JSONResponse(
                status_code=exc.status_code,
                content=to_error_payload(exc.detail, exc.status_code),
            )

        request.state.user = user
        return await call_next(request)

    return auth_middleware
