"""Role predicates applied after the session middleware has run."""

from __future__ import annotations

from fastapi import Request

from petconnect.api.errors import ApiError, ApiErrorCode
from petconnect.auth.models import SessionUser, UserRole


def current_user(request: Request) -> SessionUser:
    """Return the caller attached by the session middleware."""
    user = getattr(request.state, "user", None)
    if not isinstance(user, SessionUser):
        raise ApiError(
            status_code=401,
            error_code=ApiErrorCode.AUTH_MISSING_TOKEN,
            message="Missing bearer token",
        )
    return user


def ensure_role(user: SessionUser, role: UserRole) -> SessionUser:
    """Return ``user`` when it holds ``role``; otherwise raise 403."""
    if user.role != role:
        raise ApiError(
            status_code=403,
            error_code=ApiErrorCode.FORBIDDEN,
            message=f"Only {role.value} accounts can perform this action",
        )
    return user


def require_role(request: Request, role: UserRole) -> SessionUser:
    return ensure_role(current_user(request), role)
