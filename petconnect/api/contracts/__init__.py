"""Public API response contracts."""

from petconnect.api.contracts.models import (
    ApiErrorResponse,
    ApiModel,
    AuthMeResponse,
    AuthSessionResponse,
    HealthResponse,
    OkResponse,
    UserResponse,
)

__all__ = [
    "ApiErrorResponse",
    "ApiModel",
    "AuthMeResponse",
    "AuthSessionResponse",
    "HealthResponse",
    "OkResponse",
    "UserResponse",
]
