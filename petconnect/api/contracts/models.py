"""Pydantic API models used in OpenAPI contracts."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for payloads exchanged with the web client.

    Python attributes stay snake_case; the wire format is camelCase.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiErrorResponse(BaseModel):
    """Stable error envelope for API responses."""

    error_code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")


class HealthResponse(BaseModel):
    status: Literal["ok"]


class OkResponse(BaseModel):
    ok: Literal[True] = True


class UserResponse(ApiModel):
    """Public projection of a user; never carries credential material."""

    id: int
    name: str
    email: str
    role: Literal["adopter", "shelter"]


class AuthSessionResponse(BaseModel):
    """Register/login response: user projection plus a session token."""

    user: UserResponse
    token: str


class AuthMeResponse(BaseModel):
    user: UserResponse
