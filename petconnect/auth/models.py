"""Pydantic models for the authentication domain."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field, field_validator

from petconnect.api.contracts import UserResponse


class UserRole(StrEnum):
    ADOPTER = "adopter"
    SHELTER = "shelter"


def normalize_email(value: str) -> str:
    return value.strip().lower()


class User(BaseModel):
    """Persisted user row."""

    id: int
    name: str
    email: str
    password_hash: str
    role: UserRole

    def to_public(self) -> UserResponse:
        return UserResponse(id=self.id, name=self.name, email=self.email, role=self.role.value)


class SessionUser(BaseModel):
    """Identity asserted by a verified session token."""

    user_id: int
    email: str
    role: UserRole
    name: str = ""


class _EmailPayload(BaseModel):
    email: str = Field(min_length=3, max_length=320)

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        normalized = normalize_email(value)
        local, _, domain = normalized.partition("@")
        if not local or not domain:
            raise ValueError("must be an email address")
        return normalized


class RegisterRequest(_EmailPayload):
    """Registration payload; any role other than exactly ``"shelter"`` means adopter."""

    name: str = Field(min_length=1, max_length=200)
    password: str = Field(min_length=1)
    role: str | None = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped

    @property
    def resolved_role(self) -> UserRole:
        if self.role == UserRole.SHELTER:
            return UserRole.SHELTER
        return UserRole.ADOPTER


class LoginRequest(_EmailPayload):
    password: str = Field(min_length=1)


class GoogleAuthRequest(BaseModel):
    """Authorization code returned to the web client by Google."""

    code: str = Field(min_length=1)
