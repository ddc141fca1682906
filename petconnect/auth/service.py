"""Authentication service: credential checks and session tokens."""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass
from typing import Any

from petconnect.api.contracts import UserResponse
from petconnect.api.errors import ApiError, ApiErrorCode
from petconnect.auth.identity_provider import IdentityProvider, IdentityProviderError
from petconnect.auth.models import SessionUser, User, UserRole
from petconnect.auth.repository import EmailAlreadyExistsError, UserRepository
from petconnect.core.config import AuthConfig
from petconnect.core.security import (
    OAUTH_ONLY_CREDENTIAL,
    TokenError,
    hash_password,
    is_oauth_only,
    sign_token,
    verify_password,
    verify_token,
)

LOGGER = logging.getLogger(__name__)

TOKEN_TYPE_ACCESS = "access"


@dataclass(frozen=True)
class AuthResult:
    """Public user projection plus a freshly issued session token."""

    user: UserResponse
    token: str
    created: bool = False


def _invalid_credentials() -> ApiError:
    return ApiError(
        status_code=401,
        error_code=ApiErrorCode.AUTH_INVALID_CREDENTIALS,
        message="Invalid credentials",
    )


def _invalid_token(message: str) -> ApiError:
    return ApiError(
        status_code=403,
        error_code=ApiErrorCode.AUTH_TOKEN_INVALID,
        message=message,
    )


class AuthService:
    """Registers users, verifies credentials and issues/validates tokens.

    Tokens are self-certifying: validating one never touches storage, so a
    token stays usable until it expires even if the user row changes.
    """

    def __init__(
        self,
        repo: UserRepository,
        config: AuthConfig,
        identity_provider: IdentityProvider | None = None,
    ) -> None:
        self._repo = repo
        self._config = config
        self._identity_provider = identity_provider
        # Compared against when the email is unknown so both paths do similar work.
        self._decoy_hash = hash_password(uuid.uuid4().hex)

    def register(
        self, *, name: str, email: str, password: str, role: UserRole
    ) -> AuthResult:
        try:
            user = self._repo.create(
                name=name,
                email=email,
                password_hash=hash_password(password),
                role=role,
            )
        except EmailAlreadyExistsError as exc:
            raise ApiError(
                status_code=409,
                error_code=ApiErrorCode.AUTH_EMAIL_IN_USE,
                message="Email already in use",
            ) from exc
        LOGGER.info("user_registered", extra={"user_id": user.id})
        return self._issue(user, created=True)

    def login(self, email: str, password: str) -> AuthResult:
        user = self._repo.get_by_email(email)
        if user is None:
            verify_password(password, self._decoy_hash)
            raise _invalid_credentials()
        if is_oauth_only(user.password_hash):
            raise ApiError(
                status_code=400,
                error_code=ApiErrorCode.AUTH_WRONG_METHOD,
                message="Use Google sign-in for this account",
            )
        if not verify_password(password, user.password_hash):
            LOGGER.info("login_failed", extra={"user_id": user.id})
            raise _invalid_credentials()
        return self._issue(user)

    def login_with_google(self, code: str) -> AuthResult:
        """Sign in with a Google authorization code, creating an adopter on first use.

        The email comes only from the verified ID token; an existing account
        keeps its role and local password.
        """
        if self._identity_provider is None:
            raise ApiError(
                status_code=502,
                error_code=ApiErrorCode.AUTH_UPSTREAM_FAILURE,
                message="Google authentication failed",
            )
        try:
            identity = self._identity_provider.verify_code(code)
        except IdentityProviderError as exc:
            LOGGER.warning("google_auth_failed: %s", exc)
            raise ApiError(
                status_code=502,
                error_code=ApiErrorCode.AUTH_UPSTREAM_FAILURE,
                message="Google authentication failed",
            ) from exc

        if not identity.email:
            raise ApiError(
                status_code=400,
                error_code=ApiErrorCode.VALIDATION_ERROR,
                message="No verified email returned from Google",
            )

        existing = self._repo.get_by_email(identity.email)
        if existing is not None:
            return self._issue(existing)

        try:
            user = self._repo.create(
                name=identity.name,
                email=identity.email,
                password_hash=OAUTH_ONLY_CREDENTIAL,
                role=UserRole.ADOPTER,
            )
        except EmailAlreadyExistsError:
            # Lost a race with a concurrent first sign-in for the same address.
            user = self._repo.get_by_email(identity.email)
            if user is None:
                raise
            return self._issue(user)
        LOGGER.info("user_registered_via_google", extra={"user_id": user.id})
        return self._issue(user, created=True)

    def current_user(self, session: SessionUser) -> UserResponse:
        user = self._repo.get_by_id(session.user_id)
        if user is None:
            raise _invalid_token("User no longer exists")
        return user.to_public()

    def issue_token(self, user: User, *, now: int | None = None) -> str:
        issued_at = int(time.time()) if now is None else now
        payload: dict[str, Any] = {
            "iss": self._config.issuer,
            "sub": str(user.id),
            "email": user.email,
            "role": user.role.value,
            "name": user.name,
            "type": TOKEN_TYPE_ACCESS,
            "iat": issued_at,
            "exp": issued_at + self._config.token_ttl_seconds,
            "jti": uuid.uuid4().hex,
        }
        return sign_token(payload, self._config.secret_key)

    def verify_session_token(self, token: str) -> SessionUser:
        """Return the identity asserted by ``token`` or raise 403."""
        try:
            payload = verify_token(token, self._config.secret_key)
        except TokenError as exc:
            raise _invalid_token(str(exc)) from exc

        if str(payload.get("iss") or "") != self._config.issuer:
            raise _invalid_token("Invalid token issuer")
        if str(payload.get("type") or "") != TOKEN_TYPE_ACCESS:
            raise _invalid_token("Invalid token type")
        try:
            return SessionUser(
                user_id=int(payload.get("sub") or ""),
                email=str(payload.get("email") or ""),
                role=UserRole(str(payload.get("role") or "")),
                name=str(payload.get("name") or ""),
            )
        except ValueError as exc:
            raise _invalid_token("Invalid token claims") from exc

    def _issue(self, user: User, *, created: bool = False) -> AuthResult:
        return AuthResult(user=user.to_public(), token=self.issue_token(user), created=created)
