"""Google OAuth code exchange and ID token verification."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

import requests

from petconnect.core.config import OAuthConfig

LOGGER = logging.getLogger(__name__)

GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_TOKENINFO_URL = "https://oauth2.googleapis.com/tokeninfo"
GOOGLE_ISSUERS = {"accounts.google.com", "https://accounts.google.com"}


class IdentityProviderError(Exception):
    """Raised when the provider rejects the code or cannot be reached."""


@dataclass(frozen=True)
class VerifiedIdentity:
    """Identity asserted by a verified ID token.

    ``email`` is empty when the provider did not assert a verified address.
    """

    email: str
    name: str


class IdentityProvider(Protocol):
    def verify_code(self, code: str) -> VerifiedIdentity:
        """Exchange an authorization code for a verified identity."""


def _display_name(claims: dict[str, Any], email: str) -> str:
    name = str(claims.get("name") or "").strip()
    if name:
        return name
    if email:
        return email.split("@", 1)[0]
    return "Google User"


class GoogleIdentityProvider:
    """Authorization-code flow against Google's OAuth endpoints."""

    def __init__(self, config: OAuthConfig, session: Any = requests) -> None:
        self._config = config
        self._session = session

    def verify_code(self, code: str) -> VerifiedIdentity:
        if not self._config.google_client_id:
            raise IdentityProviderError("Google sign-in is not configured")
        id_token = self._exchange_code(code)
        claims = self._verify_id_token(id_token)

        email = ""
        if str(claims.get("email_verified", "")).lower() == "true":
            email = str(claims.get("email") or "").strip().lower()
        return VerifiedIdentity(email=email, name=_display_name(claims, email))

    def _exchange_code(self, code: str) -> str:
        try:
            response = self._session.post(
                GOOGLE_TOKEN_URL,
                data={
                    "code": code,
                    "client_id": self._config.google_client_id,
                    "client_secret": self._config.google_client_secret,
                    "redirect_uri": self._config.google_redirect_uri,
                    "grant_type": "authorization_code",
                },
                timeout=self._config.timeout_seconds,
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            LOGGER.warning("google_code_exchange_failed: %s", exc)
            raise IdentityProviderError("Authorization code exchange failed") from exc

        id_token = str(payload.get("id_token") or "")
        if not id_token:
            raise IdentityProviderError("Token response did not include an ID token")
        return id_token

    def _verify_id_token(self, id_token: str) -> dict[str, Any]:
        # tokeninfo checks the signature and expiry on Google's side.
        try:
            response = self._session.get(
                GOOGLE_TOKENINFO_URL,
                params={"id_token": id_token},
                timeout=self._config.timeout_seconds,
            )
            response.raise_for_status()
            claims = response.json()
        except (requests.RequestException, ValueError) as exc:
            LOGGER.warning("google_id_token_rejected: %s", exc)
            raise IdentityProviderError("ID token verification failed") from exc

        if str(claims.get("aud") or "") != self._config.google_client_id:
            raise IdentityProviderError("ID token audience mismatch")
        if str(claims.get("iss") or "") not in GOOGLE_ISSUERS:
            raise IdentityProviderError("ID token issuer mismatch")
        return claims
