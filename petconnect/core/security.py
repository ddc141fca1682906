"""Password hashing and compact signed session tokens."""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
import os
import time
from typing import Any

PBKDF2_ALGORITHM = "pbkdf2_sha256"
PBKDF2_ROUNDS = 120_000

# Stored in place of a password hash for accounts created through Google sign-in.
OAUTH_ONLY_CREDENTIAL = "google-oauth"

_TOKEN_HEADER = {"alg": "HS256", "typ": "JWT"}


class TokenError(ValueError):
    """Raised when a session token is malformed, tampered with or expired."""


def _b64url_encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("utf-8").rstrip("=")


def _b64url_decode(value: str) -> bytes:
    padding = "=" * (-len(value) % 4)
    return base64.urlsafe_b64decode((value + padding).encode("utf-8"))


def _sign(signing_input: bytes, secret_key: str) -> bytes:
    return hmac.new(secret_key.encode("utf-8"), signing_input, hashlib.sha256).digest()


def hash_password(password: str) -> str:
    """Hash password using PBKDF2-HMAC-SHA256 with a random salt.

    The result is self-describing (``algorithm$rounds$salt$digest``) so the
    round count can be raised later without invalidating stored hashes.
    """
    salt = os.urandom(16)
    derived = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ROUNDS)
    return (
        f"{PBKDF2_ALGORITHM}${PBKDF2_ROUNDS}$"
        f"{_b64url_encode(salt)}${_b64url_encode(derived)}"
    )


def verify_password(password: str, stored_hash: str) -> bool:
    """Return whether ``password`` matches a stored PBKDF2 hash.

    Anything that is not a PBKDF2 hash (including the OAuth-only marker)
    never matches.
    """
    try:
        algorithm, rounds_raw, salt_b64, digest_b64 = stored_hash.split("$", 3)
        if algorithm != PBKDF2_ALGORITHM:
            return False
        rounds = int(rounds_raw)
        salt = _b64url_decode(salt_b64)
        expected = _b64url_decode(digest_b64)
    except (ValueError, binascii.Error):
        return False

    derived = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, rounds)
    return hmac.compare_digest(derived, expected)


def is_oauth_only(stored_hash: str) -> bool:
    return stored_hash == OAUTH_ONLY_CREDENTIAL


def sign_token(payload: dict[str, Any], secret_key: str) -> str:
    """Create a compact ``header.payload.signature`` token (HS256)."""
    header_part = _b64url_encode(
        json.dumps(_TOKEN_HEADER, separators=(",", ":")).encode("utf-8")
    )
    payload_part = _b64url_encode(
        json.dumps(payload, separators=(",", ":")).encode("utf-8")
    )
    signing_input = f"{header_part}.{payload_part}".encode("utf-8")
    return f"{header_part}.{payload_part}.{_b64url_encode(_sign(signing_input, secret_key))}"


def verify_token(token: str, secret_key: str, *, now: int | None = None) -> dict[str, Any]:
    """Verify signature and expiry, returning the decoded payload.

    Raises ``TokenError`` on any failure.
    """
    parts = token.split(".")
    if len(parts) != 3:
        raise TokenError("Malformed token")
    header_part, payload_part, signature_part = parts

    signing_input = f"{header_part}.{payload_part}".encode("utf-8")
    try:
        got_signature = _b64url_decode(signature_part)
    except (ValueError, binascii.Error) as exc:
        raise TokenError("Malformed token") from exc
    if not hmac.compare_digest(_sign(signing_input, secret_key), got_signature):
        raise TokenError("Invalid token signature")

    try:
        payload = json.loads(_b64url_decode(payload_part).decode("utf-8"))
    except (ValueError, binascii.Error) as exc:
        raise TokenError("Invalid token payload") from exc
    if not isinstance(payload, dict):
        raise TokenError("Invalid token payload")

    current = int(time.time()) if now is None else now
    try:
        expires_at = int(payload.get("exp") or 0)
    except (TypeError, ValueError) as exc:
        raise TokenError("Invalid token payload") from exc
    if not expires_at or expires_at <= current:
        raise TokenError("Token expired")

    return payload
