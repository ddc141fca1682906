"""Login brute-force protection stored in the service database."""

from __future__ import annotations

import time
from dataclasses import dataclass

from petconnect.api.errors import ApiError, ApiErrorCode
from petconnect.core.database import Database


@dataclass(frozen=True)
class RateLimitPolicy:
    max_attempts: int
    window_seconds: int
    lock_seconds: int


def _principal(email: str, client_ip: str) -> tuple[str, str]:
    return email.strip().lower(), client_ip.strip() or "unknown"


class LoginRateLimiter:
    """Counts failed logins per (email, client ip) and locks after a threshold."""

    def __init__(self, database: Database, policy: RateLimitPolicy) -> None:
        self._database = database
        self._max_attempts = max(1, int(policy.max_attempts))
        self._window_seconds = max(1, int(policy.window_seconds))
        self._lock_seconds = max(1, int(policy.lock_seconds))

    def assert_allowed(self, *, email: str, client_ip: str, now: int | None = None) -> None:
        """Raise 429 while the principal is locked out."""
        current = int(time.time()) if now is None else now
        key = _principal(email, client_ip)
        with self._database.transaction() as cursor:
            row = cursor.execute(
                """
                SELECT first_failed_at, locked_until
                FROM login_attempts
                WHERE email = ? AND client_ip = ?
                """,
                key,
            ).fetchone()
            if row is None:
                return

            locked_until = int(row["locked_until"] or 0)
            if locked_until > current:
                raise ApiError(
                    status_code=429,
                    error_code=ApiErrorCode.AUTH_RATE_LIMITED,
                    message=(
                        "Too many login attempts. "
                        f"Retry after {locked_until - current} seconds."
                    ),
                )

            first_failed_at = int(row["first_failed_at"] or 0)
            if first_failed_at and (current - first_failed_at) > self._window_seconds:
                cursor.execute(
                    "DELETE FROM login_attempts WHERE email = ? AND client_ip = ?",
                    key,
                )

    def record_success(self, *, email: str, client_ip: str) -> None:
        with self._database.transaction() as cursor:
            cursor.execute(
                "DELETE FROM login_attempts WHERE email = ? AND client_ip = ?",
                _principal(email, client_ip),
            )

    def record_failure(self, *, email: str, client_ip: str, now: int | None = None) -> None:
        """Count a failed attempt and lock the principal once over the limit."""
        current = int(time.time()) if now is None else now
        key = _principal(email, client_ip)
        with self._database.transaction() as cursor:
            row = cursor.execute(
                """
                SELECT failed_attempts, first_failed_at
                FROM login_attempts
                WHERE email = ? AND client_ip = ?
                """,
                key,
            ).fetchone()

            previous_first = int(row["first_failed_at"] or 0) if row else 0
            if row is None or (current - previous_first) > self._window_seconds:
                failed_attempts = 1
                first_failed_at = current
            else:
                failed_attempts = int(row["failed_attempts"] or 0) + 1
                first_failed_at = previous_first or current

            locked_until = (
                current + self._lock_seconds
                if failed_attempts >= self._max_attempts
                else 0
            )
            cursor.execute(
                """
                INSERT INTO login_attempts(
                  email, client_ip, failed_attempts, first_failed_at, last_failed_at, locked_until
                ) VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(email, client_ip) DO UPDATE SET
                  failed_attempts = excluded.failed_attempts,
                  first_failed_at = excluded.first_failed_at,
                  last_failed_at = excluded.last_failed_at,
                  locked_until = excluded.locked_until
                """,
                (*key, failed_attempts, first_failed_at, current, locked_until),
            )
