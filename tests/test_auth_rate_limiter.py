from __future__ import annotations

from pathlib import Path

import pytest

from petconnect.api.errors import ApiError
from petconnect.auth.rate_limiter import LoginRateLimiter, RateLimitPolicy
from tests.factories import open_database


def _limiter(tmp_path: Path, max_attempts: int = 2) -> LoginRateLimiter:
    return LoginRateLimiter(
        open_database(tmp_path),
        RateLimitPolicy(max_attempts=max_attempts, window_seconds=300, lock_seconds=120),
    )


def test_login_rate_limiter_blocks_after_threshold(tmp_path: Path) -> None:
    limiter = _limiter(tmp_path)

    limiter.assert_allowed(email="test@example.com", client_ip="127.0.0.1", now=1_000)
    limiter.record_failure(email="test@example.com", client_ip="127.0.0.1", now=1_000)
    limiter.record_failure(email="TEST@example.com", client_ip="127.0.0.1", now=1_001)

    with pytest.raises(ApiError) as exc:
        limiter.assert_allowed(email="test@example.com", client_ip="127.0.0.1", now=1_002)

    assert exc.value.status_code == 429
    assert exc.value.error_code == "AUTH_RATE_LIMITED"


def test_login_rate_limiter_unlocks_after_lock_expires(tmp_path: Path) -> None:
    limiter = _limiter(tmp_path)
    limiter.record_failure(email="a@example.com", client_ip="1.2.3.4", now=1_000)
    limiter.record_failure(email="a@example.com", client_ip="1.2.3.4", now=1_001)

    limiter.assert_allowed(email="a@example.com", client_ip="1.2.3.4", now=1_001 + 121)


def test_login_rate_limiter_is_scoped_per_client_ip(tmp_path: Path) -> None:
    limiter = _limiter(tmp_path, max_attempts=1)
    limiter.record_failure(email="a@example.com", client_ip="1.1.1.1", now=1_000)

    limiter.assert_allowed(email="a@example.com", client_ip="2.2.2.2", now=1_001)


def test_login_rate_limiter_resets_after_success(tmp_path: Path) -> None:
    limiter = _limiter(tmp_path)

    limiter.record_failure(email="ok@example.com", client_ip="127.0.0.1", now=1_000)
    limiter.record_success(email="ok@example.com", client_ip="127.0.0.1")
    limiter.record_failure(email="ok@example.com", client_ip="127.0.0.1", now=1_001)

    limiter.assert_allowed(email="ok@example.com", client_ip="127.0.0.1", now=1_002)
