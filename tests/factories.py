from __future__ import annotations

from pathlib import Path

from petconnect.auth.models import SessionUser, UserRole
from petconnect.core.config import (
    AppConfig,
    AuthConfig,
    DatabaseConfig,
    LoggingConfig,
    OAuthConfig,
    SecurityConfig,
)
from petconnect.core.database import Database


def build_config(
    tmp_path: Path,
    *,
    request_max_bytes: int = 1024 * 1024,
    login_rate_limit_max_attempts: int = 5,
) -> AppConfig:
    return AppConfig(
        auth=AuthConfig(
            secret_key="test-secret",
            token_ttl_seconds=7 * 24 * 60 * 60,
            issuer="petconnect-test",
        ),
        oauth=OAuthConfig(
            google_client_id="client-123.apps.googleusercontent.com",
            google_client_secret="client-secret",
            google_redirect_uri="http://localhost:5173",
            timeout_seconds=5,
        ),
        database=DatabaseConfig(
            sqlite_path=str(tmp_path / "petconnect.db"),
            seed_demo_data=False,
        ),
        logging=LoggingConfig(level="INFO"),
        security=SecurityConfig(
            cors_allowed_origins=["http://localhost:5173"],
            request_max_bytes=request_max_bytes,
            login_rate_limit_max_attempts=login_rate_limit_max_attempts,
            login_rate_limit_window_seconds=300,
            login_rate_limit_lock_seconds=600,
        ),
    )


def open_database(tmp_path: Path) -> Database:
    database = Database(tmp_path / "petconnect.db")
    database.open()
    return database


def session_user(user_id: int, role: UserRole, name: str = "", email: str = "") -> SessionUser:
    return SessionUser(
        user_id=user_id,
        role=role,
        name=name or f"user-{user_id}",
        email=email or f"user{user_id}@example.com",
    )
