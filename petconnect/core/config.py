"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AuthConfig:
    """Session token configuration."""

    secret_key: str
    token_ttl_seconds: int
    issuer: str


@dataclass(frozen=True)
class OAuthConfig:
    """Google OAuth client configuration."""

    google_client_id: str
    google_client_secret: str
    google_redirect_uri: str
    timeout_seconds: int


@dataclass(frozen=True)
class DatabaseConfig:
    """SQLite storage configuration."""

    sqlite_path: str
    seed_demo_data: bool


@dataclass(frozen=True)
class LoggingConfig:
    """Structured logging configuration."""

    level: str


@dataclass(frozen=True)
class SecurityConfig:
    """API perimeter security settings."""

    cors_allowed_origins: list[str]
    request_max_bytes: int
    login_rate_limit_max_attempts: int
    login_rate_limit_window_seconds: int
    login_rate_limit_lock_seconds: int


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""

    auth: AuthConfig
    oauth: OAuthConfig
    database: DatabaseConfig
    logging: LoggingConfig
    security: SecurityConfig

    @staticmethod
    def from_env() -> "AppConfig":
        """Build app config from process environment."""
        secret_key = (
            os.getenv("AUTH_SECRET_KEY", "").strip() or "dev-insecure-secret-change-me"
        )
        token_ttl = int(os.getenv("AUTH_TOKEN_TTL_SECONDS", str(7 * 24 * 60 * 60)))
        issuer = os.getenv("AUTH_ISSUER", "petconnect").strip() or "petconnect"
        cors_allowed_origins = [
            origin.strip()
            for origin in os.getenv(
                "CORS_ALLOWED_ORIGINS",
                "http://localhost:5173,http://127.0.0.1:5173",
            ).split(",")
            if origin.strip()
        ]

        return AppConfig(
            auth=AuthConfig(
                secret_key=secret_key,
                token_ttl_seconds=token_ttl,
                issuer=issuer,
            ),
            oauth=OAuthConfig(
                google_client_id=os.getenv("GOOGLE_CLIENT_ID", "").strip(),
                google_client_secret=os.getenv("GOOGLE_CLIENT_SECRET", "").strip(),
                google_redirect_uri=(
                    os.getenv("GOOGLE_REDIRECT_URI", "").strip()
                    or "http://localhost:5173"
                ),
                timeout_seconds=int(os.getenv("GOOGLE_TIMEOUT_SECONDS", "10")),
            ),
            database=DatabaseConfig(
                sqlite_path=(
                    os.getenv("DATABASE_PATH", "").strip() or "runtime/petconnect.db"
                ),
                seed_demo_data=_env_flag("SEED_DEMO_DATA"),
            ),
            logging=LoggingConfig(level=os.getenv("LOG_LEVEL", "INFO").strip() or "INFO"),
            security=SecurityConfig(
                cors_allowed_origins=cors_allowed_origins,
                request_max_bytes=int(os.getenv("REQUEST_MAX_BYTES", str(1024 * 1024))),
                login_rate_limit_max_attempts=int(
                    os.getenv("LOGIN_RATE_LIMIT_MAX_ATTEMPTS", "5")
                ),
                login_rate_limit_window_seconds=int(
                    os.getenv("LOGIN_RATE_LIMIT_WINDOW_SECONDS", "300")
                ),
                login_rate_limit_lock_seconds=int(
                    os.getenv("LOGIN_RATE_LIMIT_LOCK_SECONDS", "600")
                ),
            ),
        )
