from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from petconnect.api.http_setup import (
    register_exception_handlers,
    register_health_route,
    register_http_middleware,
)
from petconnect.applications.repository import ApplicationRepository
from petconnect.applications.router import create_applications_router
from petconnect.applications.service import ApplicationService
from petconnect.auth.identity_provider import GoogleIdentityProvider, IdentityProvider
from petconnect.auth.middleware import create_auth_middleware
from petconnect.auth.rate_limiter import LoginRateLimiter, RateLimitPolicy
from petconnect.auth.repository import UserRepository
from petconnect.auth.router import create_auth_router
from petconnect.auth.service import AuthService
from petconnect.core.config import AppConfig
from petconnect.core.database import Database
from petconnect.core.logging import setup_logging
from petconnect.favorites.repository import FavoriteRepository
from petconnect.favorites.router import create_favorites_router
from petconnect.pets.repository import PetRepository
from petconnect.pets.router import create_pets_router
from petconnect.pets.seed import seed_demo_data

load_dotenv()
APP_CONFIG = AppConfig.from_env()
setup_logging(APP_CONFIG.logging.level)
LOGGER = logging.getLogger(__name__)

APP_ROOT = Path(__file__).resolve().parent


def _database_path(config: AppConfig) -> Path:
    path = Path(config.database.sqlite_path)
    return path if path.is_absolute() else (APP_ROOT / path).resolve()


def create_app(
    config: AppConfig | None = None,
    *,
    identity_provider: IdentityProvider | None = None,
) -> FastAPI:
    """Wire storage, services and routers.

    Storage is opened (and migrated) in the lifespan hook, before the first
    request is accepted, and closed on shutdown.
    """
    config = config or APP_CONFIG
    database = Database(_database_path(config))
    users = UserRepository(database)
    pets = PetRepository(database)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        database.open()
        if config.database.seed_demo_data:
            seed_demo_data(users, pets)
        try:
            yield
        finally:
            database.close()

    app = FastAPI(title="PetConnect API", version="1.0.0", lifespan=lifespan)
    app.state.database = database

    auth_service = AuthService(
        users,
        config.auth,
        identity_provider=identity_provider or GoogleIdentityProvider(config.oauth),
    )
    rate_limiter = LoginRateLimiter(
        database,
        RateLimitPolicy(
            max_attempts=config.security.login_rate_limit_max_attempts,
            window_seconds=config.security.login_rate_limit_window_seconds,
            lock_seconds=config.security.login_rate_limit_lock_seconds,
        ),
    )
    application_service = ApplicationService(
        repo=ApplicationRepository(database),
        pets=pets,
    )

    # Registration order matters: the last middleware added runs first.
    app.middleware("http")(create_auth_middleware(auth_service))
    register_http_middleware(app, config=config, logger=LOGGER)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.security.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )
    register_exception_handlers(app, logger=LOGGER)

    register_health_route(app)
    app.include_router(create_auth_router(auth_service, rate_limiter))
    app.include_router(create_pets_router(pets))
    app.include_router(create_applications_router(application_service))
    app.include_router(create_favorites_router(FavoriteRepository(database), pets))
    return app


app = create_app()


if __name__ == "__main__":
    import os

    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "4000")))
