"""
blog_api.api.app

FastAPI app factory for the blog API.

Responsibilities:
- Build the FastAPI application and register routers, middleware and error handlers.
- Initialize and dispose shared infrastructure (DB engine/session factory, hasher).
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from blog_api import __version__
from blog_api.api.errors import register_exception_handlers
from blog_api.api.routers.auth import router as auth_router
from blog_api.api.routers.comments import router as comments_router
from blog_api.api.routers.health import router as health_router
from blog_api.api.routers.posts import router as posts_router
from blog_api.api.routers.users import router as users_router
from blog_api.auth.passwords import PasswordHasher
from blog_api.db.init_db import init_db, seed_demo_users
from blog_api.db.session import create_engine, create_sessionmaker
from blog_api.observability.logging import configure_logging, get_logger
from blog_api.observability.middleware import RequestContextMiddleware
from blog_api.settings import Settings, get_settings

log = get_logger(__name__)


def create_app(*, settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(
        service_name=settings.service_name, level=settings.log_level, json_logs=settings.log_json
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env, port=settings.port)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        try:
            if settings.env in ("dev", "test"):
                # Prod schemas are managed by Alembic.
                await init_db(engine)
            if settings.seed_demo_users:
                await seed_demo_users(app.state.sessionmaker, app.state.hasher)
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Blog API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    if settings.uses_default_secret:
        log.warning("jwt_default_secret_in_use", env=settings.env)

    app.add_middleware(RequestContextMiddleware)
    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(posts_router)
    app.include_router(comments_router)
    return app


# --- Module Notes -----------------------------------------------------------
# Business logic stays in services; routers only translate outcomes into HTTP.
