"""
blog_api.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings, DB sessions and the password hasher.
- Build request-scoped services on top of those.
- Encapsulate app.state access patterns (settings/engine/sessionmaker/hasher).
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from blog_api.auth.jwt import JwtConfig
from blog_api.auth.passwords import PasswordHasher
from blog_api.services.auth import AuthService
from blog_api.services.comments import CommentService
from blog_api.services.posts import PostService
from blog_api.services.users import UserService
from blog_api.settings import Settings


def settings_dep(request: Request) -> Settings:
    # Set once by `blog_api.api.app.create_app`; immutable afterwards.
    return request.app.state.settings  # type: ignore[no-any-return]


def hasher_dep(request: Request) -> PasswordHasher:
    return request.app.state.hasher  # type: ignore[no-any-return]


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # The sessionmaker is created by the app lifespan.
    return request.app.state.sessionmaker  # type: ignore[no-any-return]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session; uncommitted work is rolled back on close.
    async with session_factory() as session:
        yield session


def user_service(
    session: AsyncSession = Depends(db_session),
    hasher: PasswordHasher = Depends(hasher_dep),
) -> UserService:
    return UserService(session=session, hasher=hasher)


def post_service(session: AsyncSession = Depends(db_session)) -> PostService:
    return PostService(session=session)


def comment_service(session: AsyncSession = Depends(db_session)) -> CommentService:
    return CommentService(session=session)


def auth_service(
    users: UserService = Depends(user_service),
    hasher: PasswordHasher = Depends(hasher_dep),
    settings: Settings = Depends(settings_dep),
) -> AuthService:
    return AuthService(users=users, hasher=hasher, jwt_cfg=JwtConfig.from_settings(settings))


# --- Module Notes -----------------------------------------------------------
# Dependencies resolved once per request (FastAPI caches them), so a route that
# asks for two services shares one session.
