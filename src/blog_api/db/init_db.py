"""
blog_api.db.init_db

DB initialization helpers.

Responsibilities:
- Create tables for local development and tests.
- Seed the demo admin and demo user accounts when they are missing.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from blog_api.auth.models import Role
from blog_api.auth.passwords import PasswordHasher
from blog_api.db import models  # noqa: F401  # registers tables on Base.metadata
from blog_api.db.base import Base
from blog_api.db.repositories.users import UserRepo
from blog_api.observability.logging import get_logger

log = get_logger(__name__)

DEMO_ACCOUNTS: tuple[tuple[str, str, str, Role], ...] = (
    ("Admin", "admin@demo.com", "Admin123", Role.ADMIN),
    ("User", "user@demo.com", "User123", Role.USER),
)


async def init_db(engine: AsyncEngine) -> None:
    """
    Dev/test bootstrap: create tables if they don't exist.
    Production should rely on Alembic migrations.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_demo_users(
    session_factory: async_sessionmaker[AsyncSession],
    hasher: PasswordHasher,
) -> None:
    async with session_factory() as session:
        users = UserRepo(session)
        for name, email, password, role in DEMO_ACCOUNTS:
            existing = await users.get_by_email(email, include_deleted=True)
            if existing is not None:
                log.info("demo_user_present", email=email, user_id=existing.id)
                continue
            user = await users.create(
                name=name,
                email=email,
                password_hash=await hasher.hash(password),
                roles=[role.value],
            )
            log.info("demo_user_seeded", email=email, user_id=user.id, role=role.value)
        await session.commit()


# --- Module Notes -----------------------------------------------------------
# Seeding is idempotent per email; a soft-deleted demo account is left deleted.
