"""
blog_api.services.users

User account service.

Responsibilities:
- Register users with a bcrypt-hashed password and a default USER role.
- Partial update (re-hashing a new password), soft delete, and reads.
- Email lookup, optionally exposing the stored hash for credential checks.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.auth.models import Role
from blog_api.auth.passwords import PasswordHasher
from blog_api.db.models import User
from blog_api.db.repositories.users import UserRepo
from blog_api.observability.logging import get_logger
from blog_api.services.results import ErrorKind, Outcome, ServiceError

log = get_logger(__name__)


class UserService:
    def __init__(self, *, session: AsyncSession, hasher: PasswordHasher) -> None:
        self._session = session
        self._hasher = hasher
        self._users = UserRepo(session)

    async def create(
        self,
        *,
        name: str,
        email: str,
        password: str,
        roles: list[Role] | None = None,
    ) -> Outcome[User]:
        # Soft-deleted accounts still own their email (the column is unique).
        if await self._users.get_by_email(email, include_deleted=True) is not None:
            return Outcome.failure(
                ServiceError(kind=ErrorKind.conflict, message="User already exists")
            )

        user = await self._users.create(
            name=name,
            email=email,
            password_hash=await self._hasher.hash(password),
            roles=[r.value for r in (roles or [Role.USER])],
        )
        await self._session.commit()
        log.info("user_created", user_id=user.id, roles=user.roles)
        return Outcome.success(user)

    async def find_by_email(self, email: str, *, with_password: bool = False) -> User | None:
        return await self._users.get_by_email(email, with_password=with_password)

    async def update(self, user_id: str, fields: dict[str, Any]) -> User | None:
        changes = dict(fields)
        if "password" in changes:
            changes["password"] = await self._hasher.hash(changes["password"])
        user = await self._users.update_fields(user_id, changes)
        if user is None:
            return None
        await self._session.commit()
        log.info("user_updated", user_id=user_id, fields=sorted(changes))
        return user

    async def get_all(self) -> list[User]:
        return await self._users.list_live()

    async def get_by_id(self, user_id: str) -> User | None:
        return await self._users.get(user_id)

    async def delete(self, user_id: str) -> bool:
        deleted = await self._users.soft_delete(user_id)
        if not deleted:
            return False
        await self._session.commit()
        log.info("user_deleted", user_id=user_id)
        return True
