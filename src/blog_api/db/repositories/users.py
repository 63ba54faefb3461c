from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import undefer

from blog_api.db.models import User
from blog_api.db.repositories.base import DocumentRepo


class UserRepo(DocumentRepo[User]):
    model = User

    async def create(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        roles: list[str],
    ) -> User:
        return await self.add(User(name=name, email=email, password=password_hash, roles=roles))

    async def get_by_email(
        self,
        email: str,
        *,
        include_deleted: bool = False,
        with_password: bool = False,
    ) -> User | None:
        stmt = select(User).where(User.email == email)
        if not include_deleted:
            stmt = stmt.where(User.deleted_at.is_(None))
        if with_password:
            stmt = stmt.options(undefer(User.password)).execution_options(populate_existing=True)
        return (await self._session.execute(stmt)).scalar_one_or_none()
