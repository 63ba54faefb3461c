"""
blog_api.db.repositories.base

Generic soft-delete repository shared by users, posts and comments.

Responsibilities:
- Scope every read, update and delete to live rows (`deleted_at IS NULL`).
- Apply the eager loads each document kind needs for its API payload.
- Express partial updates and soft deletes as single UPDATE statements.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import Select, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.base import ExecutableOption

from blog_api.db.models import Comment, Post, User, utcnow

M = TypeVar("M", User, Post, Comment)


class DocumentRepo(Generic[M]):
    model: ClassVar[type]

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _loads(self) -> Sequence[ExecutableOption]:
        return ()

    def _live(self) -> Select[tuple[M]]:
        return select(self.model).where(self.model.deleted_at.is_(None))

    async def exists(self, entity_id: str) -> bool:
        stmt = select(self.model.id).where(
            self.model.id == entity_id, self.model.deleted_at.is_(None)
        )
        return (await self._session.execute(stmt)).scalar_one_or_none() is not None

    async def get(self, entity_id: str) -> M | None:
        stmt = self._live().where(self.model.id == entity_id).options(*self._loads())
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list_live(self, *criteria: Any) -> list[M]:
        # Insertion order: created_at, then the (monotonic) ObjectId as tie-breaker.
        stmt = (
            self._live()
            .where(*criteria)
            .options(*self._loads())
            .order_by(self.model.created_at, self.model.id)
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def add(self, entity: M) -> M:
        self._session.add(entity)
        await self._session.flush()
        return entity

    async def update_fields(self, entity_id: str, fields: dict[str, Any]) -> M | None:
        stmt = (
            update(self.model)
            .where(self.model.id == entity_id, self.model.deleted_at.is_(None))
            .values(**fields, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            return None
        return await self.reload(entity_id)

    async def soft_delete(self, entity_id: str) -> bool:
        now = utcnow()
        stmt = (
            update(self.model)
            .where(self.model.id == entity_id, self.model.deleted_at.is_(None))
            .values(deleted_at=now, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def reload(self, entity_id: str) -> M | None:
        # populate_existing refreshes an instance already sitting in the identity map.
        stmt = (
            select(self.model)
            .where(self.model.id == entity_id)
            .options(*self._loads())
            .execution_options(populate_existing=True)
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()


# --- Module Notes -----------------------------------------------------------
# Repositories never commit; services own the transaction boundary.
