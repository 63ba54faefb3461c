"""
blog_api.services.posts

Post lifecycle service (transaction owner for post writes).

Responsibilities:
- Create posts after checking the author exists.
- Partial update, soft delete, and resolved reads of live posts.
- Author and genre listings.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.db.models import Post
from blog_api.db.repositories.posts import PostRepo
from blog_api.db.repositories.users import UserRepo
from blog_api.observability.logging import get_logger
from blog_api.services.results import Outcome, reference_not_found

log = get_logger(__name__)


class PostService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._posts = PostRepo(session)
        self._users = UserRepo(session)

    async def create(
        self, *, title: str, content: str, author_id: str, genre: str
    ) -> Outcome[Post]:
        if not await self._users.exists(author_id):
            return Outcome.failure(reference_not_found("User"))

        post = await self._posts.create(
            title=title, content=content, author_id=author_id, genre=genre
        )
        await self._session.commit()
        log.info("post_created", post_id=post.id, author_id=author_id)
        return Outcome.success(post)

    async def update(self, post_id: str, fields: dict[str, Any]) -> Post | None:
        post = await self._posts.update_fields(post_id, fields)
        if post is None:
            return None
        await self._session.commit()
        log.info("post_updated", post_id=post_id, fields=sorted(fields))
        return post

    async def get_all(self) -> list[Post]:
        return await self._posts.list_live()

    async def get_by_id(self, post_id: str) -> Post | None:
        return await self._posts.get(post_id)

    async def delete(self, post_id: str) -> bool:
        deleted = await self._posts.soft_delete(post_id)
        if not deleted:
            return False
        await self._session.commit()
        log.info("post_deleted", post_id=post_id)
        return True

    async def get_by_author_id(self, user_id: str) -> Outcome[list[Post]]:
        # The user check is explicit so an unknown id is never confused with "no posts".
        if not await self._users.exists(user_id):
            return Outcome.failure(reference_not_found("User"))
        return Outcome.success(await self._posts.list_by_author(user_id))

    async def get_by_genre(self, genre: str) -> list[Post]:
        return await self._posts.list_by_genre(genre)


# --- Module Notes -----------------------------------------------------------
# Deleting a post leaves its comments and their links untouched; readers of the
# comment still see the post reference.
