"""
blog_api.services.comments

Comment lifecycle service.

Responsibilities:
- Create comments after checking author and post, linking them onto the post.
- Soft delete comments and unlink them from the post in one transaction.
- Partial update and resolved reads of live comments.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.db.models import Comment
from blog_api.db.repositories.comments import CommentRepo
from blog_api.db.repositories.posts import PostRepo
from blog_api.db.repositories.users import UserRepo
from blog_api.observability.logging import get_logger
from blog_api.services.results import Outcome, reference_not_found

log = get_logger(__name__)


class CommentService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._comments = CommentRepo(session)
        self._posts = PostRepo(session)
        self._users = UserRepo(session)

    async def create(self, *, content: str, author_id: str, post_id: str) -> Outcome[Comment]:
        # Author is checked first: with both missing the caller hears about the user.
        if not await self._users.exists(author_id):
            return Outcome.failure(reference_not_found("User"))
        if not await self._posts.exists(post_id):
            return Outcome.failure(reference_not_found("Post"))

        comment = await self._comments.create(content=content, author_id=author_id, post_id=post_id)
        await self._posts.push_comment(post_id=post_id, comment_id=comment.id)
        await self._session.commit()
        log.info("comment_created", comment_id=comment.id, post_id=post_id, author_id=author_id)
        return Outcome.success(comment)

    async def update(self, comment_id: str, fields: dict[str, Any]) -> Comment | None:
        comment = await self._comments.update_fields(comment_id, fields)
        if comment is None:
            return None
        await self._session.commit()
        log.info("comment_updated", comment_id=comment_id)
        return comment

    async def get_all(self) -> list[Comment]:
        return await self._comments.list_live()

    async def get_by_id(self, comment_id: str) -> Comment | None:
        return await self._comments.get(comment_id)

    async def delete(self, comment_id: str) -> bool:
        comment = await self._comments.get(comment_id)
        if comment is None:
            return False
        if not await self._comments.soft_delete(comment_id):
            # Lost a race with a concurrent delete.
            return False

        # Any failure here propagates and rolls back the soft delete with it.
        removed = await self._posts.pull_comment(post_id=comment.post_id, comment_id=comment_id)
        await self._session.commit()
        log.info(
            "comment_deleted", comment_id=comment_id, post_id=comment.post_id, unlinked=removed
        )
        return True

    async def get_by_author_id(self, user_id: str) -> Outcome[list[Comment]]:
        if not await self._users.exists(user_id):
            return Outcome.failure(reference_not_found("User"))
        return Outcome.success(await self._comments.list_by_author(user_id))


# --- Module Notes -----------------------------------------------------------
# Push and pull are single statements on the link table, so concurrent comment
# creation on one post cannot lose entries.
