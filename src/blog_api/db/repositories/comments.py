from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import selectinload
from sqlalchemy.sql.base import ExecutableOption

from blog_api.db.models import Comment
from blog_api.db.repositories.base import DocumentRepo


class CommentRepo(DocumentRepo[Comment]):
    model = Comment

    def _loads(self) -> Sequence[ExecutableOption]:
        return (selectinload(Comment.author), selectinload(Comment.post))

    async def create(self, *, content: str, author_id: str, post_id: str) -> Comment:
        comment = Comment(content=content, author_id=author_id, post_id=post_id)
        await self.add(comment)
        return await self.reload(comment.id)  # type: ignore[return-value]

    async def list_by_author(self, author_id: str) -> list[Comment]:
        return await self.list_live(Comment.author_id == author_id)
