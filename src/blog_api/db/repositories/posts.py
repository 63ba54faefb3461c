"""
blog_api.db.repositories.posts

Repository for `Post` documents.

Responsibilities:
- Author and genre queries over live posts.
- Atomic push/pull of comment ids on a post's ordered `comments` list.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, insert
from sqlalchemy.orm import selectinload
from sqlalchemy.sql.base import ExecutableOption

from blog_api.db.models import Post, PostComment
from blog_api.db.repositories.base import DocumentRepo


class PostRepo(DocumentRepo[Post]):
    model = Post

    def _loads(self) -> Sequence[ExecutableOption]:
        return (
            selectinload(Post.author),
            selectinload(Post.comment_links).selectinload(PostComment.comment),
        )

    async def create(self, *, title: str, content: str, author_id: str, genre: str) -> Post:
        post = Post(title=title, content=content, author_id=author_id, genre=genre)
        await self.add(post)
        return await self.reload(post.id)  # type: ignore[return-value]

    async def list_by_author(self, author_id: str) -> list[Post]:
        return await self.list_live(Post.author_id == author_id)

    async def list_by_genre(self, genre: str) -> list[Post]:
        # Literal, case-insensitive substring match; LIKE wildcards in input are escaped.
        return await self.list_live(Post.genre.icontains(genre, autoescape=True))

    async def push_comment(self, *, post_id: str, comment_id: str) -> None:
        await self._session.execute(
            insert(PostComment).values(post_id=post_id, comment_id=comment_id)
        )

    async def pull_comment(self, *, post_id: str, comment_id: str) -> int:
        result = await self._session.execute(
            delete(PostComment).where(
                PostComment.post_id == post_id, PostComment.comment_id == comment_id
            )
        )
        return result.rowcount


# --- Module Notes -----------------------------------------------------------
# A pull removes every occurrence of the id, mirroring document-store `$pull`.
