"""
blog_api.db.models

Persistence schema for the blog.

Responsibilities:
- Define ORM models for the three document kinds (User, Post, Comment).
- Model a post's ordered comment list as link rows (`PostComment`) so that
  appending and removing an id are single atomic statements.
- Generate ObjectId-shaped identifiers (24 lowercase hex characters).
"""

from __future__ import annotations

import itertools
import os
import threading
import time
from datetime import UTC, datetime

from sqlalchemy import JSON, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blog_api.db.base import Base

# ObjectId layout: 4-byte big-endian seconds, 5-byte per-process random, 3-byte counter.
_PROCESS_RANDOM = os.urandom(5).hex()
_counter = itertools.count(int.from_bytes(os.urandom(3), "big"))
_counter_lock = threading.Lock()


def new_object_id() -> str:
    with _counter_lock:
        seq = next(_counter) & 0xFFFFFF
    return f"{int(time.time()) & 0xFFFFFFFF:08x}{_PROCESS_RANDOM}{seq:06x}"


def utcnow() -> datetime:
    # Naive UTC timestamps; SQLite has no tz-aware column type.
    return datetime.now(tz=UTC).replace(tzinfo=None)


class SoftDeleteMixin:
    created_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at: Mapped[datetime | None] = mapped_column(nullable=True, default=None, index=True)


class User(SoftDeleteMixin, Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_object_id)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    # bcrypt hash; only loaded when a query asks for it (see UserRepo.get_by_email).
    password: Mapped[str] = mapped_column(
        String(128), nullable=False, deferred=True, deferred_raiseload=True
    )
    roles: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)


class Post(SoftDeleteMixin, Base):
    __tablename__ = "posts"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_object_id)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[str] = mapped_column(
        String(24), ForeignKey("users.id"), nullable=False, index=True
    )
    genre: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    author: Mapped[User] = relationship(lazy="raise")
    comment_links: Mapped[list[PostComment]] = relationship(
        back_populates="post",
        order_by="PostComment.seq",
        lazy="raise",
    )

    @property
    def comment_ids(self) -> list[str]:
        return [link.comment_id for link in self.comment_links]


class Comment(SoftDeleteMixin, Base):
    __tablename__ = "comments"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_object_id)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[str] = mapped_column(
        String(24), ForeignKey("users.id"), nullable=False, index=True
    )
    post_id: Mapped[str] = mapped_column(
        String(24), ForeignKey("posts.id"), nullable=False, index=True
    )

    author: Mapped[User] = relationship(lazy="raise")
    post: Mapped[Post] = relationship(lazy="raise")


class PostComment(Base):
    """One entry of a post's ordered `comments` list."""

    __tablename__ = "post_comments"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[str] = mapped_column(String(24), ForeignKey("posts.id"), nullable=False)
    comment_id: Mapped[str] = mapped_column(String(24), ForeignKey("comments.id"), nullable=False)

    post: Mapped[Post] = relationship(back_populates="comment_links", lazy="raise")
    comment: Mapped[Comment] = relationship(lazy="raise")

    __table_args__ = (Index("ix_post_comments_post_comment", "post_id", "comment_id"),)


# --- Module Notes -----------------------------------------------------------
# Relationships default to lazy="raise": async sessions cannot lazy-load, so every
# repository query states the eager loads it needs.
