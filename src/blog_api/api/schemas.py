"""
blog_api.api.schemas

Request and response models for the HTTP surface.

Responsibilities:
- Request models, built by the routers from the payload `api.validation`
  has already checked and trimmed.
- camelCase response payloads, in a "raw" form (references as ids) returned by
  writes and a "resolved" form (author names, comment summaries) returned by reads.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from blog_api.db.models import Comment, Post, User


class PostCreateRequest(BaseModel):
    title: str
    content: str
    author: str
    genre: str
    # Accepted for client compatibility; the list is owned by comment create/delete.
    comments: Any = None


class PostUpdateRequest(BaseModel):
    title: str | None = None
    content: str | None = None
    genre: str | None = None


class CommentCreateRequest(BaseModel):
    content: str
    author: str
    post: str


class CommentUpdateRequest(BaseModel):
    content: str


class UserCreateRequest(BaseModel):
    name: str
    email: str
    password: str


class UserUpdateRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    email: str
    password: str


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Timestamps(ApiModel):
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None


class UserOut(Timestamps):
    id: str
    name: str
    email: str
    roles: list[str]

    @classmethod
    def from_entity(cls, user: User) -> UserOut:
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            roles=list(user.roles),
            created_at=user.created_at,
            updated_at=user.updated_at,
            deleted_at=user.deleted_at,
        )


class AuthorRef(ApiModel):
    id: str
    name: str


class PostRef(ApiModel):
    id: str
    title: str


class CommentSummary(ApiModel):
    id: str
    content: str
    author: str


class PostOut(Timestamps):
    id: str
    title: str
    content: str
    author: str
    genre: str
    comments: list[str]

    @classmethod
    def from_entity(cls, post: Post) -> PostOut:
        return cls(
            id=post.id,
            title=post.title,
            content=post.content,
            author=post.author_id,
            genre=post.genre,
            comments=post.comment_ids,
            created_at=post.created_at,
            updated_at=post.updated_at,
            deleted_at=post.deleted_at,
        )


class PostDetail(Timestamps):
    id: str
    title: str
    content: str
    author: AuthorRef
    genre: str
    comments: list[CommentSummary]

    @classmethod
    def from_entity(cls, post: Post) -> PostDetail:
        return cls(
            id=post.id,
            title=post.title,
            content=post.content,
            author=AuthorRef(id=post.author.id, name=post.author.name),
            genre=post.genre,
            comments=[
                CommentSummary(
                    id=link.comment.id,
                    content=link.comment.content,
                    author=link.comment.author_id,
                )
                for link in post.comment_links
            ],
            created_at=post.created_at,
            updated_at=post.updated_at,
            deleted_at=post.deleted_at,
        )


class CommentOut(Timestamps):
    id: str
    content: str
    author: str
    post: str

    @classmethod
    def from_entity(cls, comment: Comment) -> CommentOut:
        return cls(
            id=comment.id,
            content=comment.content,
            author=comment.author_id,
            post=comment.post_id,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            deleted_at=comment.deleted_at,
        )


class CommentDetail(Timestamps):
    id: str
    content: str
    author: AuthorRef
    post: PostRef

    @classmethod
    def from_entity(cls, comment: Comment) -> CommentDetail:
        return cls(
            id=comment.id,
            content=comment.content,
            author=AuthorRef(id=comment.author.id, name=comment.author.name),
            post=PostRef(id=comment.post.id, title=comment.post.title),
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            deleted_at=comment.deleted_at,
        )


class LoginToken(ApiModel):
    id: str
    roles: list[str]
    token: str


class LoginResponse(ApiModel):
    token: LoginToken


# --- Module Notes -----------------------------------------------------------
# User payloads never carry the password hash; the column is deferred and not
# part of `UserOut`.
