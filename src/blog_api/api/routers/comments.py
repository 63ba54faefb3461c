"""
blog_api.api.routers.comments

Comments on posts.

Responsibilities:
- Comment lookup for any authenticated caller; full listing for admins.
- Writes and per-author listing for the `user` role.
- Keep the parent post's comment list in step with create/delete (service side).
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from blog_api.api.deps import comment_service
from blog_api.api.errors import not_found, service_error
from blog_api.api.schemas import (
    CommentCreateRequest,
    CommentDetail,
    CommentOut,
    CommentUpdateRequest,
)
from blog_api.api.validation import validate
from blog_api.api.validators import COMMENT_CREATE, COMMENT_ID, COMMENT_UPDATE, USER_ID
from blog_api.auth.deps import ensure_author, guarded
from blog_api.auth.models import Role
from blog_api.services.comments import CommentService

router = APIRouter(prefix="/api/comments", tags=["comments"])


@router.get("", response_model=list[CommentDetail], dependencies=guarded(Role.ADMIN))
async def list_comments(
    comments: CommentService = Depends(comment_service),
) -> list[CommentDetail]:
    return [CommentDetail.from_entity(c) for c in await comments.get_all()]


@router.get(
    "/user/{user_id}",
    response_model=list[CommentDetail],
    dependencies=[*guarded(Role.USER), Depends(validate(*USER_ID))],
)
async def list_comments_by_author(
    user_id: str, comments: CommentService = Depends(comment_service)
) -> list[CommentDetail]:
    outcome = await comments.get_by_author_id(user_id)
    if not outcome.ok:
        raise service_error(outcome.error)
    return [CommentDetail.from_entity(c) for c in outcome.value]


@router.get(
    "/{comment_id}",
    response_model=CommentDetail,
    dependencies=[*guarded(), Depends(validate(*COMMENT_ID))],
)
async def get_comment(
    comment_id: str, comments: CommentService = Depends(comment_service)
) -> CommentDetail:
    comment = await comments.get_by_id(comment_id)
    if comment is None:
        raise not_found("Comment", comment_id)
    return CommentDetail.from_entity(comment)


@router.post(
    "",
    status_code=HTTP_201_CREATED,
    response_model=CommentOut,
    dependencies=guarded(Role.USER),
)
async def create_comment(
    request: Request,
    payload: dict[str, Any] = Depends(validate(*COMMENT_CREATE)),
    comments: CommentService = Depends(comment_service),
) -> CommentOut:
    body = CommentCreateRequest.model_validate(payload)
    ensure_author(request, body.author)
    outcome = await comments.create(content=body.content, author_id=body.author, post_id=body.post)
    if not outcome.ok:
        raise service_error(outcome.error)
    return CommentOut.from_entity(outcome.value)


@router.put(
    "/{comment_id}",
    response_model=CommentOut,
    dependencies=guarded(Role.USER),
)
async def update_comment(
    comment_id: str,
    payload: dict[str, Any] = Depends(validate(*COMMENT_ID, *COMMENT_UPDATE)),
    comments: CommentService = Depends(comment_service),
) -> CommentOut:
    body = CommentUpdateRequest.model_validate(payload)
    comment = await comments.update(comment_id, {"content": body.content})
    if comment is None:
        raise not_found("Comment", comment_id)
    return CommentOut.from_entity(comment)


@router.delete(
    "/{comment_id}",
    status_code=HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[*guarded(Role.USER), Depends(validate(*COMMENT_ID))],
)
async def delete_comment(
    comment_id: str, comments: CommentService = Depends(comment_service)
) -> Response:
    if not await comments.delete(comment_id):
        raise not_found("Comment", comment_id)
    return Response(status_code=HTTP_204_NO_CONTENT)
