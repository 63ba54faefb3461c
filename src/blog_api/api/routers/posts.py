"""
blog_api.api.routers.posts

Blog posts.

Responsibilities:
- Reads for any authenticated caller (all posts, genre search).
- Admin-only lookup by id/author and all writes.
- Enforce that a new post is authored by the caller.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from blog_api.api.deps import post_service
from blog_api.api.errors import not_found, service_error
from blog_api.api.schemas import PostCreateRequest, PostDetail, PostOut, PostUpdateRequest
from blog_api.api.validation import validate
from blog_api.api.validators import POST_CREATE, POST_ID, POST_UPDATE, USER_ID
from blog_api.auth.deps import ensure_author, guarded
from blog_api.auth.models import Role
from blog_api.services.posts import PostService

router = APIRouter(prefix="/api/posts", tags=["posts"])


@router.get("", response_model=list[PostDetail], dependencies=guarded())
async def list_posts(posts: PostService = Depends(post_service)) -> list[PostDetail]:
    return [PostDetail.from_entity(p) for p in await posts.get_all()]


@router.get("/genre/{genre}", response_model=list[PostDetail], dependencies=guarded())
async def list_posts_by_genre(
    genre: str, posts: PostService = Depends(post_service)
) -> list[PostDetail]:
    return [PostDetail.from_entity(p) for p in await posts.get_by_genre(genre)]


@router.get(
    "/user/{user_id}",
    response_model=list[PostDetail],
    dependencies=[*guarded(Role.ADMIN), Depends(validate(*USER_ID))],
)
async def list_posts_by_author(
    user_id: str, posts: PostService = Depends(post_service)
) -> list[PostDetail]:
    outcome = await posts.get_by_author_id(user_id)
    if not outcome.ok:
        raise service_error(outcome.error)
    return [PostDetail.from_entity(p) for p in outcome.value]


@router.get(
    "/{post_id}",
    response_model=PostDetail,
    dependencies=[*guarded(Role.ADMIN), Depends(validate(*POST_ID))],
)
async def get_post(post_id: str, posts: PostService = Depends(post_service)) -> PostDetail:
    post = await posts.get_by_id(post_id)
    if post is None:
        raise not_found("Post", post_id)
    return PostDetail.from_entity(post)


@router.post(
    "",
    status_code=HTTP_201_CREATED,
    response_model=PostOut,
    dependencies=guarded(Role.ADMIN),
)
async def create_post(
    request: Request,
    payload: dict[str, Any] = Depends(validate(*POST_CREATE)),
    posts: PostService = Depends(post_service),
) -> PostOut:
    body = PostCreateRequest.model_validate(payload)
    ensure_author(request, body.author)
    outcome = await posts.create(
        title=body.title, content=body.content, author_id=body.author, genre=body.genre
    )
    if not outcome.ok:
        raise service_error(outcome.error)
    return PostOut.from_entity(outcome.value)


@router.put(
    "/{post_id}",
    response_model=PostOut,
    dependencies=guarded(Role.ADMIN),
)
async def update_post(
    post_id: str,
    payload: dict[str, Any] = Depends(validate(*POST_ID, *POST_UPDATE)),
    posts: PostService = Depends(post_service),
) -> PostOut:
    body = PostUpdateRequest.model_validate(payload)
    post = await posts.update(post_id, body.model_dump(exclude_unset=True))
    if post is None:
        raise not_found("Post", post_id)
    return PostOut.from_entity(post)


@router.delete(
    "/{post_id}",
    status_code=HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[*guarded(Role.ADMIN), Depends(validate(*POST_ID))],
)
async def delete_post(post_id: str, posts: PostService = Depends(post_service)) -> Response:
    if not await posts.delete(post_id):
        raise not_found("Post", post_id)
    return Response(status_code=HTTP_204_NO_CONTENT)


# --- Module Notes -----------------------------------------------------------
# `/genre/...` and `/user/...` are declared before `/{post_id}` so they are not
# captured by the id route.
