"""
blog_api.api.routers.users

User accounts.

Responsibilities:
- Public registration (new accounts always get the `user` role).
- Admin-only listing, lookup, partial update and soft delete.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from blog_api.api.deps import user_service
from blog_api.api.errors import not_found, service_error
from blog_api.api.schemas import UserCreateRequest, UserOut, UserUpdateRequest
from blog_api.api.validation import validate
from blog_api.api.validators import USER_CREATE, USER_ID, USER_UPDATE
from blog_api.auth.deps import guarded
from blog_api.auth.models import Role
from blog_api.services.users import UserService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", status_code=HTTP_201_CREATED, response_model=UserOut)
async def create_user(
    payload: dict[str, Any] = Depends(validate(*USER_CREATE)),
    users: UserService = Depends(user_service),
) -> UserOut:
    body = UserCreateRequest.model_validate(payload)
    outcome = await users.create(name=body.name, email=body.email, password=body.password)
    if not outcome.ok:
        raise service_error(outcome.error)
    return UserOut.from_entity(outcome.value)


@router.get("", response_model=list[UserOut], dependencies=guarded(Role.ADMIN))
async def list_users(users: UserService = Depends(user_service)) -> list[UserOut]:
    return [UserOut.from_entity(u) for u in await users.get_all()]


@router.get(
    "/{user_id}",
    response_model=UserOut,
    dependencies=[*guarded(Role.ADMIN), Depends(validate(*USER_ID))],
)
async def get_user(user_id: str, users: UserService = Depends(user_service)) -> UserOut:
    user = await users.get_by_id(user_id)
    if user is None:
        raise not_found("User", user_id)
    return UserOut.from_entity(user)


@router.put(
    "/{user_id}",
    response_model=UserOut,
    dependencies=guarded(Role.ADMIN),
)
async def update_user(
    user_id: str,
    payload: dict[str, Any] = Depends(validate(*USER_ID, *USER_UPDATE)),
    users: UserService = Depends(user_service),
) -> UserOut:
    body = UserUpdateRequest.model_validate(payload)
    user = await users.update(user_id, body.model_dump(exclude_unset=True))
    if user is None:
        raise not_found("User", user_id)
    return UserOut.from_entity(user)


@router.delete(
    "/{user_id}",
    status_code=HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[*guarded(Role.ADMIN), Depends(validate(*USER_ID))],
)
async def delete_user(user_id: str, users: UserService = Depends(user_service)) -> Response:
    if not await users.delete(user_id):
        raise not_found("User", user_id)
    return Response(status_code=HTTP_204_NO_CONTENT)
