"""
blog_api.api.routers.auth

Credential login.

Responsibilities:
- Exchange email/password for a signed access token.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from blog_api.api.deps import auth_service
from blog_api.api.errors import service_error
from blog_api.api.schemas import LoginRequest, LoginResponse, LoginToken
from blog_api.api.validation import validate
from blog_api.api.validators import LOGIN
from blog_api.services.auth import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(
    payload: dict[str, Any] = Depends(validate(*LOGIN)),
    auth: AuthService = Depends(auth_service),
) -> LoginResponse:
    body = LoginRequest.model_validate(payload)
    outcome = await auth.login(email=body.email, password=body.password)
    if not outcome.ok:
        raise service_error(outcome.error)
    result = outcome.value
    return LoginResponse(token=LoginToken(id=result.id, roles=result.roles, token=result.token))
