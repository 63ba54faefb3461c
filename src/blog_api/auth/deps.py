"""
blog_api.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Convert a bearer token into a typed `Principal` and attach it to the request.
- Enforce role membership via a reusable dependency factory.
- Compare the authenticated principal with the author named in a request body.
"""

from __future__ import annotations

from typing import Any

from fastapi import Depends, HTTPException, Request
from fastapi.params import Depends as DependsParam
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from blog_api.api.deps import settings_dep
from blog_api.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate
from blog_api.auth.models import Principal, Role
from blog_api.observability.logging import get_logger
from blog_api.settings import Settings

log = get_logger(__name__)

MISSING_TOKEN = "Access denied. No token provided."
INVALID_TOKEN = "Invalid token."
NO_ROLES = "Access denied. No roles found."
ACCESS_DENIED = "Access denied."
AUTHOR_MISMATCH = "Author mismatch"

_bearer = HTTPBearer(auto_error=False)


def _normalize_roles(raw: Any) -> tuple[str, ...] | None:
    # Anything other than a list is "no roles"; an empty list is just an empty role set.
    if not isinstance(raw, list):
        return None
    return tuple(str(r) for r in raw)


def principal_from_token(token: str, *, cfg: JwtConfig) -> Principal:
    try:
        payload = decode_and_validate(cfg=cfg, token=token)
    except JwtValidationError as e:
        log.info("token_rejected", reason=str(e))
        raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail=INVALID_TOKEN) from e
    return Principal(id=payload["id"], roles=_normalize_roles(payload.get("roles")))


def get_principal(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(settings_dep),
) -> Principal:
    # HTTPBearer yields None for a missing header, a non-Bearer scheme or an empty token.
    if creds is None or not creds.credentials.strip():
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=MISSING_TOKEN)

    principal = principal_from_token(creds.credentials, cfg=JwtConfig.from_settings(settings))
    request.state.principal = principal
    return principal


def attached_principal(request: Request) -> Principal | None:
    return getattr(request.state, "principal", None)


def require_role(role: Role):
    def _gate(request: Request) -> None:
        principal = attached_principal(request)
        if principal is None or principal.roles is None:
            raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail=NO_ROLES)
        if not principal.has_role(role):
            raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail=ACCESS_DENIED)

    return _gate


def guarded(role: Role | None = None) -> list[DependsParam]:
    """
    Route-level dependency chain: token verification, then the role gate.

    FastAPI resolves route dependencies in list order, so the gate always sees the
    principal attached by `get_principal`.
    """

    deps = [Depends(get_principal)]
    if role is not None:
        deps.append(Depends(require_role(role)))
    return deps


def ensure_author(request: Request, author_id: str) -> None:
    """Reject writes whose `author` is not the caller. Independent of the role gate."""

    principal = attached_principal(request)
    if principal is None or principal.id != author_id:
        raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail=AUTHOR_MISMATCH)


# --- Module Notes -----------------------------------------------------------
# Route-level `guarded(...)` dependencies resolve before handler parameters, and
# handlers receive their body from `Depends(validate(...))`, so auth failures
# always win over body-shape failures (malformed JSON included).
