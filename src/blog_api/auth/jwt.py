"""
blog_api.auth.jwt

JWT issuing and validation helpers.

Responsibilities:
- Issue signed access tokens carrying `{id, roles}`.
- Decode and validate tokens (signature, `exp`/`iat`, `id` claim).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError

from blog_api.settings import Settings


@dataclass(frozen=True, slots=True)
class JwtConfig:
    alg: str
    secret: str
    ttl: timedelta = timedelta(hours=1)

    @classmethod
    def from_settings(cls, settings: Settings) -> JwtConfig:
        return cls(
            alg=settings.jwt_alg,
            secret=settings.jwt_secret,
            ttl=timedelta(minutes=settings.jwt_ttl_minutes),
        )


class JwtValidationError(Exception):
    pass


def issue_token(*, cfg: JwtConfig, user_id: str, roles: list[str]) -> str:
    now = datetime.now(tz=UTC)
    payload: dict[str, Any] = {
        "id": user_id,
        "roles": roles,
        "iat": int(now.timestamp()),
        "exp": int((now + cfg.ttl).timestamp()),
    }
    return jwt.encode(payload, cfg.secret, algorithm=cfg.alg)


def decode_and_validate(*, cfg: JwtConfig, token: str) -> dict[str, Any]:
    try:
        payload = jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            options={"require": ["exp", "iat"]},
        )
    except InvalidTokenError as e:
        raise JwtValidationError(str(e)) from e

    if not isinstance(payload.get("id"), str) or not payload["id"]:
        raise JwtValidationError("token carries no subject id")
    return payload


# --- Module Notes -----------------------------------------------------------
# Token issuing is used by `services.auth.AuthService`; validation by
# `auth.deps.get_principal`. HS256 with a shared secret is the only mode.
