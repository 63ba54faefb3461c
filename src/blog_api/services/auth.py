"""
blog_api.services.auth

Login and token issuing.

Responsibilities:
- Check an email/password pair against the stored bcrypt hash.
- Issue a signed token embedding `{id, roles}`.
"""

from __future__ import annotations

from dataclasses import dataclass

from blog_api.auth.jwt import JwtConfig, issue_token
from blog_api.auth.passwords import PasswordHasher
from blog_api.db.models import User
from blog_api.observability.logging import get_logger
from blog_api.services.results import ErrorKind, Outcome, ServiceError
from blog_api.services.users import UserService

log = get_logger(__name__)

# Same error for "no such user" and "wrong password" so callers cannot tell them apart.
NOT_AUTHORIZED = ServiceError(kind=ErrorKind.not_authorized, message="Not authorized")


@dataclass(frozen=True, slots=True)
class LoginResult:
    id: str
    roles: list[str]
    token: str


class AuthService:
    def __init__(self, *, users: UserService, hasher: PasswordHasher, jwt_cfg: JwtConfig) -> None:
        self._users = users
        self._hasher = hasher
        self._jwt_cfg = jwt_cfg

    async def login(self, *, email: str, password: str) -> Outcome[LoginResult]:
        user = await self._users.find_by_email(email, with_password=True)
        if user is None:
            log.info("login_failed", reason="unknown_email")
            return Outcome.failure(NOT_AUTHORIZED)

        if not await self._hasher.verify(password, user.password):
            log.info("login_failed", reason="password_mismatch", user_id=user.id)
            return Outcome.failure(NOT_AUTHORIZED)

        token = self.generate_token(user)
        log.info("login_succeeded", user_id=user.id)
        return Outcome.success(LoginResult(id=user.id, roles=list(user.roles), token=token))

    def generate_token(self, user: User) -> str:
        return issue_token(cfg=self._jwt_cfg, user_id=user.id, roles=list(user.roles))


# --- Module Notes -----------------------------------------------------------
# Token verification lives in `auth.deps`; this service only signs.
