"""
blog_api.auth.models

Auth domain models.

Responsibilities:
- Define the role enumeration shared by tokens, users and route guards.
- Define the authenticated identity type (`Principal`) injected into endpoints.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Role(enum.StrEnum):
    # Values are embedded in tokens and stored on users; treat as stable API contract.
    ADMIN = "admin"
    USER = "user"


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity, rebuilt from the token on every request.

    `roles` is `None` when the token carries no usable role claim (absent, null
    or not a list); an empty list stays an empty tuple.
    """

    id: str
    roles: tuple[str, ...] | None = ()

    def has_role(self, role: Role) -> bool:
        return self.roles is not None and role.value in self.roles


# --- Module Notes -----------------------------------------------------------
# Roles are compared by exact value; there is no hierarchy between ADMIN and USER.
