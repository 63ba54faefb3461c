"""
blog_api.services.results

Explicit service outcomes.

Responsibilities:
- Carry either a value or a typed domain error out of a service call.
- Give controllers a closed set of error kinds to switch on.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(enum.StrEnum):
    reference_not_found = "REFERENCE_NOT_FOUND"
    not_authorized = "NOT_AUTHORIZED"
    conflict = "CONFLICT"


@dataclass(frozen=True, slots=True)
class ServiceError:
    kind: ErrorKind
    message: str
    # Entity kind involved, e.g. "User" or "Post" for REFERENCE_NOT_FOUND.
    entity: str | None = None


@dataclass(frozen=True, slots=True)
class Outcome(Generic[T]):
    value: T | None = None
    error: ServiceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: ServiceError) -> Outcome[T]:
        return cls(error=error)


def reference_not_found(entity: str) -> ServiceError:
    return ServiceError(
        kind=ErrorKind.reference_not_found,
        message=f"{entity} not found",
        entity=entity,
    )


# --- Module Notes -----------------------------------------------------------
# Only domain outcomes travel through `Outcome`; infrastructure failures still raise.
