"""
blog_api.api.validation

Declarative request field validation.

Responsibilities:
- Describe per-field rules (length range, identifier shape, email shape,
  "at least one of") against the JSON body or the path parameters.
- Evaluate every rule and report all violations in declaration order.
- Expose the rule list as a FastAPI dependency that short-circuits with 400 and
  otherwise hands the handler the parsed, trimmed body.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal

from fastapi import Request
from pydantic import validate_email
from pydantic_core import PydanticCustomError

from blog_api.api.errors import ValidationFailed
from blog_api.observability.logging import get_logger

log = get_logger(__name__)

# Canonical document id: 24 hex characters.
OBJECT_ID_RE = re.compile(r"[0-9a-fA-F]{24}")

Location = Literal["body", "path", "document"]


class _Missing:
    def __repr__(self) -> str:
        return "<missing>"


MISSING: Any = _Missing()


@dataclass(frozen=True, slots=True)
class FieldRule:
    location: Location
    field: str
    message: str
    check: Callable[[Any], bool]
    optional: bool = False
    trim: bool = False

    def lookup(self, payload: Any, path_params: dict[str, Any]) -> Any:
        if self.location == "path":
            return path_params.get(self.field, MISSING)
        if self.location == "document":
            return payload
        if isinstance(payload, dict):
            return payload.get(self.field, MISSING)
        return MISSING


def _length_between(low: int, high: int, *, strip: bool) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        if not isinstance(value, str):
            return False
        return low <= len(value.strip() if strip else value) <= high

    return check


def is_object_id(value: Any) -> bool:
    return isinstance(value, str) and OBJECT_ID_RE.fullmatch(value) is not None


def is_email(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        validate_email(value.strip())
    except PydanticCustomError:
        return False
    return True


def body(
    field: str,
    *,
    message: str,
    length: tuple[int, int] | None = None,
    object_id: bool = False,
    email: bool = False,
    optional: bool = False,
    trim: bool = True,
) -> FieldRule:
    if length is not None:
        check = _length_between(*length, strip=trim)
    elif object_id:
        check = is_object_id
    elif email:
        check = is_email
    else:
        raise ValueError(f"rule for {field!r} declares no check")
    return FieldRule(
        location="body",
        field=field,
        message=message,
        check=check,
        optional=optional,
        trim=trim and not object_id,
    )


def path(field: str, *, message: str) -> FieldRule:
    return FieldRule(location="path", field=field, message=message, check=is_object_id)


def any_of(*fields: str, message: str) -> FieldRule:
    """Whole-body rule: at least one of `fields` must be present."""

    def check(value: Any) -> bool:
        return isinstance(value, dict) and any(f in value for f in fields)

    return FieldRule(location="document", field="body", message=message, check=check)


def collect_violations(
    rules: tuple[FieldRule, ...] | list[FieldRule],
    *,
    payload: Any,
    path_params: dict[str, Any],
) -> list[dict[str, Any]]:
    violations: list[dict[str, Any]] = []
    for rule in rules:
        value = rule.lookup(payload, path_params)
        if value is MISSING:
            if rule.optional:
                continue
            violations.append({"field": rule.field, "message": rule.message, "value": None})
            continue
        if not rule.check(value):
            violations.append({"field": rule.field, "message": rule.message, "value": value})
    return violations


def sanitize(rules: tuple[FieldRule, ...] | list[FieldRule], payload: Any) -> dict[str, Any]:
    """Copy of a validated body with surrounding whitespace stripped from trimmed fields."""

    if not isinstance(payload, dict):
        return {}
    cleaned = dict(payload)
    for rule in rules:
        if rule.location == "body" and rule.trim and isinstance(cleaned.get(rule.field), str):
            cleaned[rule.field] = cleaned[rule.field].strip()
    return cleaned


async def _json_body(request: Request) -> Any:
    raw = await request.body()
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except ValueError as e:
        raise ValidationFailed(
            [{"field": "body", "message": "Malformed JSON body", "value": None}]
        ) from e


def validate(*rules: FieldRule):
    """
    Build a dependency that rejects the request with 400 on any rule violation.

    On success the dependency returns the sanitized JSON body (an empty dict for
    path-only rule sets). Handlers build their request models from it instead of
    declaring a body parameter, so the body is only read after the route's auth
    dependencies have run.
    """

    reads_body = any(rule.location != "path" for rule in rules)

    async def _validator(request: Request) -> dict[str, Any]:
        payload = await _json_body(request) if reads_body else {}
        violations = collect_violations(rules, payload=payload, path_params=request.path_params)
        if violations:
            log.info("validation_failed", fields=[v["field"] for v in violations])
            raise ValidationFailed(violations)
        return sanitize(rules, payload)

    return _validator


# --- Module Notes -----------------------------------------------------------
# Rule sets for each route live in `api.validators`. Passwords opt out of
# trimming there.
