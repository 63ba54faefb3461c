"""
tests.test_validation

Declarative field rules and the 400 envelope they produce.
"""

from __future__ import annotations

import httpx
import pytest
from fastapi import Depends, FastAPI

from blog_api.api.errors import register_exception_handlers
from blog_api.api.validation import collect_violations, is_email, sanitize, validate
from blog_api.api.validators import (
    COMMENT_UPDATE,
    POST_CREATE,
    POST_ID,
    POST_UPDATE,
    USER_CREATE,
)


def test_every_violation_reported_in_declaration_order() -> None:
    errors = collect_violations(POST_CREATE, payload={}, path_params={})
    assert [e["field"] for e in errors] == ["title", "content", "author", "genre"]
    assert errors[0] == {
        "field": "title",
        "message": "Title must be between 1 and 100 characters",
        "value": None,
    }


def test_valid_payload_has_no_violations() -> None:
    payload = {"title": "t", "content": "c", "author": "a" * 24, "genre": "g"}
    assert collect_violations(POST_CREATE, payload=payload, path_params={}) == []


def test_lengths_are_measured_after_trimming() -> None:
    errors = collect_violations(
        POST_CREATE,
        payload={"title": "   ", "content": "c", "author": "a" * 24, "genre": "x" * 21},
        path_params={},
    )
    assert [(e["field"], e["value"]) for e in errors] == [("title", "   "), ("genre", "x" * 21)]


def test_non_string_values_fail_their_rule() -> None:
    errors = collect_violations(
        USER_CREATE,
        payload={"name": 42, "email": "a@b.io", "password": ["secret1"]},
        path_params={},
    )
    assert [e["field"] for e in errors] == ["name", "password"]


def test_partial_update_needs_at_least_one_field() -> None:
    errors = collect_violations(POST_UPDATE, payload={}, path_params={})
    assert len(errors) == 1
    assert errors[0]["field"] == "body"

    assert collect_violations(POST_UPDATE, payload={"genre": "Go"}, path_params={}) == []


def test_optional_field_present_but_invalid_is_reported() -> None:
    errors = collect_violations(POST_UPDATE, payload={"title": ""}, path_params={})
    assert [e["field"] for e in errors] == ["title"]


def test_path_identifier_shape() -> None:
    errors = collect_violations(POST_ID, payload={}, path_params={"post_id": "123"})
    assert errors == [{"field": "post_id", "message": "Invalid post ID format", "value": "123"}]
    ok = collect_violations(POST_ID, payload={}, path_params={"post_id": "AbCdEf" + "0" * 18})
    assert ok == []


@pytest.mark.parametrize("value", ["user@demo.com", "  ann.lee+blog@example.co.uk "])
def test_email_shape_accepts(value: str) -> None:
    assert is_email(value)


@pytest.mark.parametrize("value", ["a@b..c", "a@-b.c", "no-at-sign", "a@b", "", 42, None])
def test_email_shape_rejects(value) -> None:
    assert not is_email(value)


def test_email_rule_keeps_declaration_order() -> None:
    errors = collect_violations(
        USER_CREATE, payload={"name": "", "email": "a@b..c", "password": "x"}, path_params={}
    )
    assert [e["field"] for e in errors] == ["name", "email", "password"]


def test_sanitize_trims_text_fields_but_not_ids_or_passwords() -> None:
    cleaned = sanitize(
        USER_CREATE, {"name": "  Ann ", "email": " ann@example.com ", "password": " pw 123 "}
    )
    assert cleaned == {"name": "Ann", "email": "ann@example.com", "password": " pw 123 "}

    post = sanitize(POST_CREATE, {"title": " T ", "author": "a" * 24, "extra": " x "})
    assert post == {"title": "T", "author": "a" * 24, "extra": " x "}


def _rules_app(calls: list[int]) -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.put("/check", dependencies=[Depends(validate(*COMMENT_UPDATE))])
    async def check() -> dict[str, str]:
        calls.append(1)
        return {"status": "ok"}

    @app.post("/echo")
    async def echo(payload: dict = Depends(validate(*COMMENT_UPDATE))) -> dict:
        calls.append(1)
        return payload

    return app


@pytest.mark.asyncio
async def test_validator_short_circuits_with_400() -> None:
    calls: list[int] = []
    transport = httpx.ASGITransport(app=_rules_app(calls))
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        r = await client.put("/check", json={"content": "x" * 101})

    assert r.status_code == 400
    assert r.json() == {
        "message": "Validation errors",
        "errors": [
            {
                "field": "content",
                "message": "Content must be between 1 and 100 characters",
                "value": "x" * 101,
            }
        ],
    }
    assert calls == []


@pytest.mark.asyncio
async def test_validator_invokes_handler_exactly_once_when_clean() -> None:
    calls: list[int] = []
    transport = httpx.ASGITransport(app=_rules_app(calls))
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        r = await client.put("/check", json={"content": "fine"})

    assert r.status_code == 200
    assert calls == [1]


@pytest.mark.asyncio
async def test_malformed_json_is_a_validation_error() -> None:
    calls: list[int] = []
    transport = httpx.ASGITransport(app=_rules_app(calls))
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        r = await client.put(
            "/check", content=b"{not json", headers={"Content-Type": "application/json"}
        )

    assert r.status_code == 400
    assert r.json()["message"] == "Validation errors"
    assert calls == []


@pytest.mark.asyncio
async def test_validator_hands_trimmed_payload_to_handler() -> None:
    calls: list[int] = []
    transport = httpx.ASGITransport(app=_rules_app(calls))
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        r = await client.post("/echo", json={"content": "  padded  "})

    assert r.status_code == 200
    assert r.json() == {"content": "padded"}
    assert calls == [1]


# --- Module Notes -----------------------------------------------------------
# `_rules_app` exercises `validate` without auth or a store behind it.
