"""
tests.test_auth

Token verification, the role gate and credential login.

Responsibilities:
- Missing/malformed Authorization headers answer 401 without touching the verifier.
- Bad tokens answer 403; the gate distinguishes "no roles" from "wrong role".
- Login answers the same 401 for unknown email and wrong password.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import httpx
import jwt
import pytest
from fastapi import HTTPException
from starlette.requests import Request

from blog_api.auth import deps as auth_deps
from blog_api.auth.deps import (
    ACCESS_DENIED,
    INVALID_TOKEN,
    MISSING_TOKEN,
    NO_ROLES,
    require_role,
)
from blog_api.auth.jwt import decode_and_validate
from blog_api.auth.models import Principal, Role


def _bare_request() -> Request:
    return Request({"type": "http", "method": "GET", "path": "/", "headers": []})


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": ""},
        {"Authorization": "Bearer"},
        {"Authorization": "Bearer "},
        {"Authorization": "Basic dXNlcjpwYXNz"},
        {"Authorization": "Token abc.def.ghi"},
    ],
)
async def test_missing_or_malformed_header_is_401_without_verifying(
    client: httpx.AsyncClient, monkeypatch: pytest.MonkeyPatch, headers: dict[str, str]
) -> None:
    calls: list[str] = []

    def _spy(*, cfg, token):
        calls.append(token)
        raise AssertionError("verifier must not run")

    monkeypatch.setattr(auth_deps, "decode_and_validate", _spy)

    r = await client.get("/api/posts", headers=headers)
    assert r.status_code == 401
    assert r.json() == {"message": MISSING_TOKEN}
    assert calls == []


@pytest.mark.asyncio
async def test_expired_token_is_403(client: httpx.AsyncClient, settings) -> None:
    past = datetime.now(tz=UTC) - timedelta(hours=2)
    token = jwt.encode(
        {
            "id": "a" * 24,
            "roles": ["admin"],
            "iat": int(past.timestamp()),
            "exp": int((past + timedelta(minutes=5)).timestamp()),
        },
        settings.jwt_secret,
        algorithm="HS256",
    )
    r = await client.get("/api/posts", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 403
    assert r.json() == {"message": INVALID_TOKEN}


@pytest.mark.asyncio
async def test_wrong_signature_is_403(client: httpx.AsyncClient) -> None:
    now = datetime.now(tz=UTC)
    token = jwt.encode(
        {
            "id": "a" * 24,
            "roles": ["admin"],
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(hours=1)).timestamp()),
        },
        "some-other-secret",
        algorithm="HS256",
    )
    r = await client.get("/api/posts", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 403
    assert r.json() == {"message": INVALID_TOKEN}


@pytest.mark.asyncio
async def test_garbage_token_is_403(client: httpx.AsyncClient) -> None:
    r = await client.get("/api/posts", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 403
    assert r.json() == {"message": INVALID_TOKEN}


def test_token_without_subject_id_is_rejected(jwt_cfg) -> None:
    now = datetime.now(tz=UTC)
    token = jwt.encode(
        {"roles": ["user"], "iat": int(now.timestamp()), "exp": int(now.timestamp()) + 60},
        jwt_cfg.secret,
        algorithm=jwt_cfg.alg,
    )
    with pytest.raises(auth_deps.JwtValidationError):
        decode_and_validate(cfg=jwt_cfg, token=token)


def _signed(cfg, **claims) -> str:
    now = int(datetime.now(tz=UTC).timestamp())
    return jwt.encode({"iat": now, "exp": now + 60, **claims}, cfg.secret, algorithm=cfg.alg)


def test_principal_from_token_normalizes_roles(jwt_cfg, make_token) -> None:
    p = auth_deps.principal_from_token(make_token("b" * 24, ["user"]), cfg=jwt_cfg)
    assert p == Principal(id="b" * 24, roles=("user",))

    empty = _signed(jwt_cfg, id="c" * 24, roles=[])
    assert auth_deps.principal_from_token(empty, cfg=jwt_cfg).roles == ()

    for odd in ({"roles": "admin"}, {"roles": None}, {}):
        token = _signed(jwt_cfg, id="c" * 24, **odd)
        assert auth_deps.principal_from_token(token, cfg=jwt_cfg).roles is None


@pytest.mark.asyncio
@pytest.mark.parametrize("claims", [{}, {"roles": None}, {"roles": "admin"}])
async def test_token_without_usable_roles_claim_hits_gate(
    client: httpx.AsyncClient, jwt_cfg, claims: dict
) -> None:
    token = _signed(jwt_cfg, id="c" * 24, **claims)
    r = await client.get("/api/users", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 403
    assert r.json() == {"message": NO_ROLES}


@pytest.mark.asyncio
async def test_empty_role_list_is_insufficient(client: httpx.AsyncClient, make_token) -> None:
    r = await client.get("/api/users", headers={"Authorization": f"Bearer {make_token()}"})
    assert r.status_code == 403
    assert r.json() == {"message": ACCESS_DENIED}


@pytest.mark.asyncio
async def test_insufficient_role_is_denied(client: httpx.AsyncClient, member) -> None:
    r = await client.get("/api/users", headers=member.headers)
    assert r.status_code == 403
    assert r.json() == {"message": ACCESS_DENIED}


@pytest.mark.asyncio
async def test_any_role_route_accepts_role_less_token(
    client: httpx.AsyncClient, make_token
) -> None:
    # Routes without a role requirement only need a verified token.
    r = await client.get("/api/posts", headers={"Authorization": f"Bearer {make_token()}"})
    assert r.status_code == 200
    assert r.json() == []


def test_gate_without_principal_reports_no_roles() -> None:
    gate = require_role(Role.ADMIN)
    with pytest.raises(HTTPException) as excinfo:
        gate(_bare_request())
    assert excinfo.value.status_code == 403
    assert excinfo.value.detail == NO_ROLES


@pytest.mark.parametrize(
    "roles,expected", [(None, NO_ROLES), ((), ACCESS_DENIED), (("user",), ACCESS_DENIED)]
)
def test_gate_distinguishes_missing_from_insufficient_roles(roles, expected: str) -> None:
    request = _bare_request()
    request.state.principal = Principal(id="d" * 24, roles=roles)
    with pytest.raises(HTTPException) as excinfo:
        require_role(Role.ADMIN)(request)
    assert excinfo.value.detail == expected


def test_gate_passes_request_through_unmodified() -> None:
    request = _bare_request()
    principal = Principal(id="d" * 24, roles=("user", "admin"))
    request.state.principal = principal

    assert require_role(Role.ADMIN)(request) is None
    assert request.state.principal is principal


@pytest.mark.asyncio
async def test_login_success_returns_token_with_roles(client: httpx.AsyncClient, jwt_cfg) -> None:
    r = await client.post(
        "/api/auth/login", json={"email": "user@demo.com", "password": "User123"}
    )
    assert r.status_code == 200
    body = r.json()["token"]
    assert "user" in body["roles"]

    claims = decode_and_validate(cfg=jwt_cfg, token=body["token"])
    assert claims["id"] == body["id"]
    assert claims["roles"] == body["roles"]
    assert claims["exp"] - claims["iat"] == 3600


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "email,password",
    [("user@demo.com", "wrong-password"), ("nobody@demo.com", "User123")],
)
async def test_login_failures_are_indistinguishable(
    client: httpx.AsyncClient, email: str, password: str
) -> None:
    r = await client.post("/api/auth/login", json={"email": email, "password": password})
    assert r.status_code == 401
    assert r.json() == {"message": "Not authorized"}


@pytest.mark.asyncio
async def test_login_validates_body(client: httpx.AsyncClient) -> None:
    r = await client.post("/api/auth/login", json={"email": "not-an-email"})
    assert r.status_code == 400
    fields = [e["field"] for e in r.json()["errors"]]
    assert fields == ["email", "password"]


# --- Module Notes -----------------------------------------------------------
# Raw tokens are signed with PyJWT directly when a case needs claims that
# `issue_token` never produces.
