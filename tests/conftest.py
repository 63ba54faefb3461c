"""
tests.conftest

Shared fixtures: an isolated app per test backed by a throwaway SQLite file,
an httpx client bound to it, and logged-in demo callers.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from blog_api.api.app import create_app
from blog_api.auth.jwt import JwtConfig, issue_token
from blog_api.settings import Settings


@dataclass(frozen=True, slots=True)
class Caller:
    id: str
    roles: list[str]
    token: str

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'blog.db'}",
        jwt_secret="test-secret",
        bcrypt_rounds=4,
        log_level="WARNING",
        seed_demo_users=True,
    )


@pytest.fixture
def jwt_cfg(settings: Settings) -> JwtConfig:
    return JwtConfig.from_settings(settings)


@pytest.fixture
def make_token(jwt_cfg: JwtConfig):
    def _make(user_id: str = "0" * 24, roles: list[str] | None = None) -> str:
        return issue_token(cfg=jwt_cfg, user_id=user_id, roles=roles or [])

    return _make


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings)
    # httpx ASGITransport does not run the lifespan; drive it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def session_factory(app: FastAPI) -> async_sessionmaker[AsyncSession]:
    return app.state.sessionmaker


async def _login(client: httpx.AsyncClient, email: str, password: str) -> Caller:
    r = await client.post("/api/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    token = r.json()["token"]
    return Caller(id=token["id"], roles=token["roles"], token=token["token"])


@pytest_asyncio.fixture
async def admin(client: httpx.AsyncClient) -> Caller:
    return await _login(client, "admin@demo.com", "Admin123")


@pytest_asyncio.fixture
async def member(client: httpx.AsyncClient) -> Caller:
    return await _login(client, "user@demo.com", "User123")


@pytest_asyncio.fixture
async def post_id(client: httpx.AsyncClient, admin: Caller) -> str:
    r = await client.post(
        "/api/posts",
        json={"title": "Hello", "content": "First post", "author": admin.id, "genre": "Tech"},
        headers=admin.headers,
    )
    assert r.status_code == 201, r.text
    return r.json()["id"]


# --- Module Notes -----------------------------------------------------------
# bcrypt cost is lowered to 4 here; production defaults to 10.
