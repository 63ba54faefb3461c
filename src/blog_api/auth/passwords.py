"""
blog_api.auth.passwords

Password hashing (bcrypt via passlib).

Responsibilities:
- Hash new passwords with a configurable cost factor.
- Verify a plaintext password against a stored hash.
- Keep bcrypt work off the event loop.
"""

from __future__ import annotations

import asyncio

from passlib.context import CryptContext


class PasswordHasher:
    def __init__(self, *, rounds: int = 10) -> None:
        self._ctx = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    async def hash(self, plain: str) -> str:
        return await asyncio.to_thread(self._ctx.hash, plain)

    async def verify(self, plain: str, hashed: str) -> bool:
        return await asyncio.to_thread(self._ctx.verify, plain, hashed)


# --- Module Notes -----------------------------------------------------------
# One hasher is created at startup (api.app) and shared; CryptContext is thread-safe.
