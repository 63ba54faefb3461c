"""
blog_api.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (e.g., JWT secret).
- Offer a cached settings instance for the process entrypoint.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "defaultSecret"


class Settings(BaseSettings):
    """
    Env-driven configuration. Variable names carry no prefix (PORT, JWT_SECRET,
    DATABASE_URL, ...) and an optional `.env` file is honoured.
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "blog-api"
    log_level: str = "INFO"
    # JSON lines for log shippers; false switches to the human-readable console renderer.
    log_json: bool = True

    host: str = "0.0.0.0"
    port: int = 3000

    # Auth
    jwt_alg: str = "HS256"
    jwt_secret: str = Field(default=DEFAULT_JWT_SECRET, repr=False)
    jwt_ttl_minutes: int = Field(default=60, ge=1)
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./blog.db"
    seed_demo_users: bool = True

    @field_validator("jwt_secret")
    @classmethod
    def _blank_secret_falls_back(cls, v: str) -> str:
        # An exported-but-empty JWT_SECRET behaves like an unset one.
        return v if v.strip() else DEFAULT_JWT_SECRET

    @property
    def uses_default_secret(self) -> bool:
        return self.jwt_secret == DEFAULT_JWT_SECRET


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars when the entrypoint asks more than once.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Request handlers never call `get_settings` directly; the instance passed to
# `create_app` is stored on app.state and injected from there (see api.deps).
