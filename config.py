"""
Centralised settings loader (pydantic-settings).
"""

from __future__ import annotations
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class _Settings(BaseSettings):
    # ─── runtime / DB ───────────────────────────────────────────────
    env_name: str = Field("local", validation_alias="ENV_NAME")
    database_url: str = Field(
        "sqlite+aiosqlite:///./fitlog.db", validation_alias="DATABASE_URL"
    )

    # ─── auth ───────────────────────────────────────────────────────
    jwt_secret: str = Field("changeme", validation_alias="JWT_SECRET")
    token_ttl_minutes: int = Field(7 * 24 * 60, validation_alias="TOKEN_TTL_MINUTES")
    demo_username: str = Field("demo", validation_alias="DEMO_USERNAME")
    demo_password: str = Field("password", validation_alias="DEMO_PASSWORD")

    # allow other teammates’ env-vars without crashing
    model_config = SettingsConfigDict(
        extra="ignore", env_file=".env", env_file_encoding="utf-8"
    )


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> _Settings:  # pragma: no cover
    return _Settings()  # type: ignore[call-arg]


settings: _Settings = _cached()
