"""Human-friendly configuration loader.

The ``AppSettings`` class centralises every environment variable we rely on.
That means anyone inspecting the project can quickly answer the questions:

*What:* Which settings exist and what do they control?
*When:* They are read once, the first time ``get_settings`` is called.
*Why:* Centralising configuration prevents magic strings scattered all over the
codebase.
*How:* Each attribute has a sensible default so the API can boot in
development without extra setup; ``.env`` files and environment variables
override them.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Environment-driven application configuration."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Instruments API"
    APP_ENV: str = "dev"

    # SQLite next to the working directory keeps local demos self-contained.
    DB_URL: str = Field(
        default="sqlite:///./instruments.db",
        validation_alias=AliasChoices("DB_URL", "DATABASE_URL"),
    )

    HOST: str = "0.0.0.0"
    PORT: int = 8089
    LOG_LEVEL: str = "INFO"

    # ---- Remote client defaults (used by ``instruments-cli``)
    CLIENT_BASE_URL: str = "http://localhost:8089"
    CLIENT_TIMEOUT: float = 10.0

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalise_log_level(cls, value: str) -> str:
        return str(value or "INFO").strip().upper()


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return AppSettings()
