from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven application configuration."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "effortlog"
    LOG_LEVEL: str = "INFO"

    DB_URL: str = Field(
        default="sqlite:///./effortlog.db",
        validation_alias=AliasChoices("DB_URL", "DATABASE_URL"),
    )
    DB_ECHO: bool = False
    # Seconds to wait for a pooled connection before giving up.
    DB_POOL_TIMEOUT: float = 10.0

    # Base URL of the passport-info service; queried with passportSerie/passportNumber.
    PASSPORT_API_URL: str = Field(
        default="",
        validation_alias=AliasChoices("PASSPORT_API_URL", "API_URL"),
    )
    PASSPORT_API_TIMEOUT: float = 6.0

    HOST: str = "0.0.0.0"
    PORT: int = 8080


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
