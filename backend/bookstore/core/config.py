"""
Application configuration using pydantic-settings.

Loads settings from environment variables (and optional .env file) with sensible defaults.

Fields loaded (env var names in parentheses):
- app_env (APP_ENV)
- app_version (APP_VERSION)
- log_level (LOG_LEVEL)
- db_url (DB_URL or DATABASE_URL)
- jwt_secret (JWT_SECRET, SECRET_KEY)
- jwt_algorithm (JWT_ALGORITHM)
- jwt_expiration_minutes (JWT_EXPIRATION_MINUTES)
- default_page_size (DEFAULT_PAGE_SIZE)
- max_page_size (MAX_PAGE_SIZE)
- allow_origins (ALLOW_ORIGINS)

Usage:
    from bookstore.core.config import get_settings
    settings = get_settings()
    print(settings.db_url)
"""

from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "change-me-bookstore-dev-secret-0123456789"


class Settings(BaseSettings):
    # Environment / logging
    app_env: str = Field(default="development", alias="APP_ENV")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database URL (accept DB_URL or DATABASE_URL)
    db_url: str = Field(
        default="sqlite:///./bookstore.db",
        validation_alias=AliasChoices("DB_URL", "DATABASE_URL"),
    )

    # JWT signing
    jwt_secret: str = Field(
        default=DEFAULT_JWT_SECRET,
        validation_alias=AliasChoices("JWT_SECRET", "SECRET_KEY"),
    )
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    jwt_expiration_minutes: int = Field(default=300, alias="JWT_EXPIRATION_MINUTES", ge=1)

    # Pagination
    default_page_size: int = Field(default=20, alias="DEFAULT_PAGE_SIZE", ge=1)
    max_page_size: int = Field(default=100, alias="MAX_PAGE_SIZE", ge=1)

    # CORS (comma-separated, "*" for any)
    allow_origins: str = Field(default="*", alias="ALLOW_ORIGINS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _check_production_secret(self) -> "Settings":
        if self.app_env.lower() not in {"development", "dev", "test"} and self.jwt_secret == DEFAULT_JWT_SECRET:
            raise ValueError("JWT_SECRET must be set to a non-default value outside development")
        if self.default_page_size > self.max_page_size:
            raise ValueError("DEFAULT_PAGE_SIZE cannot exceed MAX_PAGE_SIZE")
        return self

    @property
    def cors_origins(self) -> List[str]:
        raw = (self.allow_origins or "").strip()
        if not raw or raw == "*":
            return ["*"]
        return [o.strip() for o in raw.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return a cached Settings instance.
    """
    return Settings()  # type: ignore[call-arg]


__all__ = ["Settings", "get_settings", "DEFAULT_JWT_SECRET"]
