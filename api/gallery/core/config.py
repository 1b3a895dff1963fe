"""Application settings parsed from environment variables and defaults."""

import json
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]


def _split_list_value(value: str | list[str] | None) -> list[str] | None:
    """Parse JSON, CSV, or list inputs into a list of stripped strings.

    Returns None when the input holds nothing usable so callers can apply
    their own default.
    """
    if isinstance(value, list):
        cleaned = [item.strip() for item in value if isinstance(item, str) and item.strip()]
        return cleaned or None
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        try:
            parsed = json.loads(stripped)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, list):
            cleaned = [str(item).strip() for item in parsed if str(item).strip()]
            return cleaned or None
        items = [item.strip() for item in stripped.split(",") if item.strip()]
        return items or None
    return None


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    app_name: str = "Gallery API"
    environment: str = "development"
    api_prefix: str = "/api"

    database_url: str = "sqlite+aiosqlite:///./gallery.db"
    test_database_url: Optional[str] = None
    database_echo: bool = False

    access_token_expires_minutes: int = 30
    jwt_secret_key: str = "change-me"
    jwt_algorithm: str = "HS256"
    admin_subjects: list[str] | str = Field(default_factory=list)

    auto_create_tables: bool = True

    log_level: str = "INFO"
    cors_origins: list[str] | str = Field(default_factory=lambda: DEFAULT_CORS_ORIGINS.copy())

    default_page_limit: int = 30
    max_page_limit: int = 1000

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_cors_origins(cls, value: str | list[str] | None) -> list[str]:
        """Normalize CORS origins from JSON, CSV, or list inputs."""
        return _split_list_value(value) or DEFAULT_CORS_ORIGINS.copy()

    @field_validator("admin_subjects", mode="before")
    @classmethod
    def _split_admin_subjects(cls, value: str | list[str] | None) -> list[str]:
        """Normalize the admin subject allowlist from JSON, CSV, or list inputs."""
        return _split_list_value(value) or []

    @field_validator("default_page_limit", "max_page_limit")
    @classmethod
    def _validate_page_limits(cls, value: int) -> int:
        if value < 0:
            raise ValueError("Page limits must be non-negative")
        return value

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """Return cached settings to avoid re-parsing environment variables."""
    return Settings()


settings = get_settings()
