"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    openai_api_key: str
    openai_model: str = "gpt-4o"
    openai_max_tokens: int = 1000
    storage_bucket: str = "uploaded-images"
    meals_table: str = "meals"
    default_timezone: str = "UTC"
    history_days: int = 30
    api_token: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_api_token(raw: str | None) -> str | None:
    """Return the configured API token, or None when auth is disabled."""
    if raw is None:
        return None
    cleaned = raw.strip()
    return cleaned or None
