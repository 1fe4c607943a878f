"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_anon_key: str | None = None
    supabase_service_role_key: str | None = None
    site_url: str = "http://localhost:5173"
    story_api_url: str = "http://localhost:3000"
    create_profile_on_lookup_error: bool = False
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def supabase_key(settings: Settings) -> str:
    """Return the Supabase key, preferring the service role key."""
    key = settings.supabase_service_role_key or settings.supabase_anon_key
    if not key:
        raise ValueError("Missing Supabase environment variables")
    return key
