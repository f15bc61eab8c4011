"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

WILDCARD_ORIGIN = "*"

DEFAULT_CORS_ORIGINS = [
    "http://localhost:8081",
    "exp://localhost:8081",
    "http://localhost:19000",
    "http://localhost:19006",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    supabase_jwt_secret: str
    openai_api_key: str
    openai_base_url: str | None = None
    openai_model: str = "gpt-4o"
    openai_reasoning_effort: str | None = None
    openai_store: bool = False
    reference_timezone: str = "UTC"
    cors_allowed_origins: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_cors_origins(raw: str | None) -> list[str]:
    """Parse allowed CORS origins from env.

    Unset or blank falls back to the Expo dev hosts; `*` allows any origin
    (credentials are then disabled).
    """
    if raw is None:
        return list(DEFAULT_CORS_ORIGINS)
    cleaned = raw.strip()
    if not cleaned:
        return list(DEFAULT_CORS_ORIGINS)
    if cleaned == WILDCARD_ORIGIN:
        return [WILDCARD_ORIGIN]
    origins: list[str] = []
    for chunk in cleaned.split(","):
        value = chunk.strip().rstrip("/")
        if value and value not in origins:
            origins.append(value)
    return origins or list(DEFAULT_CORS_ORIGINS)
