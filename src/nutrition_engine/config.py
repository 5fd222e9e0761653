"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    enrichment_provider: str = "wolfram"
    wolfram_app_id: str | None = None
    wolfram_base_url: str = "https://api.wolframalpha.com/v1/result"
    openai_api_key: str | None = None
    openai_model: str = "gpt-5.2"
    enrichment_timeout_seconds: float = 10.0
    rate_limit_window_seconds: int = 900
    rate_limit_max_requests: int = 100
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def resolve_provider(settings: Settings) -> str:
    """Return the enrichment provider that can actually run with these settings."""
    provider = settings.enrichment_provider.strip().lower()
    if provider == "wolfram" and settings.wolfram_app_id:
        return "wolfram"
    if provider == "openai" and settings.openai_api_key:
        return "openai"
    return "disabled"
