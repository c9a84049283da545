"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    inference_provider: Literal["openai", "gemini"] = "gemini"
    openai_api_key: str | None = None
    openai_model: str = "gpt-5.2"
    openai_store: bool = False
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.5-flash"
    inference_timeout_seconds: float = 60.0
    validation_policy: Literal["reject", "drop"] = "reject"
    max_image_bytes: int = 10 * 1024 * 1024
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def resolve_api_key(settings: Settings) -> str | None:
    """Return the credential for the selected provider, if any."""
    if settings.inference_provider == "openai":
        raw = settings.openai_api_key
    else:
        raw = settings.gemini_api_key
    if raw is None:
        return None
    cleaned = raw.strip()
    return cleaned or None


def resolve_model(settings: Settings) -> str:
    """Return the model name for the selected provider."""
    if settings.inference_provider == "openai":
        return settings.openai_model
    return settings.gemini_model
