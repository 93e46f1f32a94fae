"""Application configuration."""

import os
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_API_BASE_URL = "http://localhost:5000"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    api_base_url: str = DEFAULT_API_BASE_URL
    transport: Literal["simulated", "http"] = "simulated"
    http_timeout_seconds: float | None = None
    progress_interval_seconds: float = Field(default=0.2, gt=0)
    progress_step: int = Field(default=5, ge=1, le=95)
    progress_cap: int = Field(default=95, ge=1, le=99)
    upload_duration_seconds: float = Field(default=3.0, ge=0)
    processing_duration_seconds: float = Field(default=5.0, ge=0)
    session_store_path: Path | None = None
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def normalize_base_url(raw: str | None) -> str:
    """Return the base URL without a trailing slash, falling back to loopback."""
    if raw is None:
        return DEFAULT_API_BASE_URL
    cleaned = raw.strip().rstrip("/")
    return cleaned or DEFAULT_API_BASE_URL
