"""Application configuration using pydantic-settings."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from src import __version__


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Business Directory"
    app_version: str = __version__
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    api_prefix: str = ""  # e.g. "/api" to serve /api/businesses

    # Storage
    data_file: Path = Path("./data/businesses.json")

    # Rate limiting (applies to registrations only)
    rate_limit_requests: int = 30
    rate_limit_window: str = "minute"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Tracing
    tracing_enabled: bool = False
    otlp_endpoint: str | None = None
    trace_console_export: bool = False
    trace_sample_rate: float = 1.0


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
