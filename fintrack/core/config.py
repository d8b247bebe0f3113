"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables
    or a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "fintrack"
    debug: bool = False

    # Local storage
    storage_url: str = "sqlite:///./fintrack.db"

    # Remote sync (GitHub Gist)
    github_api_url: str = "https://api.github.com"
    github_api_timeout: float = 10.0
    remote_file_name: str = "finance-tracker-data.json"
    remote_description: str = "💰 Finance Tracker Data - Auto-synced"
    sync_debounce_seconds: float = Field(default=2.0, ge=0.0)

    # Defaults
    default_monthly_budget: float = Field(default=1000.0, gt=0.0)
    export_app_version: str = "1.0"

    # Metrics
    metrics_enabled: bool = True

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
