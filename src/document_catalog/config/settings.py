"""Settings module using pydantic-settings for configuration management."""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Service Configuration
    service_name: str = Field(default="document-catalog")
    app_name: str = Field(default="Document Center")
    version: str = Field(default="1.0.0")
    environment: str = Field(default="development")
    port: int = Field(default=8010)
    host: str = Field(default="0.0.0.0")

    # Store Configuration
    database_url: str = Field(default="sqlite+aiosqlite:///./document_catalog.db")

    # Presence Configuration
    session_timeout_minutes: int = Field(default=30, ge=1)
    session_sweep_interval_seconds: int = Field(default=60, ge=1)

    # Listing Configuration
    recent_activity_limit: int = Field(default=20, ge=1)
    max_search_results: int = Field(default=100, ge=1)

    # Logging
    log_level: str = Field(default="INFO")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
