"""
Application settings and configuration management.
Uses pydantic-settings for environment variable loading.
"""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Main application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "AHP Decision Service"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # API Settings
    api_prefix: str = "/api/v1"
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    # AHP
    ahp_consistency_threshold: float = Field(default=0.10, ge=0)

    # Rate Limiting
    rate_limit_requests: int = 100
    rate_limit_window_seconds: int = 60

    @property
    def rate_limit(self) -> str:
        return f"{self.rate_limit_requests}/{self.rate_limit_window_seconds} seconds"

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    # Monitoring - Elastic APM
    apm_enabled: bool = False
    apm_server_url: str = "http://localhost:8200"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
