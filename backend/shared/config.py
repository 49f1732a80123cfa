"""
Centralized configuration for the Finance Tracker backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings are namespaced by prefix (e.g., JWT_*, AI_*).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Finance Tracker API"
    app_version: str = "0.1.0"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Identity tokens
    jwt_secret: str = ""
    jwt_expires_days: int = 30

    # Rate limiting (windows in seconds)
    api_rate_limit_max: int = 100
    api_rate_limit_window: int = 15 * 60
    auth_rate_limit_max: int = 5
    auth_rate_limit_window: int = 15 * 60
    ai_rate_limit_max: int = 20
    ai_rate_limit_window: int = 60 * 60

    # Password reset
    client_url: str = "http://localhost:5173"
    password_reset_ttl_minutes: int = 60

    # AI assistant
    anthropic_api_key: str = ""
    ai_model: str = "claude-sonnet-4-20250514"
    ai_max_tokens: int = 1024

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
