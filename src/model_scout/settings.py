"""Application settings using pydantic-settings."""

from __future__ import annotations

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Every setting can be overridden with a ``MODEL_SCOUT_`` prefixed
    environment variable or an entry in ``.env``.
    """

    model_config = SettingsConfigDict(
        env_prefix="MODEL_SCOUT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Upstream catalog
    catalog_url: str = "https://models.dev/api.json"
    refresh_interval: float = 60 * 60 * 24  # Seconds a snapshot is reused
    request_timeout: float = 30.0

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8002

    # Search
    default_page_size: int = 25
    max_page_size: int = 50
    default_sort: str = "best"

    # Alternatives
    default_alternatives_limit: int = 6
    max_alternatives_limit: int = 20
    alternatives_cache_ttl: float = 60 * 30  # Seconds
    alternatives_cache_size: int = 500

    # Protects GET /warm when set
    warm_secret: SecretStr | None = None

    # Logging
    log_json: bool = True
    log_level: str = "INFO"


# Global settings instance
settings = Settings()
