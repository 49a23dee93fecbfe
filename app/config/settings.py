"""
Centralized configuration using Pydantic BaseSettings.
All environment variables are loaded here - no hardcoded values.
"""
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Personal Content Feed"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Feed defaults (used when a user has no stored preferences)
    DEFAULT_BACKLOG_RATIO: float = 0.3
    DEFAULT_MAX_CONSECUTIVE_FROM_SOURCE: int = 3

    # Feed generation
    MAX_ITEMS_IN_FEED: int = 200
    RECENT_WINDOW_DAYS: int = 7
    NOT_NOW_RETURN_FRACTION: float = 0.2  # Max share of feed given to "not now" items

    # Cache TTLs (seconds)
    FEED_CACHE_TTL_SEC: int = 300  # 5 minutes

    # Telemetry
    ENABLE_OTEL: bool = False  # Default to False to prevent gRPC errors in dev
    ENABLE_PROMETHEUS: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance - singleton pattern."""
    return Settings()
