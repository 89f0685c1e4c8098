"""
Timeplanner Configuration Management

Uses Pydantic Settings for type-safe configuration from environment variables.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    # =========================================================================
    # APPLICATION
    # =========================================================================
    APP_NAME: str = "Timeplanner"
    APP_ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "info"
    VERSION: str = "0.1.0"

    # =========================================================================
    # API SERVER
    # =========================================================================
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    CORS_ORIGINS: str = "http://localhost:3000"

    # =========================================================================
    # SCHEDULING ENGINE BOUNDS
    # =========================================================================
    # Upper bound on anchors produced for one recurring milestone
    RECURRENCE_MAX_OCCURRENCES: int = Field(120, ge=2)
    # Horizon used to expand recurrences of continuous (open-ended) projects
    CONTINUOUS_HORIZON_DAYS: int = Field(365, gt=0)
    # Attempts per direction when searching for a free timeline slot
    SLOT_SEARCH_MAX_ATTEMPTS: int = Field(365, gt=0)

    # =========================================================================
    # OBSERVABILITY
    # =========================================================================
    METRICS_ENABLED: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Singleton instance for easy import
settings = get_settings()
