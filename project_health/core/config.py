"""
Application configuration using Pydantic Settings.

Environment-based infrastructure switching is controlled by the ENVIRONMENT variable.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Environment
    # ===========================================
    ENVIRONMENT: Literal["local", "test"] = "local"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # ===========================================
    # Database
    # ===========================================
    DATABASE_URL: str = "sqlite+aiosqlite:///./project_health.db"

    # ===========================================
    # Calendar
    # ===========================================
    # IANA timezone used to decide what "today" is for recalculation
    TIMEZONE: str = "UTC"

    # ===========================================
    # Scheduler (daily recalculation)
    # ===========================================
    # Remaining-day counts change every day even when nothing is edited,
    # so cached health/duration values are refreshed once per day.
    RECALCULATION_ENABLED: bool = True
    RECALCULATION_HOUR: int = Field(default=0, ge=0, le=23)
    RECALCULATION_MINUTE: int = Field(default=15, ge=0, le=59)

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"]
    )

    @property
    def is_test(self) -> bool:
        """Check if running in the test environment."""
        return self.ENVIRONMENT == "test"

    @property
    def is_local(self) -> bool:
        """Check if running in local environment."""
        return self.ENVIRONMENT == "local"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
