"""
Application configuration using Pydantic Settings
"""
from functools import lru_cache
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables
    """
    # Database (host-side task storage)
    DATABASE_URL: str = "sqlite:///./recurrence.db"

    # Calendar
    TIMEZONE: str = "UTC"  # zone that defines "today" and local midnight
    DATE_FORMAT: str = "%m/%d/%Y"  # strftime pattern for verbose summaries

    DEBUG: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    def get_tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.TIMEZONE)


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings instance (singleton)
    """
    return Settings()
