"""
Application settings.

Values come from environment variables prefixed with ``BALMY_`` (or a local
``.env`` file). The defaults point at Minneapolis, MN.

Usage::

    from balmy.config import get_settings

    settings = get_settings()
    print(settings.lat, settings.lon)
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="BALMY_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "balmy"
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Reference location
    lat: float = Field(default=44.9475, ge=-90, le=90)
    lon: float = Field(default=-93.2054, ge=-180, le=180)

    # NWS API
    api_base_url: str = "https://api.weather.gov"
    user_agent: str = "balmy/0.1 (https://github.com/balmy-weather/balmy)"
    http_timeout: float = 30.0

    # Refresh scheduling
    refresh_threshold_minutes: float = 5.0
    refresh_interval_seconds: float = 60.0


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings (read once)."""
    return Settings()
