"""
Configuration management for the weather exporter.

Values come from ``WEATHER_EXPORTER_*`` environment variables or a ``.env``
file.  ``locations`` is a JSON list, e.g.::

    WEATHER_EXPORTER_LOCATIONS='[{"id": "ber", "name": "Berlin", "latitude": 52.52, "longitude": 13.41}]'
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from weather_exporter.datasources.weather.client import OPEN_METEO_API
from weather_exporter.schemas import Location

DEFAULT_LOCATIONS = [
    Location(id="berlin", name="Berlin", latitude=52.52, longitude=13.41, country="DE"),
]


class Settings(BaseSettings):
    """Runtime settings for the exporter."""

    model_config = SettingsConfigDict(
        env_prefix="WEATHER_EXPORTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "weather-exporter"
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Polling
    poll_interval: float = Field(default=5.0, gt=0, description="Seconds between cycles")
    api_base_url: str = OPEN_METEO_API
    request_timeout: float = 30.0

    # Metrics endpoint
    metrics_port: int = 2112

    # Location catalog: PostgreSQL when set, otherwise ``locations``
    database_url: str | None = None
    locations: list[Location] = Field(default_factory=lambda: list(DEFAULT_LOCATIONS))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get or create the process-wide settings instance."""
    return Settings()
