"""
Domain models for the weather exporter.

Pydantic models for the locations we poll and the Open-Meteo payload we decode.
These define the canonical schema - the client normalizes API responses to these.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

# =============================================================================
# Locations
# =============================================================================


class Location(BaseModel):
    """A geographic point to poll, labelled by its display name."""

    model_config = {"frozen": True}

    id: str = Field(..., description="Opaque unique key")
    name: str = Field(..., description="Display name, used as the metric label")
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    country: str | None = None


# =============================================================================
# Weather
# =============================================================================


class WeatherReading(BaseModel):
    """Current conditions for one location.

    Numbers must arrive as JSON numbers; quoted numbers are a decode error.
    Fields that are missing or ``null`` take their zero value.
    """

    temperature: float = Field(default=0.0, strict=True)  # °C
    windspeed: float = Field(default=0.0, strict=True)  # km/h
    winddirection: float = Field(default=0.0, strict=True)  # degrees
    is_day: bool = Field(default=False, strict=True)
    weathercode: int = Field(default=0, strict=True)  # WMO weather interpretation code

    @field_validator("temperature", "windspeed", "winddirection", "weathercode", mode="before")
    @classmethod
    def _null_is_zero(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("is_day", mode="before")
    @classmethod
    def _is_day_flag(cls, value: Any) -> Any:
        # Open-Meteo sends 0/1; any non-zero integer means daytime
        if value is None:
            return False
        if isinstance(value, int) and not isinstance(value, bool):
            return value != 0
        return value


class WeatherResponse(BaseModel):
    """Subset of the Open-Meteo forecast response with ``current_weather=true``."""

    current_weather: WeatherReading = Field(default_factory=WeatherReading)
