"""Open-Meteo current weather data source.

Fetches current conditions (temperature, wind, day/night, weather code) for a
single location from Open-Meteo (free, no API key).

Public API:
  - client: WeatherClient, fetch_current_weather, OPEN_METEO_API
  - models: FetchOutcome and its variants
"""

from weather_exporter.datasources.weather.client import (
    OPEN_METEO_API,
    WeatherClient,
    fetch_current_weather,
)
from weather_exporter.datasources.weather.models import (
    DecodeFailure,
    FetchOutcome,
    HTTPStatusFailure,
    Success,
    TransportFailure,
)

__all__ = [
    "OPEN_METEO_API",
    "DecodeFailure",
    "FetchOutcome",
    "HTTPStatusFailure",
    "Success",
    "TransportFailure",
    "WeatherClient",
    "fetch_current_weather",
]
