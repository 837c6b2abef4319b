"""Weather Exporter - Open-Meteo current weather as Prometheus gauges.

Architecture::

    datasources/   Location catalog (static / PostgreSQL) and the Open-Meteo client
    poller.py      Polling workflow (fan-out per location, join, publish, sleep)
    metrics.py     Metrics sink (gauges on a private CollectorRegistry)
    flows/         Prefect orchestration (one-shot poll cycle)
    services/      Shared utilities (HTTP session with default timeout)

Data flow: location source → weather client (one fetch per location) → metrics sink → /metrics
"""

__version__ = "0.1.0"

from weather_exporter.config import Settings
from weather_exporter.schemas import Location, WeatherReading

__all__ = ["Location", "Settings", "WeatherReading", "__version__"]
