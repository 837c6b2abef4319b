"""
Metrics sink: the gauges scraped from ``/metrics``.

Each sink owns its own ``CollectorRegistry`` instead of registering into the
process-wide default, so several sinks (e.g. one per test) can coexist.

Gauges hold the last value written per label and keep no history.  Writes from
concurrent fetch threads are safe: every (metric, city) cell is updated under
prometheus_client's per-value lock.
"""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Gauge, generate_latest, start_http_server

LOCATION_LABEL = "city"

TEMPERATURE_METRIC = "weather_temperature_celsius"
WINDSPEED_METRIC = "weather_windspeed_kmh"
API_UP_METRIC = "weather_api_up"


class MetricsSink:
    """Gauge cells keyed by metric name and location label."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry if registry is not None else CollectorRegistry()
        self.temperature = Gauge(
            TEMPERATURE_METRIC,
            "Current temperature in Celsius",
            [LOCATION_LABEL],
            registry=self.registry,
        )
        self.windspeed = Gauge(
            WINDSPEED_METRIC,
            "Current wind speed in km/h",
            [LOCATION_LABEL],
            registry=self.registry,
        )
        self.api_up = Gauge(
            API_UP_METRIC,
            "API status (1 = up, 0 = down)",
            registry=self.registry,
        )

    def set_temperature(self, location: str, value: float) -> None:
        self.temperature.labels(location).set(value)

    def set_windspeed(self, location: str, value: float) -> None:
        self.windspeed.labels(location).set(value)

    def set_api_up(self, up: bool) -> None:
        self.api_up.set(1 if up else 0)

    def value(self, metric: str, location: str | None = None) -> float | None:
        """Current value of one cell, or None if it was never written."""
        labels = {LOCATION_LABEL: location} if location is not None else None
        return self.registry.get_sample_value(metric, labels)

    def render(self) -> bytes:
        """Prometheus text exposition of the current state."""
        return generate_latest(self.registry)

    def serve(self, port: int, addr: str = "0.0.0.0") -> None:  # noqa: S104
        """Expose the registry on ``http://{addr}:{port}/metrics`` in a daemon thread."""
        start_http_server(port, addr=addr, registry=self.registry)
