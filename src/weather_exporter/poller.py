"""
Polling workflow: resolve locations, fetch all concurrently, publish, sleep.

One cycle::

    source.get_all_locations()          # failure → skip the cycle, write nothing
      └─ fan out: one thread per location → client.fetch(location)
      └─ join: wait for every fetch (success or failure)
    publish successes to the sink        # failures leave prior values standing
    set api_up (any location succeeded)
    wait ``interval`` (interruptible by stop())

Cycle N+1 never starts fetching before every fetch of cycle N has returned, so
a slow stale fetch can never overwrite a fresher value.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from weather_exporter.datasources.locations import location_source_from_settings
from weather_exporter.datasources.weather import Success, TransportFailure, WeatherClient
from weather_exporter.services.http import create_session

if TYPE_CHECKING:
    from weather_exporter.config import Settings
    from weather_exporter.datasources.locations import LocationSource
    from weather_exporter.datasources.weather import FetchOutcome
    from weather_exporter.metrics import MetricsSink
    from weather_exporter.schemas import Location

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 5.0  # seconds


@dataclass
class CycleSummary:
    """Per-location outcomes of one cycle."""

    outcomes: list[tuple[Location, FetchOutcome]] = field(default_factory=list)
    skipped: bool = False  # location source failed, nothing was fetched

    @property
    def attempted(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> list[Location]:
        return [loc for loc, outcome in self.outcomes if outcome.ok]

    @property
    def failed(self) -> list[Location]:
        return [loc for loc, outcome in self.outcomes if not outcome.ok]

    @property
    def api_up(self) -> bool | None:
        """Any-succeeded rule; None when nothing was fetched."""
        if not self.outcomes:
            return None
        return bool(self.succeeded)

    def as_dict(self) -> dict[str, object]:
        return {
            "skipped": self.skipped,
            "attempted": self.attempted,
            "succeeded": [loc.name for loc in self.succeeded],
            "failed": [loc.name for loc in self.failed],
            "api_up": self.api_up,
        }


class PollingWorkflow:
    """Drives the fetch-publish cycle on a fixed interval until stopped."""

    def __init__(
        self,
        source: LocationSource,
        client: WeatherClient,
        sink: MetricsSink,
        interval: float = DEFAULT_INTERVAL,
    ) -> None:
        self.source = source
        self.client = client
        self.sink = sink
        self.interval = interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @classmethod
    def from_settings(cls, settings: Settings, sink: MetricsSink) -> PollingWorkflow:
        """Wire the location source and weather client described by ``settings``."""
        client = WeatherClient(
            settings.api_base_url, session=create_session(timeout=settings.request_timeout)
        )
        return cls(
            location_source_from_settings(settings),
            client,
            sink,
            interval=settings.poll_interval,
        )

    # ------------------------------------------------------------------
    # One cycle
    # ------------------------------------------------------------------

    def run_cycle(self) -> CycleSummary:
        """Run one resolve → fetch → publish pass and report what happened."""
        try:
            locations = self.source.get_all_locations()
        except Exception:
            logger.exception("failed to fetch locations, skipping cycle")
            return CycleSummary(skipped=True)

        summary = CycleSummary(outcomes=self._fetch_all(locations))

        for location, outcome in summary.outcomes:
            if isinstance(outcome, Success):
                self.sink.set_temperature(location.name, outcome.reading.temperature)
                self.sink.set_windspeed(location.name, outcome.reading.windspeed)
            else:
                logger.warning("weather fetch failed for %s: %s", location.name, outcome)

        if summary.api_up is not None:
            self.sink.set_api_up(summary.api_up)

        logger.info(
            "poll cycle complete: %d locations, %d ok, %d failed",
            summary.attempted,
            len(summary.succeeded),
            len(summary.failed),
        )
        return summary

    def _fetch_all(self, locations: list[Location]) -> list[tuple[Location, FetchOutcome]]:
        """Fetch every location concurrently and wait for all of them."""
        if not locations:
            return []

        with ThreadPoolExecutor(
            max_workers=len(locations), thread_name_prefix="weather-fetch"
        ) as pool:
            futures = [pool.submit(self.client.fetch, loc) for loc in locations]
            wait(futures)

        results: list[tuple[Location, FetchOutcome]] = []
        for location, future in zip(locations, futures, strict=True):
            exc = future.exception()
            if exc is not None:
                # client bug rather than a provider failure; still one outcome per location
                logger.error("unexpected error fetching %s", location.name, exc_info=exc)
                results.append((location, TransportFailure(exc)))
            else:
                results.append((location, future.result()))
        return results

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    def run_forever(self) -> None:
        """Repeat cycles every ``interval`` seconds until :meth:`stop` is called."""
        logger.info("weather metrics workflow started (interval=%ss)", self.interval)
        while not self._stop.is_set():
            try:
                self.run_cycle()
            except Exception:
                logger.exception("poll cycle crashed, continuing")
            self._stop.wait(self.interval)
        logger.info("weather metrics workflow stopped")

    def start(self) -> threading.Thread:
        """Run :meth:`run_forever` on a background daemon thread."""
        if self._thread is not None and self._thread.is_alive():
            return self._thread
        self._stop.clear()
        self._thread = threading.Thread(
            target=self.run_forever, name="weather-poller", daemon=True
        )
        self._thread.start()
        return self._thread

    def stop(self, timeout: float | None = None) -> None:
        """Signal the loop to exit and wait for the background thread."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()
