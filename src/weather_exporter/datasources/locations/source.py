"""Location source contract and the settings-backed implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable

    from weather_exporter.config import Settings
    from weather_exporter.schemas import Location


class LocationSourceError(RuntimeError):
    """Raised when the current location set cannot be retrieved."""


class LocationSource(Protocol):
    """Anything that can list the locations to poll."""

    def get_all_locations(self) -> list[Location]:
        """Return the current location set, or raise ``LocationSourceError``."""
        ...


class StaticLocationSource:
    """A fixed list of locations, typically from settings."""

    def __init__(self, locations: Iterable[Location]) -> None:
        self._locations = list(locations)

    def get_all_locations(self) -> list[Location]:
        return list(self._locations)


def location_source_from_settings(settings: Settings) -> LocationSource:
    """PostgreSQL catalog when ``database_url`` is set, static list otherwise."""
    if settings.database_url:
        from weather_exporter.datasources.locations.postgres import PostgresLocationSource

        return PostgresLocationSource(settings.database_url)
    return StaticLocationSource(settings.locations)
