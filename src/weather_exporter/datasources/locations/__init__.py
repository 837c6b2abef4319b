"""Location catalog data source.

Supplies the set of locations polled each cycle.

Public API:
  - source: LocationSource, LocationSourceError, StaticLocationSource,
    location_source_from_settings
  - postgres: PostgresLocationSource (``cities`` table)
"""

from weather_exporter.datasources.locations.postgres import PostgresLocationSource
from weather_exporter.datasources.locations.source import (
    LocationSource,
    LocationSourceError,
    StaticLocationSource,
    location_source_from_settings,
)

__all__ = [
    "LocationSource",
    "LocationSourceError",
    "PostgresLocationSource",
    "StaticLocationSource",
    "location_source_from_settings",
]
