"""PostgreSQL-backed location catalog.

Reads the ``cities`` table::

    CREATE TABLE cities (
        euid       UUID PRIMARY KEY,
        city_name  TEXT NOT NULL,
        country    TEXT,
        latitude   DOUBLE PRECISION NOT NULL,
        longitude  DOUBLE PRECISION NOT NULL
    );
"""

from __future__ import annotations

import logging

import psycopg2
from psycopg2.extras import RealDictCursor
from pydantic import ValidationError

from weather_exporter.datasources.locations.source import LocationSourceError
from weather_exporter.schemas import Location

logger = logging.getLogger(__name__)

SELECT_CITIES = "SELECT euid, city_name, country, latitude, longitude FROM cities"


class PostgresLocationSource:
    """Lists locations from the ``cities`` table on every call."""

    def __init__(self, dsn: str):
        """
        Initialize the source.

        Args:
            dsn: PostgreSQL connection string
        """
        self.dsn = dsn

    def get_all_locations(self) -> list[Location]:
        """
        Query all cities.

        Returns:
            Valid locations in table order; invalid rows are logged and skipped

        Raises:
            LocationSourceError: connection or query failed
        """
        try:
            conn = psycopg2.connect(self.dsn)
        except psycopg2.Error as exc:
            raise LocationSourceError(f"cannot connect to location catalog: {exc}") from exc

        try:
            with conn, conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute(SELECT_CITIES)
                rows = cur.fetchall()
        except psycopg2.Error as exc:
            raise LocationSourceError(f"failed to query cities: {exc}") from exc
        finally:
            conn.close()

        # A bad row only drops that city; the rest of the catalog is still polled
        locations: list[Location] = []
        for row in rows:
            try:
                locations.append(
                    Location(
                        id=str(row["euid"]),
                        name=row["city_name"],
                        country=row["country"],
                        latitude=row["latitude"],
                        longitude=row["longitude"],
                    )
                )
            except ValidationError as exc:
                logger.warning("skipping invalid city row euid=%s: %s", row.get("euid"), exc)

        logger.debug("loaded %d cities from catalog", len(locations))
        return locations
