"""Open-Meteo current weather client.

API docs: https://open-meteo.com/en/docs (``current_weather=true``)

One call per location, no retries and no caching.  Every failure mode is
returned as a :data:`FetchOutcome` variant instead of being raised.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import TYPE_CHECKING, Any

import requests

from weather_exporter.datasources.weather.models import (
    DecodeFailure,
    FetchOutcome,
    HTTPStatusFailure,
    Success,
    TransportFailure,
)
from weather_exporter.schemas import WeatherResponse
from weather_exporter.services.http import session as default_session

if TYPE_CHECKING:
    from weather_exporter.schemas import Location

logger = logging.getLogger(__name__)

OPEN_METEO_API = "https://api.open-meteo.com/v1/forecast"


def build_params(location: Location) -> dict[str, str | float]:
    """Query parameters for a current-weather request at ``location``."""
    return {
        "latitude": location.latitude,
        "longitude": location.longitude,
        "current_weather": "true",
    }


class WeatherClient:
    """Fetches current weather for one location at a time."""

    def __init__(
        self,
        base_url: str = OPEN_METEO_API,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url
        self.session = session if session is not None else default_session

    def fetch(self, location: Location) -> FetchOutcome:
        """
        Fetch and decode current weather for ``location``.

        Returns:
            ``Success`` with the decoded reading, or the failure variant
            describing why no reading is available.
        """
        try:
            resp = self.session.get(self.base_url, params=build_params(location))
        except requests.RequestException as exc:
            return TransportFailure(exc)

        try:
            if resp.status_code != HTTPStatus.OK:
                return HTTPStatusFailure(resp.status_code)

            try:
                data: Any = resp.json()
                # pydantic.ValidationError is a ValueError too
                payload = WeatherResponse.model_validate(data)
            except ValueError as exc:
                return DecodeFailure(exc)
        finally:
            resp.close()

        logger.debug("decoded weather for %s: %s", location.name, payload.current_weather)
        return Success(payload.current_weather)


def fetch_current_weather(location: Location, base_url: str = OPEN_METEO_API) -> FetchOutcome:
    """Fetch current weather for ``location`` using the shared session."""
    return WeatherClient(base_url).fetch(location)
