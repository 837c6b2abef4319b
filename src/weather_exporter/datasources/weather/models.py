"""Fetch outcome types.

A fetch never raises: it returns exactly one of these variants and the caller
decides what to do with it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from weather_exporter.schemas import WeatherReading


@dataclass(frozen=True)
class Success:
    """The payload decoded into a full reading."""

    reading: WeatherReading

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class TransportFailure:
    """The request never produced a response (DNS, connect, timeout, ...)."""

    cause: BaseException

    @property
    def ok(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"transport error: {self.cause}"


@dataclass(frozen=True)
class HTTPStatusFailure:
    """The provider answered with a status other than 200."""

    status_code: int

    @property
    def ok(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"non-200 response: {self.status_code}"


@dataclass(frozen=True)
class DecodeFailure:
    """The body was not JSON or did not match the expected schema."""

    cause: BaseException

    @property
    def ok(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"decode failed: {self.cause}"


FetchOutcome = Success | TransportFailure | HTTPStatusFailure | DecodeFailure
