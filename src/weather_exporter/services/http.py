"""
Shared HTTP client for the Open-Meteo fetches.

Provides a pre-configured ``requests.Session`` with a User-Agent and a default
timeout.  Transport retries are disabled: every fetch is a single attempt and
the next poll cycle is the only retry mechanism.

Usage::

    from weather_exporter.services.http import session

    resp = session.get("https://api.open-meteo.com/v1/forecast", params={...})
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

#: Single attempt, no backoff; non-2xx statuses are returned as-is.
NO_RETRY = Retry(total=0, raise_on_status=False)

DEFAULT_TIMEOUT = 30  # seconds

USER_AGENT = "weather-exporter/0.1"


def create_session(timeout: float = DEFAULT_TIMEOUT) -> requests.Session:
    """
    Build a ``requests.Session`` with a retry-free adapter mounted.

    Args:
        timeout: Default timeout applied to every request.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=NO_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = USER_AGENT

    # Every request gets a timeout so a hung provider cannot hold a poll cycle open.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s


#: Module-level session, import and use directly.
session: requests.Session = create_session()
