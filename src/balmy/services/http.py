"""
Shared HTTP client with automatic retry and backoff.

Provides a pre-configured ``requests.Session`` that retries on transient
network errors (timeouts, connection resets, 429/502/503/504) with exponential
backoff, plus ``fetch_json`` which turns every transport, status or decoding
failure into a single ``RemoteFetchError``.

The NWS API rejects requests without a ``User-Agent``, so one is always set.

Usage::

    from balmy.services.http import fetch_json

    doc = fetch_json("https://api.weather.gov/points/44.9475,-93.2054")
"""

from __future__ import annotations

import logging
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from balmy.config import get_settings
from balmy.errors import RemoteFetchError

logger = logging.getLogger(__name__)

#: Default retry strategy for the transient errors api.weather.gov produces.
DEFAULT_RETRY = Retry(
    total=4,
    backoff_factor=2,  # 0s, 2s, 4s, 8s between retries
    status_forcelist=[429, 502, 503, 504],
    allowed_methods=["GET", "HEAD", "OPTIONS"],
    raise_on_status=False,  # let resp.raise_for_status() handle it
)

DEFAULT_TIMEOUT = 30  # seconds

DEFAULT_USER_AGENT = "balmy/0.1 (https://github.com/balmy-weather/balmy)"


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
) -> requests.Session:
    """
    Build a ``requests.Session`` with retry adapter mounted.

    Args:
        retry: Custom retry strategy (defaults to ``DEFAULT_RETRY``).
        timeout: Default timeout applied to every request.
        user_agent: Value of the ``User-Agent`` header.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or DEFAULT_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = user_agent
    s.headers["Accept"] = "application/geo+json"

    # Inject a default timeout so callers don't need to pass ``timeout=``.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s


#: Module-level session, import and use directly.
session: requests.Session = create_session(
    timeout=get_settings().http_timeout,
    user_agent=get_settings().user_agent,
)


def fetch_json(url: str, http: requests.Session | None = None) -> dict[str, Any]:
    """
    GET ``url`` and decode the body as a JSON object.

    Args:
        url: Absolute resource URL.
        http: Session to use (defaults to the module-level ``session``).

    Returns:
        Decoded JSON document.

    Raises:
        RemoteFetchError: On network failure, non-2xx status, or a body that
            is not a JSON object.
    """
    http = http or session
    logger.debug("GET %s", url)
    try:
        resp = http.get(url)
        resp.raise_for_status()
    except requests.HTTPError as exc:
        status = exc.response.status_code if exc.response is not None else "?"
        logger.error("Request to %s failed with status %s", url, status)
        raise RemoteFetchError(f"HTTP {status} from {url}", url=url) from exc
    except requests.RequestException as exc:
        logger.error("Request to %s failed: %s", url, exc)
        raise RemoteFetchError(f"Request to {url} failed: {exc}", url=url) from exc

    try:
        doc = resp.json()
    except ValueError as exc:
        logger.error("Response from %s is not JSON", url)
        raise RemoteFetchError(f"Non-JSON response from {url}", url=url) from exc

    if not isinstance(doc, dict):
        raise RemoteFetchError(f"Expected a JSON object from {url}", url=url)
    return doc
