"""National Weather Service API URLs.

API docs: https://www.weather.gov/documentation/services-web-api

Resources used:
  - /points/{lat},{lon}                      grid + observation station links
  - /stations/{id}                           station metadata
  - /stations/{id}/observations/latest       current conditions
  - /gridpoints/{wfo}/{x},{y}/forecast       12-hour period forecast (``forecast`` link)
  - /gridpoints/{wfo}/{x},{y}                raw hourly grid data
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from balmy.config import get_settings

if TYPE_CHECKING:
    from balmy.datasources.nws.models import Coordinate


def api_base() -> str:
    """Configured API root, without trailing slash."""
    return get_settings().api_base_url.rstrip("/")


def points_url(coordinate: Coordinate) -> str:
    """Point metadata URL. NWS wants at most four decimal places."""
    return f"{api_base()}/points/{round(coordinate.lat, 4)},{round(coordinate.lon, 4)}"


def station_url(station_id: str) -> str:
    return f"{api_base()}/stations/{station_id}"


def latest_observation_url(station_id: str) -> str:
    return f"{station_url(station_id)}/observations/latest"


def hourly_url(grid_url: str) -> str:
    """Raw grid data holds the hourly series."""
    return grid_url.rstrip("/")
