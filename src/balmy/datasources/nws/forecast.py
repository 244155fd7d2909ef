"""
Daily forecast from the NWS 12-hour period forecast.

The period forecast alternates day and night periods (``Today``, ``Tonight``,
``Monday``, ``Monday Night``, ...). This module turns it into one entry per
day:

1. Each period gets a temperature band: min/max over itself and its direct
   neighbours (the night low next to a day high, and vice versa).
2. The period icon is resolved; the first condition's percent becomes
   ``precip``.
3. Each daytime period is paired with its night by name.
4. Only daytime periods are kept, in their original order.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import TYPE_CHECKING

from balmy.datasources.nws.icons import DEFAULT_ICON_TABLE, IconTable, primary_icon
from balmy.datasources.nws.models import DailyForecast, ForecastPeriod
from balmy.schemas import ForecastDocument, parse_payload
from balmy.services.http import fetch_json

if TYPE_CHECKING:
    from collections.abc import Sequence

    import requests

    from balmy.schemas import RawForecastPeriod

logger = logging.getLogger(__name__)

SHORT_FORECAST_SEPARATOR = " then "
NEIGHBOR_RADIUS = 1


def temperature_window(temps: Sequence[int | float], index: int) -> list[int | float]:
    """Temperatures within ``NEIGHBOR_RADIUS`` of ``index`` that exist."""
    start = max(0, index - NEIGHBOR_RADIUS)
    return list(temps[start : index + NEIGHBOR_RADIUS + 1])


def augment_periods(
    periods: Sequence[RawForecastPeriod], icons: IconTable = DEFAULT_ICON_TABLE
) -> list[ForecastPeriod]:
    """Add min/max temperature, precip chance and resolved icon to each period."""
    temps = [p.temperature for p in periods]
    augmented: list[ForecastPeriod] = []
    for i, period in enumerate(periods):
        window = temperature_window(temps, i)
        icon = primary_icon(period.icon, icons)
        augmented.append(
            ForecastPeriod(
                number=period.number,
                name=period.name,
                start_time=period.start_time,
                end_time=period.end_time,
                is_daytime=period.is_daytime,
                temperature=period.temperature,
                temperature_unit=period.temperature_unit,
                wind_speed=period.wind_speed,
                wind_direction=period.wind_direction,
                short_forecast=period.short_forecast,
                detailed_forecast=period.detailed_forecast,
                icon=icon.icon if icon else period.icon,
                min_temp=min(window),
                max_temp=max(window),
                precip=icon.percent if icon else None,
            )
        )
    return augmented


def is_night_of(day: ForecastPeriod, candidate: ForecastPeriod) -> bool:
    """``Monday`` pairs with ``Monday Night``; ``Today`` pairs with ``Tonight``."""
    if candidate.name == f"{day.name} Night":
        return True
    return day.name == "Today" and candidate.name == "Tonight"


def find_night(day: ForecastPeriod, periods: Sequence[ForecastPeriod]) -> ForecastPeriod | None:
    """First period that is ``day``'s night, if any."""
    return next((p for p in periods if is_night_of(day, p)), None)


def truncate_short_forecast(text: str) -> str:
    """Keep the text before the first ``" then "``."""
    return text.split(SHORT_FORECAST_SEPARATOR, 1)[0]


def build_daily_forecast(
    periods: Sequence[RawForecastPeriod], icons: IconTable = DEFAULT_ICON_TABLE
) -> list[DailyForecast]:
    """
    Build the day-by-day forecast from raw periods.

    Args:
        periods: Raw periods in API order.
        icons: Icon table used to resolve period icons.

    Returns:
        One DailyForecast per daytime period, in original order, each with
        its night attached when one is present.
    """
    augmented = augment_periods(periods, icons)
    days: list[DailyForecast] = []
    for period in augmented:
        if not period.is_daytime:
            continue
        fields = asdict(period)
        fields["short_forecast"] = truncate_short_forecast(period.short_forecast)
        days.append(DailyForecast(**fields, night=find_night(period, augmented)))
    return days


def fetch_daily_forecast(
    forecast_url: str,
    icons: IconTable = DEFAULT_ICON_TABLE,
    http: requests.Session | None = None,
) -> list[DailyForecast]:
    """
    Fetch the period forecast and build the daily forecast.

    Args:
        forecast_url: The point's ``forecast`` link.
        icons: Icon table used to resolve period icons.
        http: Session override (tests).

    Raises:
        RemoteFetchError: If the forecast cannot be fetched or parsed.
    """
    doc = parse_payload(ForecastDocument, fetch_json(forecast_url, http), forecast_url)
    days = build_daily_forecast(doc.properties.periods, icons)
    logger.info("Built %d daily forecasts from %d periods", len(days), len(doc.properties.periods))
    return days
