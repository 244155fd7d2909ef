"""
Hourly chart series from NWS raw grid data.

Grid data values are ISO-8601 intervals::

    {"validTime": "2024-03-04T18:00:00+00:00/PT2H", "value": 10}

Each sample becomes ``HourlySample(timestamp=<interval start>, value=...)``.
Wind speed is converted to mph (knots unless the series says otherwise),
temperature to °F; sky cover and precipitation chance are percentages and
pass through unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING

from balmy import units
from balmy.datasources.nws import client
from balmy.datasources.nws.models import (
    DailyForecast,
    HourlyForecast,
    HourlySample,
    HourlySeries,
    SeriesId,
)
from balmy.schemas import GridDocument, GridProperties, GridSeries, Measurement, parse_payload
from balmy.services.http import fetch_json

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    import requests

logger = logging.getLogger(__name__)


def parse_valid_time(valid_time: str) -> datetime:
    """Start of an ISO-8601 ``<start>/<duration>`` interval."""
    return datetime.fromisoformat(valid_time.split("/", 1)[0])


def _wind_mph(value: int | float | None, uom: str | None) -> int | None:
    return units.speed_mph(Measurement(value=value, unit_code=uom), default_unit=units.KNOT)


def _temperature_f(value: int | float | None, uom: str | None) -> int | None:
    return units.temperature_f(Measurement(value=value, unit_code=uom))


def _unchanged(value: int | float | None, _uom: str | None) -> int | float | None:
    return value


def convert_series(
    series_id: SeriesId,
    raw: GridSeries,
    convert: Callable[[int | float | None, str | None], int | float | None] = _unchanged,
) -> HourlySeries:
    """Timestamp and convert every sample of one grid series, keeping order."""
    return HourlySeries(
        id=series_id,
        data=[
            HourlySample(timestamp=parse_valid_time(v.valid_time), value=convert(v.value, raw.uom))
            for v in raw.values
        ],
    )


def build_hourly_series(grid: GridProperties) -> HourlyForecast:
    """Assemble the four named hourly series from grid data."""
    return HourlyForecast(
        wind_speed=convert_series(SeriesId.WIND_SPEED, grid.wind_speed, _wind_mph),
        temperature=convert_series(SeriesId.TEMPERATURE, grid.temperature, _temperature_f),
        sky_cover=convert_series(SeriesId.SKY_COVER, grid.sky_cover),
        probability_of_precipitation=convert_series(
            SeriesId.PROBABILITY_OF_PRECIPITATION, grid.probability_of_precipitation
        ),
    )


def fetch_hourly_series(grid_url: str, http: requests.Session | None = None) -> HourlyForecast:
    """
    Fetch raw grid data and build the hourly series.

    Raises:
        RemoteFetchError: If the grid data cannot be fetched or parsed.
    """
    url = client.hourly_url(grid_url)
    doc = parse_payload(GridDocument, fetch_json(url, http), url)
    hourly = build_hourly_series(doc.properties)
    logger.info("Built hourly series with %d temperature samples", len(hourly.temperature.data))
    return hourly


def attach_hourly_temperature(
    days: Sequence[DailyForecast], temperature: HourlySeries
) -> list[DailyForecast]:
    """
    Give each day the temperature samples that fall on its calendar date.

    The date is taken in the day's own UTC offset (from its ``start_time``),
    so late-evening samples stay on the right day. Both timestamps are
    offset-aware: ``balmy.schemas`` rejects period and grid times without one.
    """
    result: list[DailyForecast] = []
    for day in days:
        start = datetime.fromisoformat(day.start_time)
        samples = [
            s
            for s in temperature.data
            if s.timestamp.astimezone(start.tzinfo).date() == start.date()
        ]
        result.append(replace(day, hourly_temperature=samples))
    return result
