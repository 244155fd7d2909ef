"""Derived weather records, ready for rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from balmy.schemas import Measurement


@dataclass(frozen=True)
class Coordinate:
    """A geographic point in degrees. Stored lon-first, like GeoJSON."""

    lon: float
    lat: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.lon, self.lat)


# =============================================================================
# Icons
# =============================================================================


@dataclass(frozen=True)
class ParsedIcon:
    """One condition decoded from an NWS icon reference.

    ``percent`` is only ever the probability encoded in the reference.
    ``canonical_percent`` is the icon table's nominal chance for the code.
    """

    code: str
    percent: int | None
    icon: str
    time_of_day: str | None = None
    canonical_percent: int | None = None


# =============================================================================
# Location
# =============================================================================


@dataclass(frozen=True)
class StationRef:
    """An observation station as listed for a point."""

    id: str
    name: str | None
    coordinate: Coordinate


@dataclass(frozen=True)
class Location:
    """Resources resolved for a coordinate: grid, period forecast and nearest station."""

    grid_url: str
    forecast_url: str
    station: StationRef


@dataclass(frozen=True)
class StationInfo:
    """Station metadata plus distance (m) and bearing (deg) from the reference point."""

    id: str
    name: str | None
    coordinate: Coordinate
    time_zone: str | None
    elevation: Measurement
    distance: float
    bearing: float


# =============================================================================
# Current conditions
# =============================================================================


@dataclass(frozen=True)
class CurrentConditions:
    """Latest observation. Measurements are passed through exactly as reported."""

    timestamp: str | None
    description: str | None
    icon: str | None
    temperature: Measurement
    dewpoint: Measurement
    relative_humidity: Measurement
    barometric_pressure: Measurement
    visibility: Measurement
    wind_speed: Measurement
    wind_gust: Measurement
    wind_direction: Measurement
    wind_chill: Measurement
    heat_index: Measurement
    feels_like: Measurement | None


@dataclass(frozen=True)
class CurrentSummary:
    """Display values for current conditions. None means "don't show it"."""

    temperature_f: int | None
    feels_like_f: int | None
    wind_mph: int | None
    wind_gust_mph: int | None
    wind_cardinal: str | None
    wind_arrow_rotation: float | None
    humidity_pct: int | None
    dewpoint_f: int | None
    visibility_mi: int | None
    pressure_mb: int | None


# =============================================================================
# Period forecast
# =============================================================================


@dataclass(frozen=True)
class ForecastPeriod:
    """A named forecast period with derived temperature band and icon."""

    number: int
    name: str
    start_time: str
    end_time: str
    is_daytime: bool
    temperature: int | float
    temperature_unit: str
    wind_speed: str | None
    wind_direction: str | None
    short_forecast: str
    detailed_forecast: str
    icon: str | None
    min_temp: int | float
    max_temp: int | float
    precip: int | None


@dataclass(frozen=True)
class DailyForecast(ForecastPeriod):
    """A daytime period with its night attached."""

    night: ForecastPeriod | None = None
    hourly_temperature: list[HourlySample] = field(default_factory=list)


# =============================================================================
# Hourly series
# =============================================================================


class SeriesId(StrEnum):
    """Identifiers of the hourly chart series."""

    WIND_SPEED = "windSpeed"
    TEMPERATURE = "temperature"
    SKY_COVER = "skyCover"
    PROBABILITY_OF_PRECIPITATION = "probabilityOfPrecipitation"


@dataclass(frozen=True)
class HourlySample:
    timestamp: datetime
    value: int | float | None


@dataclass(frozen=True)
class HourlySeries:
    """A named time series: ``id`` plus samples in source order."""

    id: SeriesId
    data: list[HourlySample] = field(default_factory=list)


@dataclass(frozen=True)
class HourlyForecast:
    """The four hourly series, wind in mph and temperature in °F."""

    wind_speed: HourlySeries
    temperature: HourlySeries
    sky_cover: HourlySeries
    probability_of_precipitation: HourlySeries

    @property
    def series(self) -> list[HourlySeries]:
        return [
            self.wind_speed,
            self.temperature,
            self.sky_cover,
            self.probability_of_precipitation,
        ]


# =============================================================================
# Combined
# =============================================================================


@dataclass(frozen=True)
class WeatherReport:
    """Everything one fetch cycle produces for a location."""

    coordinate: Coordinate
    station_info: StationInfo
    current_conditions: CurrentConditions
    daily_forecast: list[DailyForecast]
    hourly: HourlyForecast
