"""
Boundary models for api.weather.gov payloads.

Pydantic models for the raw JSON documents returned by the NWS API. Every
response is validated here, immediately after fetch, so the transforms in
``datasources/nws`` only ever see typed data.

Field names are snake_case; the NWS camelCase names are accepted as aliases.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from balmy.errors import RemoteFetchError

_BASE_CONFIG = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _require_utc_offset(value: str) -> str:
    """Timestamps must be ISO-8601 with an explicit UTC offset."""
    if datetime.fromisoformat(value).tzinfo is None:
        raise ValueError(f"timestamp {value!r} has no UTC offset")
    return value


# =============================================================================
# Measurements
# =============================================================================


class Measurement(BaseModel):
    """A value tagged with its WMO unit code. ``value`` is None when not reported."""

    model_config = _BASE_CONFIG

    value: float | None = None
    unit_code: str | None = Field(default=None, alias="unitCode")

    @property
    def is_present(self) -> bool:
        return self.value is not None


# =============================================================================
# Points and stations
# =============================================================================


class PointProperties(BaseModel):
    """``/points/{lat},{lon}`` properties: links to the grid and station resources."""

    model_config = _BASE_CONFIG

    forecast: str
    forecast_grid_data: str = Field(..., alias="forecastGridData")
    observation_stations: str = Field(..., alias="observationStations")


class PointMetadata(BaseModel):
    model_config = _BASE_CONFIG

    properties: PointProperties


class PointGeometry(BaseModel):
    """GeoJSON point; coordinates are ``[lon, lat]``."""

    model_config = _BASE_CONFIG

    coordinates: tuple[float, float]


class StationProperties(BaseModel):
    model_config = _BASE_CONFIG

    station_identifier: str = Field(..., alias="stationIdentifier")
    name: str | None = None
    time_zone: str | None = Field(default=None, alias="timeZone")
    elevation: Measurement = Field(default_factory=Measurement)


class StationFeature(BaseModel):
    """A station as returned by ``/stations/{id}`` or in a station collection."""

    model_config = _BASE_CONFIG

    id: str | None = None
    geometry: PointGeometry
    properties: StationProperties


class StationCollection(BaseModel):
    model_config = _BASE_CONFIG

    features: list[StationFeature] = Field(default_factory=list)


# =============================================================================
# Observations
# =============================================================================


class ObservationProperties(BaseModel):
    """``/stations/{id}/observations/latest`` properties."""

    model_config = _BASE_CONFIG

    timestamp: str | None = None
    text_description: str | None = Field(default=None, alias="textDescription")
    icon: str | None = None
    temperature: Measurement = Field(default_factory=Measurement)
    dewpoint: Measurement = Field(default_factory=Measurement)
    relative_humidity: Measurement = Field(default_factory=Measurement, alias="relativeHumidity")
    barometric_pressure: Measurement = Field(
        default_factory=Measurement, alias="barometricPressure"
    )
    visibility: Measurement = Field(default_factory=Measurement)
    wind_speed: Measurement = Field(default_factory=Measurement, alias="windSpeed")
    wind_gust: Measurement = Field(default_factory=Measurement, alias="windGust")
    wind_direction: Measurement = Field(default_factory=Measurement, alias="windDirection")
    wind_chill: Measurement = Field(default_factory=Measurement, alias="windChill")
    heat_index: Measurement = Field(default_factory=Measurement, alias="heatIndex")


class ObservationDocument(BaseModel):
    model_config = _BASE_CONFIG

    properties: ObservationProperties


# =============================================================================
# Period forecast
# =============================================================================


class RawForecastPeriod(BaseModel):
    """One named period (``Tonight``, ``Monday``, ``Monday Night`` ...)."""

    model_config = _BASE_CONFIG

    number: int
    name: str
    start_time: str = Field(..., alias="startTime")
    end_time: str = Field(..., alias="endTime")
    is_daytime: bool = Field(..., alias="isDaytime")
    temperature: int | float
    temperature_unit: str = Field(default="F", alias="temperatureUnit")
    wind_speed: str | None = Field(default=None, alias="windSpeed")
    wind_direction: str | None = Field(default=None, alias="windDirection")
    icon: str | None = None
    short_forecast: str = Field(default="", alias="shortForecast")
    detailed_forecast: str = Field(default="", alias="detailedForecast")

    @field_validator("start_time", "end_time")
    @classmethod
    def period_times_have_offset(cls, value: str) -> str:
        return _require_utc_offset(value)


class ForecastProperties(BaseModel):
    model_config = _BASE_CONFIG

    periods: list[RawForecastPeriod] = Field(default_factory=list)


class ForecastDocument(BaseModel):
    model_config = _BASE_CONFIG

    properties: ForecastProperties


# =============================================================================
# Hourly grid data
# =============================================================================


class GridValue(BaseModel):
    """A grid sample; ``valid_time`` is an ISO-8601 interval ``<start>/<duration>``."""

    model_config = _BASE_CONFIG

    valid_time: str = Field(..., alias="validTime")
    value: int | float | None = None

    @field_validator("valid_time")
    @classmethod
    def interval_start_has_offset(cls, value: str) -> str:
        _require_utc_offset(value.split("/", 1)[0])
        return value


class GridSeries(BaseModel):
    model_config = _BASE_CONFIG

    uom: str | None = None
    values: list[GridValue] = Field(default_factory=list)


class GridProperties(BaseModel):
    model_config = _BASE_CONFIG

    wind_speed: GridSeries = Field(default_factory=GridSeries, alias="windSpeed")
    temperature: GridSeries = Field(default_factory=GridSeries)
    sky_cover: GridSeries = Field(default_factory=GridSeries, alias="skyCover")
    probability_of_precipitation: GridSeries = Field(
        default_factory=GridSeries, alias="probabilityOfPrecipitation"
    )


class GridDocument(BaseModel):
    model_config = _BASE_CONFIG

    properties: GridProperties


# =============================================================================
# Validation
# =============================================================================


def parse_payload(model: type[ModelT], doc: dict[str, Any], url: str | None = None) -> ModelT:
    """
    Validate a decoded JSON document against ``model``.

    Raises:
        RemoteFetchError: If the document does not match the expected shape.
    """
    try:
        return model.model_validate(doc)
    except ValidationError as exc:
        raise RemoteFetchError(
            f"Unexpected {model.__name__} payload from {url or 'remote'}: {exc}", url=url
        ) from exc
