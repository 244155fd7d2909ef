"""National Weather Service data source.

Fetches and transforms api.weather.gov resources for one location.

Public API:
  - models: Coordinate, Location, StationInfo, CurrentConditions, ForecastPeriod,
            DailyForecast, HourlySeries, HourlyForecast, WeatherReport
  - icons: IconAsset, DEFAULT_ICON_TABLE, resolve_icons, primary_icon
  - location: resolve_location, fetch_station_info
  - observations: fetch_current_conditions, summarize_current
  - forecast: fetch_daily_forecast, build_daily_forecast
  - hourly: fetch_hourly_series, build_hourly_series, attach_hourly_temperature
  - serialization: report_to_dict, report_to_json
"""

from balmy.datasources.nws.forecast import build_daily_forecast, fetch_daily_forecast
from balmy.datasources.nws.hourly import (
    attach_hourly_temperature,
    build_hourly_series,
    fetch_hourly_series,
)
from balmy.datasources.nws.icons import (
    DEFAULT_ICON_TABLE,
    IconAsset,
    IconTable,
    primary_icon,
    resolve_icons,
)
from balmy.datasources.nws.location import fetch_station_info, resolve_location
from balmy.datasources.nws.models import (
    Coordinate,
    CurrentConditions,
    CurrentSummary,
    DailyForecast,
    ForecastPeriod,
    HourlyForecast,
    HourlySample,
    HourlySeries,
    Location,
    ParsedIcon,
    SeriesId,
    StationInfo,
    StationRef,
    WeatherReport,
)
from balmy.datasources.nws.observations import fetch_current_conditions, summarize_current
from balmy.datasources.nws.serialization import report_to_dict, report_to_json

__all__ = [
    "DEFAULT_ICON_TABLE",
    "Coordinate",
    "CurrentConditions",
    "CurrentSummary",
    "DailyForecast",
    "ForecastPeriod",
    "HourlyForecast",
    "HourlySample",
    "HourlySeries",
    "IconAsset",
    "IconTable",
    "Location",
    "ParsedIcon",
    "SeriesId",
    "StationInfo",
    "StationRef",
    "WeatherReport",
    "attach_hourly_temperature",
    "build_daily_forecast",
    "build_hourly_series",
    "fetch_current_conditions",
    "fetch_daily_forecast",
    "fetch_hourly_series",
    "fetch_station_info",
    "primary_icon",
    "report_to_dict",
    "report_to_json",
    "resolve_icons",
    "resolve_location",
    "summarize_current",
]
