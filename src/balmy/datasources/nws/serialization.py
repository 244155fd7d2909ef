"""JSON serialization helpers for weather reports.

Output keys follow the NWS camelCase style so the rendering layer can consume
the report directly. Serialization is deterministic: the same report always
yields the same JSON text.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from balmy.datasources.nws.models import (
        CurrentConditions,
        ForecastPeriod,
        HourlySeries,
        StationInfo,
        WeatherReport,
    )
    from balmy.schemas import Measurement


def measurement_to_dict(m: Measurement | None) -> dict[str, Any] | None:
    if m is None:
        return None
    return {"value": m.value, "unitCode": m.unit_code}


def station_info_to_dict(station: StationInfo) -> dict[str, Any]:
    return {
        "id": station.id,
        "name": station.name,
        "coordinates": [station.coordinate.lon, station.coordinate.lat],
        "timeZone": station.time_zone,
        "elevation": measurement_to_dict(station.elevation),
        "distance": station.distance,
        "bearing": station.bearing,
    }


def current_conditions_to_dict(current: CurrentConditions) -> dict[str, Any]:
    return {
        "timestamp": current.timestamp,
        "textDescription": current.description,
        "icon": current.icon,
        "temperature": measurement_to_dict(current.temperature),
        "dewpoint": measurement_to_dict(current.dewpoint),
        "relativeHumidity": measurement_to_dict(current.relative_humidity),
        "barometricPressure": measurement_to_dict(current.barometric_pressure),
        "visibility": measurement_to_dict(current.visibility),
        "windSpeed": measurement_to_dict(current.wind_speed),
        "windGust": measurement_to_dict(current.wind_gust),
        "windDirection": measurement_to_dict(current.wind_direction),
        "windChill": measurement_to_dict(current.wind_chill),
        "heatIndex": measurement_to_dict(current.heat_index),
        "feelsLike": measurement_to_dict(current.feels_like),
    }


def period_to_dict(period: ForecastPeriod) -> dict[str, Any]:
    return {
        "number": period.number,
        "name": period.name,
        "startTime": period.start_time,
        "endTime": period.end_time,
        "isDaytime": period.is_daytime,
        "temperature": period.temperature,
        "temperatureUnit": period.temperature_unit,
        "windSpeed": period.wind_speed,
        "windDirection": period.wind_direction,
        "shortForecast": period.short_forecast,
        "detailedForecast": period.detailed_forecast,
        "icon": period.icon,
        "minTemp": period.min_temp,
        "maxTemp": period.max_temp,
        "precip": period.precip,
    }


def series_to_dict(series: HourlySeries) -> dict[str, Any]:
    return {
        "id": str(series.id),
        "data": [{"x": s.timestamp.isoformat(), "y": s.value} for s in series.data],
    }


def report_to_dict(report: WeatherReport) -> dict[str, Any]:
    """Serialize a WeatherReport to a JSON-compatible dict."""
    return {
        "location": {"lon": report.coordinate.lon, "lat": report.coordinate.lat},
        "stationInfo": station_info_to_dict(report.station_info),
        "currentConditions": current_conditions_to_dict(report.current_conditions),
        "dailyForecast": [
            {
                **period_to_dict(day),
                "night": period_to_dict(day.night) if day.night else None,
                "hourlyTemperature": [
                    {"x": s.timestamp.isoformat(), "y": s.value} for s in day.hourly_temperature
                ],
            }
            for day in report.daily_forecast
        ],
        "hourlyForecast": [series_to_dict(s) for s in report.hourly.series],
    }


def report_to_json(report: WeatherReport, indent: int | None = 2) -> str:
    """Stable JSON text for a report (sorted keys)."""
    return json.dumps(report_to_dict(report), indent=indent, sort_keys=True)
