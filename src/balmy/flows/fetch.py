"""
Prefect flow that builds a WeatherReport for one location.

Location resolution runs first; the station, current-conditions, daily and
hourly fetches then run concurrently and are joined into one report. If any
of them fails the flow run fails and no report is produced.

Tasks never retry and never cache: every run re-fetches and builds a fresh,
independent report. Retrying is up to whatever triggers the flow (see
``balmy.scheduler``).

Run locally:
    python -m balmy.flows.fetch

Run with Prefect dashboard:
    prefect server start &
    python -m balmy.flows.fetch
"""

from __future__ import annotations

from prefect import flow, task
from prefect.cache_policies import NO_CACHE

from balmy.config import get_settings
from balmy.datasources import nws
from balmy.datasources.nws.models import (
    Coordinate,
    CurrentConditions,
    DailyForecast,
    HourlyForecast,
    Location,
    StationInfo,
    WeatherReport,
)


@task(name="resolve-location", cache_policy=NO_CACHE)
def resolve_location(coordinate: Coordinate) -> Location:
    """Find the forecast grid and nearest station for the coordinate."""
    return nws.resolve_location(coordinate)


@task(name="fetch-station-info", cache_policy=NO_CACHE)
def fetch_station_info(station_id: str, reference: Coordinate) -> StationInfo:
    """Fetch station metadata with distance/bearing from the reference point."""
    return nws.fetch_station_info(station_id, reference)


@task(name="fetch-current-conditions", cache_policy=NO_CACHE)
def fetch_current_conditions(station_id: str) -> CurrentConditions:
    """Fetch the latest observation for the station."""
    return nws.fetch_current_conditions(station_id)


@task(name="fetch-daily-forecast", cache_policy=NO_CACHE)
def fetch_daily_forecast(forecast_url: str) -> list[DailyForecast]:
    """Fetch the period forecast and build the day-by-day forecast."""
    return nws.fetch_daily_forecast(forecast_url)


@task(name="fetch-hourly-series", cache_policy=NO_CACHE)
def fetch_hourly_series(grid_url: str) -> HourlyForecast:
    """Fetch raw grid data and build the four hourly series."""
    return nws.fetch_hourly_series(grid_url)


def assemble_report(
    coordinate: Coordinate,
    station_info: StationInfo,
    current: CurrentConditions,
    daily: list[DailyForecast],
    hourly: HourlyForecast,
) -> WeatherReport:
    """Join the independent fetch results into one report."""
    return WeatherReport(
        coordinate=coordinate,
        station_info=station_info,
        current_conditions=current,
        daily_forecast=nws.attach_hourly_temperature(daily, hourly.temperature),
        hourly=hourly,
    )


@flow(name="fetch-report", log_prints=True)
def fetch_report(lat: float | None = None, lon: float | None = None) -> WeatherReport:
    """
    Fetch everything needed to render the forecast page for a location.

    Args:
        lat: Latitude (defaults to the configured location).
        lon: Longitude (defaults to the configured location).
    """
    settings = get_settings()
    coordinate = Coordinate(
        lon=settings.lon if lon is None else lon,
        lat=settings.lat if lat is None else lat,
    )

    print(f"Resolving location for ({coordinate.lat}, {coordinate.lon})...")
    location = resolve_location(coordinate)
    print(f"Using station {location.station.id}, grid {location.grid_url}")

    station_future = fetch_station_info.submit(location.station.id, coordinate)
    current_future = fetch_current_conditions.submit(location.station.id)
    daily_future = fetch_daily_forecast.submit(location.forecast_url)
    hourly_future = fetch_hourly_series.submit(location.grid_url)

    report = assemble_report(
        coordinate,
        station_future.result(),
        current_future.result(),
        daily_future.result(),
        hourly_future.result(),
    )
    print(
        f"Report ready: {len(report.daily_forecast)} days, "
        f"{len(report.hourly.temperature.data)} hourly samples"
    )
    return report


if __name__ == "__main__":
    result = fetch_report()
    print(nws.report_to_json(result))
