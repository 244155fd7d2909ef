"""
Tests for the fetch flow module.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import pytest

from balmy.datasources import nws
from balmy.datasources.nws import report_to_json
from balmy.datasources.nws.models import Coordinate, HourlyForecast, HourlySeries, SeriesId
from balmy.errors import RemoteFetchError
from balmy.flows import fetch
from balmy.scheduler import RefreshScheduler

if TYPE_CHECKING:
    from unittest.mock import Mock

    from balmy.datasources.nws.models import WeatherReport

API = "https://api.weather.gov"
GRID_URL = f"{API}/gridpoints/MPX/107,71"


class TestFetchReport:
    """End-to-end flow runs against canned responses."""

    def test_builds_report(self, fake_get: Mock) -> None:
        report = fetch.fetch_report()

        assert report.coordinate == Coordinate(lon=-93.2054, lat=44.9475)
        assert report.station_info.id == "KMSP"
        assert report.current_conditions.description == "Mostly Clear"
        assert [d.name for d in report.daily_forecast] == ["Today", "Monday", "Tuesday"]
        assert [s.value for s in report.hourly.wind_speed.data] == [12, 0, None]

    def test_hourly_temperature_attached(self, fake_get: Mock) -> None:
        report = fetch.fetch_report()
        assert [s.value for s in report.daily_forecast[0].hourly_temperature] == [32, 68]

    def test_touches_every_resource(
        self, fake_get: Mock, nws_responses: dict[str, Any]
    ) -> None:
        fetch.fetch_report()

        urls = {c.args[0] for c in fake_get.call_args_list}
        assert urls == set(nws_responses)
        assert fake_get.call_count == len(nws_responses)

    def test_location_resolved_first(self, fake_get: Mock) -> None:
        fetch.fetch_report()

        first_two = [c.args[0] for c in fake_get.call_args_list[:2]]
        assert first_two == [f"{API}/points/44.9475,-93.2054", f"{GRID_URL}/stations"]

    def test_forecast_follows_point_link(
        self, fake_get: Mock, nws_responses: dict[str, Any]
    ) -> None:
        elsewhere = f"{API}/gridpoints/MPX/107,71/forecast?units=us"
        nws_responses[f"{API}/points/44.9475,-93.2054"]["properties"]["forecast"] = elsewhere
        nws_responses[elsewhere] = nws_responses.pop(f"{GRID_URL}/forecast")

        report = fetch.fetch_report()

        assert len(report.daily_forecast) == 3
        assert elsewhere in {c.args[0] for c in fake_get.call_args_list}

    def test_explicit_coordinate(self, fake_get: Mock, nws_responses: dict[str, Any]) -> None:
        nws_responses[f"{API}/points/45.0,-93.0"] = nws_responses.pop(
            f"{API}/points/44.9475,-93.2054"
        )

        report = fetch.fetch_report(lat=45.0, lon=-93.0)
        assert report.coordinate == Coordinate(lon=-93.0, lat=45.0)

    @pytest.mark.parametrize(
        "missing",
        [
            f"{API}/stations/KMSP",
            f"{API}/stations/KMSP/observations/latest",
            f"{GRID_URL}/forecast",
            GRID_URL,
        ],
    )
    def test_any_failure_fails_the_run(
        self, fake_get: Mock, nws_responses: dict[str, Any], missing: str
    ) -> None:
        del nws_responses[missing]

        with pytest.raises(RemoteFetchError):
            fetch.fetch_report()

    def test_location_failure_stops_early(
        self, fake_get: Mock, nws_responses: dict[str, Any]
    ) -> None:
        del nws_responses[f"{API}/points/44.9475,-93.2054"]

        with pytest.raises(RemoteFetchError):
            fetch.fetch_report()
        assert fake_get.call_count == 1

    def test_unknown_unit_does_not_fail_the_run(
        self, fake_get: Mock, nws_responses: dict[str, Any]
    ) -> None:
        nws_responses[GRID_URL]["properties"]["windSpeed"]["uom"] = "wmoUnit:ft_s-1"
        scheduler = RefreshScheduler(fetch.fetch_report)

        assert scheduler.trigger() is True
        assert scheduler.report is not None
        assert [s.value for s in scheduler.report.hourly.wind_speed.data] == [None, None, None]

    def test_repeat_runs_are_identical(self, fake_get: Mock) -> None:
        first = report_to_json(fetch.fetch_report())
        second = report_to_json(fetch.fetch_report())

        assert first == second
        assert json.loads(first)["stationInfo"]["id"] == "KMSP"


class TestAssembleReport:
    """Joining fetch results without Prefect."""

    def test_attaches_hourly_temperature(self, weather_report: WeatherReport) -> None:
        assert [s.value for s in weather_report.daily_forecast[1].hourly_temperature] == [-40]

    def test_empty_hourly(self, fake_get: Mock) -> None:
        home = Coordinate(lon=-93.2054, lat=44.9475)
        empty = HourlyForecast(*(HourlySeries(s) for s in SeriesId))
        report = fetch.assemble_report(
            home,
            nws.fetch_station_info("KMSP", home),
            nws.fetch_current_conditions("KMSP"),
            nws.fetch_daily_forecast(f"{GRID_URL}/forecast"),
            empty,
        )

        assert all(d.hourly_temperature == [] for d in report.daily_forecast)
