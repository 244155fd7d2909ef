"""
Shared fixtures: NWS payloads and a fake HTTP layer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from unittest.mock import Mock, patch

import pytest
import requests
from prefect.testing.utilities import prefect_test_harness

from balmy.config import get_settings
from balmy.datasources import nws
from balmy.datasources.nws.models import Coordinate
from balmy.flows.fetch import assemble_report

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from balmy.datasources.nws.models import WeatherReport

API = "https://api.weather.gov"
GRID_URL = f"{API}/gridpoints/MPX/107,71"
POINT_URL = f"{API}/points/44.9475,-93.2054"
STATIONS_URL = f"{GRID_URL}/stations"


@pytest.fixture(autouse=True, scope="session")
def prefect_test_fixture() -> Iterator[None]:
    """Run flows against a throwaway Prefect backend."""
    with prefect_test_harness():
        yield


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Each test sees settings built from its own environment."""
    for var in ("BALMY_LAT", "BALMY_LON", "BALMY_API_BASE_URL"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def make_response(payload: Any, status: int = 200) -> Mock:
    """A stand-in for ``requests.Response``."""
    resp = Mock()
    resp.status_code = status
    resp.json.return_value = payload
    if status >= 400:
        error = requests.HTTPError(f"{status} Error")
        error.response = resp
        resp.raise_for_status.side_effect = error
    else:
        resp.raise_for_status = Mock()
    return resp


@pytest.fixture
def point_payload() -> dict[str, Any]:
    return {
        "properties": {
            "gridId": "MPX",
            "gridX": 107,
            "gridY": 71,
            "forecast": f"{GRID_URL}/forecast",
            "forecastHourly": f"{GRID_URL}/forecast/hourly",
            "forecastGridData": GRID_URL,
            "observationStations": STATIONS_URL,
        }
    }


@pytest.fixture
def station_feature() -> dict[str, Any]:
    return {
        "id": f"{API}/stations/KMSP",
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [-93.22861, 44.88306]},
        "properties": {
            "stationIdentifier": "KMSP",
            "name": "Minneapolis-St Paul International Airport",
            "timeZone": "America/Chicago",
            "elevation": {"unitCode": "wmoUnit:m", "value": 265.1736},
        },
    }


@pytest.fixture
def stations_payload(station_feature: dict[str, Any]) -> dict[str, Any]:
    second = {
        "id": f"{API}/stations/KSTP",
        "geometry": {"type": "Point", "coordinates": [-93.05, 44.93]},
        "properties": {"stationIdentifier": "KSTP", "name": "St Paul Downtown Airport"},
    }
    return {"type": "FeatureCollection", "features": [station_feature, second]}


@pytest.fixture
def observation_payload() -> dict[str, Any]:
    return {
        "properties": {
            "timestamp": "2024-03-04T17:53:00+00:00",
            "textDescription": "Mostly Clear",
            "icon": f"{API}/icons/land/day/few?size=medium",
            "temperature": {"unitCode": "wmoUnit:degC", "value": 20},
            "dewpoint": {"unitCode": "wmoUnit:degC", "value": 10},
            "relativeHumidity": {"unitCode": "wmoUnit:percent", "value": 52.6},
            "barometricPressure": {"unitCode": "wmoUnit:Pa", "value": 101325},
            "visibility": {"unitCode": "wmoUnit:m", "value": 16090},
            "windSpeed": {"unitCode": "wmoUnit:km_h-1", "value": 18.36},
            "windGust": {"unitCode": "wmoUnit:km_h-1", "value": None},
            "windDirection": {"unitCode": "wmoUnit:degree_(angle)", "value": 200},
            "windChill": {"unitCode": "wmoUnit:degC", "value": None},
            "heatIndex": {"unitCode": "wmoUnit:degC", "value": 21.5},
        }
    }


def _period(
    number: int,
    name: str,
    start: str,
    end: str,
    *,
    daytime: bool,
    temperature: int,
    icon: str,
    short: str,
) -> dict[str, Any]:
    return {
        "number": number,
        "name": name,
        "startTime": start,
        "endTime": end,
        "isDaytime": daytime,
        "temperature": temperature,
        "temperatureUnit": "F",
        "windSpeed": "5 to 10 mph",
        "windDirection": "S",
        "icon": icon,
        "shortForecast": short,
        "detailedForecast": f"{short}. Details.",
    }


@pytest.fixture
def forecast_payload() -> dict[str, Any]:
    icons = f"{API}/icons/land"
    return {
        "properties": {
            "periods": [
                _period(
                    1, "Today", "2024-03-04T06:00:00-06:00", "2024-03-04T18:00:00-06:00",
                    daytime=True, temperature=60, icon=f"{icons}/day/skc?size=medium",
                    short="Sunny",
                ),
                _period(
                    2, "Tonight", "2024-03-04T18:00:00-06:00", "2024-03-05T06:00:00-06:00",
                    daytime=False, temperature=45, icon=f"{icons}/night/rain_showers,30",
                    short="Chance Rain Showers",
                ),
                _period(
                    3, "Monday", "2024-03-05T06:00:00-06:00", "2024-03-05T18:00:00-06:00",
                    daytime=True, temperature=65, icon=f"{icons}/day/tsra_hi,60/rain,20",
                    short="Sunny then Partly Cloudy",
                ),
                _period(
                    4, "Monday Night", "2024-03-05T18:00:00-06:00", "2024-03-06T06:00:00-06:00",
                    daytime=False, temperature=50, icon=f"{icons}/night/bkn",
                    short="Mostly Cloudy",
                ),
                _period(
                    5, "Tuesday", "2024-03-06T06:00:00-06:00", "2024-03-06T18:00:00-06:00",
                    daytime=True, temperature=70, icon=f"{icons}/day/volcano,10",
                    short="Ash",
                ),
            ]
        }
    }  # fmt: skip


@pytest.fixture
def grid_payload() -> dict[str, Any]:
    return {
        "properties": {
            "windSpeed": {
                "uom": "wmoUnit:kt",
                "values": [
                    {"validTime": "2024-03-04T18:00:00+00:00/PT1H", "value": 10},
                    {"validTime": "2024-03-04T19:00:00+00:00/PT2H", "value": 0},
                    {"validTime": "2024-03-04T21:00:00+00:00/PT1H", "value": None},
                ],
            },
            "temperature": {
                "uom": "wmoUnit:degC",
                "values": [
                    {"validTime": "2024-03-04T18:00:00+00:00/PT1H", "value": 0},
                    {"validTime": "2024-03-05T05:00:00+00:00/PT1H", "value": 20},
                    {"validTime": "2024-03-05T07:00:00+00:00/PT1H", "value": -40},
                ],
            },
            "skyCover": {
                "uom": "wmoUnit:percent",
                "values": [{"validTime": "2024-03-04T18:00:00+00:00/PT3H", "value": 50}],
            },
            "probabilityOfPrecipitation": {
                "uom": "wmoUnit:percent",
                "values": [{"validTime": "2024-03-04T18:00:00+00:00/PT6H", "value": 20}],
            },
        }
    }


@pytest.fixture
def nws_responses(
    point_payload: dict[str, Any],
    stations_payload: dict[str, Any],
    station_feature: dict[str, Any],
    observation_payload: dict[str, Any],
    forecast_payload: dict[str, Any],
    grid_payload: dict[str, Any],
) -> dict[str, Any]:
    """URL → payload for every resource one fetch cycle touches."""
    return {
        POINT_URL: point_payload,
        STATIONS_URL: stations_payload,
        f"{API}/stations/KMSP": station_feature,
        f"{API}/stations/KMSP/observations/latest": observation_payload,
        f"{GRID_URL}/forecast": forecast_payload,
        GRID_URL: grid_payload,
    }


@pytest.fixture
def fake_get(nws_responses: dict[str, Any]) -> Iterator[Mock]:
    """Patch the shared session so GETs are answered from ``nws_responses``."""

    def _get(url: str, **_kwargs: Any) -> Mock:
        if url not in nws_responses:
            return make_response({"title": "Not Found"}, status=404)
        return make_response(nws_responses[url])

    with patch("balmy.services.http.session.get", side_effect=_get) as mock_get:
        yield mock_get


@pytest.fixture
def response_factory() -> Callable[..., Mock]:
    return make_response


@pytest.fixture
def weather_report(fake_get: Mock) -> WeatherReport:
    """A report assembled from the canned responses, without running the flow."""
    home = Coordinate(lon=-93.2054, lat=44.9475)
    return assemble_report(
        home,
        nws.fetch_station_info("KMSP", home),
        nws.fetch_current_conditions("KMSP"),
        nws.fetch_daily_forecast(f"{GRID_URL}/forecast"),
        nws.fetch_hourly_series(GRID_URL),
    )
