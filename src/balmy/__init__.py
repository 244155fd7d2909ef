"""Balmy - National Weather Service conditions and forecasts, ready to render.

Architecture::

    datasources/nws/   NWS API resources (points, stations, observations,
                       period forecast, hourly grid data) and their transforms
    units.py           Pure unit conversions and geodesy
    schemas.py         Pydantic models for raw API payloads (boundary validation)
    flows/             Prefect orchestration (resolve location, fan out, join)
    scheduler.py       Caller-side refresh trigger with an explicit last-refresh time
    services/          Shared utilities (HTTP client with retry)

Data flow: location -> (station, current, daily, hourly) -> WeatherReport
"""

__version__ = "0.1.0"

from balmy.config import Settings

__all__ = ["Settings", "__version__"]
