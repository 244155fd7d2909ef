"""Unit conversions and geodesy.

Pure functions with no external dependencies. Every converter propagates
``None``: a missing measurement stays missing, it never becomes zero.

Unit-tagged conversions are total: an unrecognised unit code is logged and
treated as a missing value.

Rounding is half-up (``floor(x + 0.5)``), not Python's banker's rounding, so
``2.5`` becomes ``3`` and ``-2.5`` becomes ``-2``.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from balmy.schemas import Measurement

logger = logging.getLogger(__name__)

KNOTS_TO_MPH = 1.15078
MPS_TO_MPH = 2.236936
KPH_TO_MPH = 0.621371
METERS_PER_MILE = 1609.344
PA_TO_MB = 0.01

#: Mean Earth radius (IUGG), meters.
EARTH_RADIUS_M = 6_371_008.8

CARDINAL_DIRECTIONS = (
    "N", "NNE", "NE", "ENE",
    "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW",
    "W", "WNW", "NW", "NNW",
)  # fmt: skip

# WMO unit codes used by api.weather.gov
DEG_C = "wmoUnit:degC"
DEG_F = "wmoUnit:degF"
KM_H = "wmoUnit:km_h-1"
M_S = "wmoUnit:m_s-1"
KNOT = "wmoUnit:kt"
MPH = "wmoUnit:mi_h-1"
METER = "wmoUnit:m"
KILOMETER = "wmoUnit:km"
PASCAL = "wmoUnit:Pa"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward +infinity."""
    return math.floor(value + 0.5)


def c_to_f(celsius: float | None) -> int | None:
    """Convert Celsius to whole degrees Fahrenheit."""
    if celsius is None:
        return None
    return round_half_up(celsius * 9 / 5 + 32)


def meters_to_miles(meters: float | None) -> int | None:
    """Convert meters to whole miles."""
    if meters is None:
        return None
    return round_half_up(meters / METERS_PER_MILE)


def mps_to_mph(mps: float | None) -> int | None:
    """Convert meters/second to whole mph."""
    if mps is None:
        return None
    return round_half_up(mps * MPS_TO_MPH)


def kph_to_mph(kph: float | None) -> int | None:
    """Convert km/h to whole mph."""
    if kph is None:
        return None
    return round_half_up(kph * KPH_TO_MPH)


def knots_to_mph(knots: float | None) -> int | None:
    """Convert knots to whole mph."""
    if knots is None:
        return None
    return round_half_up(knots * KNOTS_TO_MPH)


def pa_to_mb(pascals: float | None) -> int | None:
    """Convert pascals to whole millibars."""
    if pascals is None:
        return None
    return round_half_up(pascals * PA_TO_MB)


def cardinal_direction(degrees: float | None) -> str | None:
    """
    Map a compass bearing to one of 16 cardinal labels.

    Each label covers a 22.5° sector centred on its heading, so 348.75° up to
    (but excluding) 11.25° is ``N``. Values outside [0, 360) wrap.
    """
    if degrees is None:
        return None
    index = math.floor((degrees % 360) / 22.5 + 0.5) % 16
    return CARDINAL_DIRECTIONS[index]


# =============================================================================
# Unit-tagged conversions
# =============================================================================


def _unsupported(kind: str, unit: str) -> None:
    logger.warning("Unsupported %s unit %r, treating value as missing", kind, unit)
    return None


def temperature_f(measurement: Measurement) -> int | None:
    """Whole degrees Fahrenheit from a unit-tagged temperature."""
    if measurement.value is None:
        return None
    unit = measurement.unit_code or DEG_C
    if unit == DEG_C:
        return c_to_f(measurement.value)
    if unit == DEG_F:
        return round_half_up(measurement.value)
    return _unsupported("temperature", unit)


_SPEED_TO_MPH = {
    KM_H: kph_to_mph,
    M_S: mps_to_mph,
    KNOT: knots_to_mph,
    MPH: lambda v: None if v is None else round_half_up(v),
}


def speed_mph(measurement: Measurement, default_unit: str = M_S) -> int | None:
    """
    Whole mph from a unit-tagged speed.

    Args:
        measurement: Speed with its WMO unit code.
        default_unit: Unit assumed when the payload carries no unit code.
    """
    if measurement.value is None:
        return None
    unit = measurement.unit_code or default_unit
    convert = _SPEED_TO_MPH.get(unit)
    if convert is None:
        return _unsupported("speed", unit)
    return convert(measurement.value)


def visibility_miles(measurement: Measurement) -> int | None:
    """Whole miles from a unit-tagged distance (meters or kilometers)."""
    if measurement.value is None:
        return None
    unit = measurement.unit_code or METER
    if unit == METER:
        return meters_to_miles(measurement.value)
    if unit == KILOMETER:
        return meters_to_miles(measurement.value * 1000)
    return _unsupported("distance", unit)


def pressure_mb(measurement: Measurement) -> int | None:
    """Whole millibars from a pressure in pascals."""
    if measurement.value is None:
        return None
    unit = measurement.unit_code or PASCAL
    if unit != PASCAL:
        return _unsupported("pressure", unit)
    return pa_to_mb(measurement.value)


# =============================================================================
# Geodesy
# =============================================================================


def distance_m(origin: tuple[float, float], destination: tuple[float, float]) -> float:
    """
    Great-circle (haversine) distance in meters.

    Args:
        origin: ``(lon, lat)`` in degrees.
        destination: ``(lon, lat)`` in degrees.
    """
    lon1, lat1 = map(math.radians, origin)
    lon2, lat2 = map(math.radians, destination)
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(a)))


def bearing(origin: tuple[float, float], destination: tuple[float, float]) -> float:
    """
    Initial great-circle bearing in degrees, 0 = north, clockwise, in [0, 360).

    Args:
        origin: ``(lon, lat)`` in degrees.
        destination: ``(lon, lat)`` in degrees.
    """
    lon1, lat1 = map(math.radians, origin)
    lon2, lat2 = map(math.radians, destination)
    dlon = lon2 - lon1
    y = math.sin(dlon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)
    return (math.degrees(math.atan2(y, x)) + 360) % 360
