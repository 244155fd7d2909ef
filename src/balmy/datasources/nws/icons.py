"""Icon/condition resolution for NWS icon references.

NWS encodes conditions in the icon URL path, one or two stacked conditions,
each with an optional precipitation probability::

    https://api.weather.gov/icons/land/day/rain_showers,40/tsra_hi,60?size=medium
                                    ^^^  ^^^^^^^^^^^^^^^ ^^^^^^^^^^
                           time of day   first condition second condition

Codes are mapped to display assets through an ``IconTable``. The table is a
plain read-only mapping passed in by the caller; ``DEFAULT_ICON_TABLE`` is the
one shipped with the app.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from urllib.parse import urlsplit

from balmy.datasources.nws.models import ParsedIcon

logger = logging.getLogger(__name__)

MAX_CONDITIONS = 2
TIMES_OF_DAY = ("day", "night")


@dataclass(frozen=True)
class IconAsset:
    """Display assets for one condition code."""

    day: str
    night: str | None = None
    percent: int | None = None  # nominal precipitation chance, if the code implies one

    def for_time(self, time_of_day: str | None) -> str:
        if time_of_day == "night" and self.night:
            return self.night
        return self.day


IconTable = Mapping[str, IconAsset]


def _asset(name: str, *, night: bool = False, percent: int | None = None) -> IconAsset:
    """Asset pair for ``name``; ``night=True`` means a separate night image exists."""
    if night:
        return IconAsset(f"{name}-day.svg", f"{name}-night.svg", percent)
    return IconAsset(f"{name}.svg", None, percent)


# NWS icon codes: https://api.weather.gov/icons
DEFAULT_ICON_TABLE: IconTable = MappingProxyType(
    {
        "skc": _asset("clear", night=True),
        "few": _asset("mostly-clear", night=True),
        "sct": _asset("partly-cloudy", night=True),
        "bkn": _asset("mostly-cloudy", night=True),
        "ovc": _asset("overcast"),
        "wind_skc": _asset("wind-clear", night=True),
        "wind_few": _asset("wind-mostly-clear", night=True),
        "wind_sct": _asset("wind-partly-cloudy", night=True),
        "wind_bkn": _asset("wind-mostly-cloudy", night=True),
        "wind_ovc": _asset("wind-overcast"),
        "snow": _asset("snow"),
        "rain_snow": _asset("rain-snow"),
        "rain_sleet": _asset("rain-sleet"),
        "snow_sleet": _asset("snow-sleet"),
        "fzra": _asset("freezing-rain"),
        "rain_fzra": _asset("rain-freezing-rain"),
        "snow_fzra": _asset("snow-freezing-rain"),
        "sleet": _asset("sleet"),
        "rain": _asset("rain"),
        "rain_showers": _asset("showers", night=True),
        "rain_showers_hi": _asset("isolated-showers", night=True, percent=20),
        "tsra": _asset("thunderstorms"),
        "tsra_sct": _asset("scattered-thunderstorms", night=True, percent=40),
        "tsra_hi": _asset("isolated-thunderstorms", night=True, percent=20),
        "tornado": _asset("tornado"),
        "hurricane": _asset("hurricane"),
        "tropical_storm": _asset("tropical-storm"),
        "dust": _asset("dust"),
        "smoke": _asset("smoke"),
        "haze": _asset("haze", night=True),
        "hot": _asset("hot"),
        "cold": _asset("cold", night=True),
        "blizzard": _asset("blizzard"),
        "fog": _asset("fog", night=True),
    }
)


def parse_icon_reference(reference: str) -> tuple[str | None, list[tuple[str, int | None]]]:
    """
    Split an icon reference into time of day and ``(code, percent)`` pairs.

    Accepts full NWS icon URLs, bare paths, or a bare ``code[,percent]``.
    At most two conditions are returned.
    """
    segments = [s for s in urlsplit(reference).path.split("/") if s]
    time_of_day = None
    conditions = segments[-1:]
    for i, segment in enumerate(segments):
        if segment in TIMES_OF_DAY:
            time_of_day = segment
            conditions = segments[i + 1 :]
            break

    parsed: list[tuple[str, int | None]] = []
    for condition in conditions[:MAX_CONDITIONS]:
        code, _, percent = condition.partition(",")
        parsed.append((code, int(percent) if percent.isdigit() else None))
    return time_of_day, parsed


def resolve_icons(reference: str | None, table: IconTable = DEFAULT_ICON_TABLE) -> list[ParsedIcon]:
    """
    Resolve every condition in an icon reference to its display asset.

    Unmapped codes are passed through as their own ``icon`` rather than
    raising. ``percent`` is None unless the reference encodes one; the
    table's nominal value is reported separately as ``canonical_percent``.

    Returns:
        Zero to two ParsedIcon entries, in the order they appear.
    """
    if not reference:
        return []

    time_of_day, conditions = parse_icon_reference(reference)
    resolved: list[ParsedIcon] = []
    for code, percent in conditions:
        asset = table.get(code)
        if asset is None:
            logger.debug("No icon mapped for condition code %r", code)
            resolved.append(ParsedIcon(code, percent, code, time_of_day))
            continue
        resolved.append(
            ParsedIcon(
                code=code,
                percent=percent,
                icon=asset.for_time(time_of_day),
                time_of_day=time_of_day,
                canonical_percent=asset.percent,
            )
        )
    return resolved


def primary_icon(reference: str | None, table: IconTable = DEFAULT_ICON_TABLE) -> ParsedIcon | None:
    """The first resolved condition, or None if the reference holds none."""
    icons = resolve_icons(reference, table)
    return icons[0] if icons else None
