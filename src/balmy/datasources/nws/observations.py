"""Latest station observation (current conditions)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from balmy import units
from balmy.datasources.nws import client
from balmy.datasources.nws.icons import DEFAULT_ICON_TABLE, IconTable, primary_icon
from balmy.datasources.nws.models import CurrentConditions, CurrentSummary
from balmy.schemas import ObservationDocument, ObservationProperties, parse_payload
from balmy.services.http import fetch_json

if TYPE_CHECKING:
    import requests

    from balmy.schemas import Measurement


def feels_like(props: ObservationProperties) -> Measurement | None:
    """Wind chill if reported, else heat index if reported, else None."""
    if props.wind_chill.is_present:
        return props.wind_chill
    if props.heat_index.is_present:
        return props.heat_index
    return None


def normalize_observation(
    props: ObservationProperties, icons: IconTable = DEFAULT_ICON_TABLE
) -> CurrentConditions:
    """Attach the resolved icon and feels-like value. Measurements are untouched."""
    icon = primary_icon(props.icon, icons)
    return CurrentConditions(
        timestamp=props.timestamp,
        description=props.text_description,
        icon=icon.icon if icon else props.icon,
        temperature=props.temperature,
        dewpoint=props.dewpoint,
        relative_humidity=props.relative_humidity,
        barometric_pressure=props.barometric_pressure,
        visibility=props.visibility,
        wind_speed=props.wind_speed,
        wind_gust=props.wind_gust,
        wind_direction=props.wind_direction,
        wind_chill=props.wind_chill,
        heat_index=props.heat_index,
        feels_like=feels_like(props),
    )


def fetch_current_conditions(
    station_id: str,
    icons: IconTable = DEFAULT_ICON_TABLE,
    http: requests.Session | None = None,
) -> CurrentConditions:
    """
    Fetch and normalize the latest observation for a station.

    Args:
        station_id: Station identifier, e.g. ``KMSP``.
        icons: Icon table used to resolve the observation icon.
        http: Session override (tests).

    Raises:
        RemoteFetchError: If the observation cannot be fetched or parsed.
    """
    url = client.latest_observation_url(station_id)
    doc = parse_payload(ObservationDocument, fetch_json(url, http), url)
    return normalize_observation(doc.properties, icons)


def summarize_current(conditions: CurrentConditions) -> CurrentSummary:
    """
    Display values for the current-conditions panel.

    Each field is None when its measurement was not reported, so a missing
    gust hides the gust line instead of showing ``0 mph``.
    """
    direction = conditions.wind_direction.value
    humidity = conditions.relative_humidity.value
    return CurrentSummary(
        temperature_f=units.temperature_f(conditions.temperature),
        feels_like_f=(
            units.temperature_f(conditions.feels_like) if conditions.feels_like else None
        ),
        wind_mph=units.speed_mph(conditions.wind_speed),
        wind_gust_mph=units.speed_mph(conditions.wind_gust),
        wind_cardinal=units.cardinal_direction(direction),
        # The arrow glyph points north; rotate it to point downwind.
        wind_arrow_rotation=direction - 180 if direction is not None else None,
        humidity_pct=units.round_half_up(humidity) if humidity is not None else None,
        dewpoint_f=units.temperature_f(conditions.dewpoint),
        visibility_mi=units.visibility_miles(conditions.visibility),
        pressure_mb=units.pressure_mb(conditions.barometric_pressure),
    )
