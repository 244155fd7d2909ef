"""Point → grid/station resolution and station metadata."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from balmy import units
from balmy.datasources.nws import client
from balmy.datasources.nws.models import Coordinate, Location, StationInfo, StationRef
from balmy.errors import RemoteFetchError
from balmy.schemas import PointMetadata, StationCollection, StationFeature, parse_payload
from balmy.services.http import fetch_json

if TYPE_CHECKING:
    import requests

logger = logging.getLogger(__name__)


def _station_ref(feature: StationFeature) -> StationRef:
    lon, lat = feature.geometry.coordinates
    return StationRef(
        id=feature.properties.station_identifier,
        name=feature.properties.name,
        coordinate=Coordinate(lon=lon, lat=lat),
    )


def resolve_location(
    coordinate: Coordinate, http: requests.Session | None = None
) -> Location:
    """
    Resolve the forecast grid and observation station for a coordinate.

    Two sequential lookups: the point metadata, then the point's station list.
    The first listed station is used as-is (NWS orders them by proximity).

    Raises:
        RemoteFetchError: If either lookup fails or no station is listed.
    """
    url = client.points_url(coordinate)
    point = parse_payload(PointMetadata, fetch_json(url, http), url).properties

    stations_url = point.observation_stations
    stations = parse_payload(StationCollection, fetch_json(stations_url, http), stations_url)
    if not stations.features:
        raise RemoteFetchError(
            f"No observation stations listed at {stations_url}", url=stations_url
        )

    station = _station_ref(stations.features[0])
    logger.info(
        "Resolved (%s, %s) to grid %s, station %s",
        coordinate.lat,
        coordinate.lon,
        point.forecast_grid_data,
        station.id,
    )
    return Location(
        grid_url=point.forecast_grid_data, forecast_url=point.forecast, station=station
    )


def station_info_from_feature(feature: StationFeature, reference: Coordinate) -> StationInfo:
    """Annotate a station with distance and bearing from ``reference``."""
    ref = _station_ref(feature)
    return StationInfo(
        id=ref.id,
        name=ref.name,
        coordinate=ref.coordinate,
        time_zone=feature.properties.time_zone,
        elevation=feature.properties.elevation,
        distance=units.distance_m(reference.as_tuple(), ref.coordinate.as_tuple()),
        bearing=units.bearing(reference.as_tuple(), ref.coordinate.as_tuple()),
    )


def fetch_station_info(
    station_id: str, reference: Coordinate, http: requests.Session | None = None
) -> StationInfo:
    """Fetch station metadata and annotate it relative to ``reference``."""
    url = client.station_url(station_id)
    feature = parse_payload(StationFeature, fetch_json(url, http), url)
    return station_info_from_feature(feature, reference)
