"""
Feature Reshaper

Turns the upstream `station_24_data` block (a list of record groups) into a
GeoJSON FeatureCollection whose `features` member is keyed by station name.
"""

from typing import Any, Dict, List, Optional

from collector.errors import FeedShapeError
from config import COORDINATES, Coordinates
from core.models import Measurement, StationFeature, station_name_of


def group_by_station(
    records: List[Any],
    coordinates: Optional[Dict[str, Coordinates]] = None,
) -> Dict[str, StationFeature]:
    """
    Flatten one level and collect measurements per known station.

    Records for stations missing from `coordinates` are skipped silently.
    """
    table = COORDINATES if coordinates is None else coordinates
    if not isinstance(records, list):
        raise FeedShapeError(f"expected a list of record groups, got {type(records).__name__}")

    stations: Dict[str, StationFeature] = {}
    for group in records:
        if not isinstance(group, list):
            raise FeedShapeError(f"expected a record group list, got {type(group).__name__}")
        for record in group:
            measurement = Measurement.from_record(record)
            name = station_name_of(record)
            coords = table.get(name) if name is not None else None
            if coords is None:
                continue

            feature = stations.get(name)
            if feature is None:
                stations[name] = StationFeature(
                    name=name,
                    longitude=coords.longitude,
                    latitude=coords.latitude,
                    measurements=[measurement],
                )
            else:
                feature.measurements.append(measurement)
    return stations


def build_feature_collection(
    records: List[Any],
    only_last: bool = False,
    only_recent: bool = False,
    coordinates: Optional[Dict[str, Coordinates]] = None,
) -> Dict[str, Any]:
    """
    Build the station FeatureCollection.

    Args:
        records: list of record groups as decoded from the feed
        only_last: keep only each station's last measurement
        only_recent: keep only each station's first measurement (ignored if only_last)

    Raises:
        FeedShapeError: the decoded feed is not a list of lists of objects
    """
    stations = group_by_station(records, coordinates)
    for feature in stations.values():
        feature.trim(only_last, only_recent)

    return {
        "type": "FeatureCollection",
        "features": {name: feature.to_geojson() for name, feature in stations.items()},
    }
