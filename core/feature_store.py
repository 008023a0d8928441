"""
In-memory store behind the Features API.

Features keep insertion order and are addressed by opaque ids, so removing
one never changes how the others are addressed.
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional

from config import (
    DEFAULT_FEATURE_POINT,
    SEED_AIR_TEMPERATURE,
    SEED_STATION_NAME,
    SEED_STATION_POINT,
    Coordinates,
)


@dataclass(frozen=True)
class StoredFeature:
    id: str
    point: Coordinates
    station: str
    air_temperature: float

    def to_geojson(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": "Feature",
            "geometry": {
                "type": "Point",
                "coordinates": [self.point.longitude, self.point.latitude],
            },
            "properties": {
                "Automatic Weather Station": self.station,
                "Air Temperature": self.air_temperature,
            },
        }


def _new_id() -> str:
    return uuid.uuid4().hex


class FeatureStore:
    def __init__(self, seed: bool = True):
        self._lock = threading.Lock()
        self._features: Dict[str, StoredFeature] = {}
        if seed:
            self.create(SEED_STATION_NAME, SEED_AIR_TEMPERATURE, point=SEED_STATION_POINT)

    def list(self) -> List[StoredFeature]:
        with self._lock:
            return list(self._features.values())

    def get(self, feature_id: str) -> Optional[StoredFeature]:
        with self._lock:
            return self._features.get(feature_id)

    def create(
        self,
        station: str,
        air_temperature: float,
        point: Coordinates = DEFAULT_FEATURE_POINT,
    ) -> StoredFeature:
        feature = StoredFeature(
            id=_new_id(),
            point=point,
            station=station,
            air_temperature=air_temperature,
        )
        with self._lock:
            self._features[feature.id] = feature
        return feature

    def update(self, feature_id: str, station: str, air_temperature: float) -> Optional[StoredFeature]:
        """Replace a feature's properties; its id and geometry are kept."""
        with self._lock:
            current = self._features.get(feature_id)
            if current is None:
                return None
            updated = replace(current, station=station, air_temperature=air_temperature)
            self._features[feature_id] = updated
            return updated

    def delete(self, feature_id: str) -> bool:
        with self._lock:
            return self._features.pop(feature_id, None) is not None

    def collection(self) -> Dict[str, Any]:
        return {
            "type": "FeatureCollection",
            "features": [f.to_geojson() for f in self.list()],
        }
