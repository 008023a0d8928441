from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from collector.errors import FeedShapeError

# Upstream keys carried into each measurement, in output order.
MEASUREMENT_FIELDS = ("DateTime", "aqhi", "NO2", "O3", "SO2", "CO", "PM10", "PM25")


@dataclass
class Measurement:
    """
    One time-stamped reading for a station.
    Values are passed through as the feed gives them; absent ones stay None.
    """
    DateTime: Any = None
    aqhi: Any = None
    NO2: Any = None
    O3: Any = None
    SO2: Any = None
    CO: Any = None
    PM10: Any = None
    PM25: Any = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Measurement":
        """Decode a feed record, dropping unknown keys and defaulting missing ones."""
        if not isinstance(record, dict):
            raise FeedShapeError(f"expected a record object, got {type(record).__name__}")
        return cls(**{name: record.get(name) for name in MEASUREMENT_FIELDS})

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in MEASUREMENT_FIELDS}


@dataclass
class StationFeature:
    """GeoJSON Point feature holding a station's measurements in arrival order."""
    name: str
    longitude: float
    latitude: float
    measurements: List[Measurement] = field(default_factory=list)

    def trim(self, only_last: bool, only_recent: bool) -> None:
        # only_last wins when both are set
        if not self.measurements:
            return
        if only_last:
            self.measurements = self.measurements[-1:]
        elif only_recent:
            self.measurements = self.measurements[:1]

    def to_geojson(self) -> Dict[str, Any]:
        return {
            "type": "Feature",
            "geometry": {
                "type": "Point",
                "coordinates": [self.longitude, self.latitude],
            },
            "properties": {
                "name": self.name,
                "feature": [m.to_dict() for m in self.measurements],
            },
        }


def station_name_of(record: Dict[str, Any]) -> Optional[str]:
    name = record.get("StationNameEN")
    return name if isinstance(name, str) else None
