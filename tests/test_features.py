from pathlib import Path
import sys

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from config import COORDINATES
from collector.errors import FeedShapeError, ParseError
from core.features import build_feature_collection
from core.models import Measurement


def _record(station, hour, **extra):
    rec = {
        "StationNameEN": station,
        "DateTime": f"2026-10-19 {hour:02d}:00",
        "aqhi": hour,
        "NO2": 40.0 + hour,
        "O3": 12,
        "SO2": 3,
        "CO": 55,
        "PM10": 20,
        "PM25": 11,
    }
    rec.update(extra)
    return rec


RECORDS = [
    [_record("Central", 9), _record("Tai Po", 9), _record("Nowhere Harbour", 9)],
    [_record("Central", 10), _record("Tai Po", 10)],
    [_record("Central", 11)],
]


def test_unknown_stations_are_dropped():
    fc = build_feature_collection(RECORDS)

    assert fc["type"] == "FeatureCollection"
    assert set(fc["features"]) == {"Central", "Tai Po"}
    assert set(fc["features"]) <= set(COORDINATES)


def test_point_coordinates_match_table():
    fc = build_feature_collection(RECORDS)

    for name, feature in fc["features"].items():
        assert feature["type"] == "Feature"
        assert feature["geometry"]["type"] == "Point"
        assert feature["geometry"]["coordinates"] == [
            COORDINATES[name].longitude,
            COORDINATES[name].latitude,
        ]
        assert feature["properties"]["name"] == name


def test_measurements_keep_arrival_order():
    fc = build_feature_collection(RECORDS)
    hours = [m["DateTime"] for m in fc["features"]["Central"]["properties"]["feature"]]
    assert hours == ["2026-10-19 09:00", "2026-10-19 10:00", "2026-10-19 11:00"]


@pytest.mark.parametrize(
    "only_last, only_recent, expected",
    [
        (True, False, [11]),
        (False, True, [9]),
        (False, False, [9, 10, 11]),
        (True, True, [11]),
    ],
)
def test_trimming_flags(only_last, only_recent, expected):
    fc = build_feature_collection(RECORDS, only_last=only_last, only_recent=only_recent)
    aqhi = [m["aqhi"] for m in fc["features"]["Central"]["properties"]["feature"]]
    assert aqhi == expected


def test_unknown_fields_dropped_and_missing_fields_null():
    records = [[{"StationNameEN": "Sha Tin", "DateTime": "2026-10-19 09:00", "aqhi": 2, "Extra": "x"}]]
    fc = build_feature_collection(records)

    measurement = fc["features"]["Sha Tin"]["properties"]["feature"][0]
    assert list(measurement) == ["DateTime", "aqhi", "NO2", "O3", "SO2", "CO", "PM10", "PM25"]
    assert measurement["aqhi"] == 2
    assert measurement["PM25"] is None
    assert "Extra" not in measurement
    assert "StationNameEN" not in measurement


def test_records_without_station_name_are_skipped():
    records = [[{"DateTime": "2026-10-19 09:00"}, {"StationNameEN": 12}, _record("Tuen Mun", 9)]]
    fc = build_feature_collection(records)
    assert list(fc["features"]) == ["Tuen Mun"]


def test_empty_feed_gives_empty_collection():
    assert build_feature_collection([]) == {"type": "FeatureCollection", "features": {}}
    assert build_feature_collection([[]], only_last=True)["features"] == {}


def test_wrong_shape_raises_typed_error():
    with pytest.raises(FeedShapeError):
        build_feature_collection([_record("Central", 9)])
    with pytest.raises(ParseError):
        build_feature_collection([["not a record"]])


def test_custom_coordinate_table():
    from config import Coordinates

    fc = build_feature_collection(
        [[_record("Lab", 1)]],
        coordinates={"Lab": Coordinates(1.5, 2.5)},
    )
    assert fc["features"]["Lab"]["geometry"]["coordinates"] == [1.5, 2.5]


def test_measurement_from_record_rejects_non_object():
    with pytest.raises(FeedShapeError):
        Measurement.from_record(["Central"])
