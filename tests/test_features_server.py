from pathlib import Path
import sys

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import features_server
from core.feature_store import FeatureStore


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(features_server, "store", FeatureStore())
    return TestClient(features_server.app)


def _body(station, temp, coords=None):
    body = {
        "type": "Feature",
        "properties": {"Automatic Weather Station": station, "Air Temperature": temp},
    }
    if coords is not None:
        body["geometry"] = {"type": "Point", "coordinates": coords}
    return body


def test_seeded_collection(client):
    body = client.get("/api/features").json()

    assert body["type"] == "FeatureCollection"
    assert len(body["features"]) == 1
    seed = body["features"][0]
    assert seed["geometry"]["coordinates"] == [113.9219444, 22.3094444]
    assert seed["properties"] == {"Automatic Weather Station": "Chek Lap Kok", "Air Temperature": 27.3}


def test_create_forces_default_geometry(client):
    resp = client.post("/api/features", json=_body("Sha Tin", 29.1, coords=[1.0, 2.0]))

    assert resp.status_code == 200
    created = resp.json()
    assert created["geometry"] == {"type": "Point", "coordinates": [113.0, 22.0]}
    assert created["properties"]["Automatic Weather Station"] == "Sha Tin"

    fetched = client.get(f"/api/features/{created['id']}").json()
    assert fetched == created


def test_update_keeps_id_and_geometry(client):
    seed = client.get("/api/features").json()["features"][0]

    resp = client.put(f"/api/features/{seed['id']}", json=_body("Chek Lap Kok", 30.5, coords=[0, 0]))

    assert resp.status_code == 200
    updated = resp.json()
    assert updated["id"] == seed["id"]
    assert updated["geometry"] == seed["geometry"]
    assert updated["properties"]["Air Temperature"] == 30.5


def test_delete_does_not_shift_other_ids(client):
    first = client.post("/api/features", json=_body("A", 1.0)).json()
    second = client.post("/api/features", json=_body("B", 2.0)).json()

    assert client.delete(f"/api/features/{first['id']}").status_code == 204
    assert client.get(f"/api/features/{first['id']}").status_code == 404
    assert client.get(f"/api/features/{second['id']}").json()["properties"]["Automatic Weather Station"] == "B"
    assert len(client.get("/api/features").json()["features"]) == 2


@pytest.mark.parametrize("method", ["get", "delete"])
def test_unknown_id_is_404(client, method):
    assert getattr(client, method)("/api/features/missing").status_code == 404


def test_update_unknown_id_is_404(client):
    assert client.put("/api/features/missing", json=_body("X", 1.0)).status_code == 404


def test_invalid_body_is_rejected(client):
    resp = client.post("/api/features", json={"properties": {"Air Temperature": "warm"}})
    assert resp.status_code == 422
