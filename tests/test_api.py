# File: tests/test_api.py

"""
API tests for the read-only endpoints.

These use FastAPI's TestClient against an in-memory SQLite store. To run:
    pytest -q
"""

from datetime import datetime, timedelta

from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from divesight.api.deps import get_db
from divesight.db.session import create_db_engine
from divesight.main import app
from divesight.models.diving_center import DivingCenter
from divesight.models.fish import Rarity

from conftest import BASE_TIME, KOH_TAO, add_fish, add_sensor


def test_health_endpoint(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_lists_empty(client):
    for path in ("/api/diving-centers", "/api/fish"):
        resp = client.get(path)
        assert resp.status_code == 200
        assert resp.json() == []


def test_list_diving_centers(client, db):
    db.add(DivingCenter(name="Big Blue Diving", latitude=10.0965, longitude=99.8274))
    db.commit()

    resp = client.get("/api/diving-centers")
    assert resp.status_code == 200
    [center] = resp.json()
    assert center["name"] == "Big Blue Diving"
    assert center["latitude"] == 10.0965
    assert center["longitude"] == 99.8274
    assert "id" in center


def test_list_fish_with_latest_sighting(client, db):
    seen = add_fish(db, "Clownfish", Rarity.COMMON, sightings=3, size_cm=11.0)
    add_fish(db, "Unknown Goby", Rarity.RARE)
    sensor = add_sensor(db, "House Reef", KOH_TAO[0], KOH_TAO[1], readings=[(0, 26.5)])

    resp = client.get("/api/fish")
    assert resp.status_code == 200
    data = {f["name"]: f for f in resp.json()}

    clown = data["Clownfish"]
    assert clown["id"] == seen.id
    assert clown["rarity"] == "COMMON"
    assert clown["sizeCm"] == 11.0
    assert clown["weightKg"] is None
    assert clown["preferredTemperatureMin"] == 24.0
    assert clown["preferredTemperatureMax"] == 28.0

    latest = clown["latestSighting"]
    assert latest["fishId"] == seen.id
    # sightings were added one minute apart; the third is the newest
    assert latest["latitude"] == KOH_TAO[0] + 0.002
    assert latest["nearestSensorId"] == sensor.id
    assert latest["waterTemperature"] == 26.5
    assert latest["temperatureTimestamp"] is not None
    assert latest["isPreferredTemperature"] is True

    goby = data["Unknown Goby"]
    assert goby["latestSighting"] is None
    assert goby["preferredTemperatureMin"] == 22.0
    assert goby["preferredTemperatureMax"] == 28.0


def test_sighting_without_sensors_has_null_temperature(client, db):
    add_fish(db, "Clownfish", sightings=1)

    [fish] = client.get("/api/fish").json()
    latest = fish["latestSighting"]
    assert latest is not None
    assert latest["nearestSensorId"] is None
    assert latest["waterTemperature"] is None
    assert latest["temperatureTimestamp"] is None
    assert latest["isPreferredTemperature"] is None


def test_get_fish_with_history(client, db):
    fish = add_fish(db, "Whale Shark", Rarity.EPIC, sightings=3)
    add_sensor(db, "Chumphon Pinnacle", 10.1375, 99.8211, readings=[(0, 31.0)])

    resp = client.get(f"/api/fish/{fish.id}")
    assert resp.status_code == 200
    body = resp.json()

    assert body["name"] == "Whale Shark"
    assert len(body["sightings"]) == 3
    timestamps = [s["timestamp"] for s in body["sightings"]]
    assert timestamps == sorted(timestamps)
    assert body["latestSighting"] == body["sightings"][-1]
    assert all(s["isPreferredTemperature"] is False for s in body["sightings"])


def test_get_fish_not_found(client):
    resp = client.get("/api/fish/does-not-exist")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Fish not found"}


def test_store_failure_returns_500():
    # fresh in-memory database without tables
    broken_engine = create_db_engine("sqlite://", poolclass=StaticPool)
    broken_sessions = sessionmaker(bind=broken_engine)

    def broken_db():
        session = broken_sessions()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = broken_db
    try:
        client = TestClient(app)

        resp = client.get("/api/diving-centers")
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to fetch diving centers"}

        resp = client.get("/api/fish")
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to fetch fish"}

        resp = client.get("/api/fish/abc")
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to fetch fish"}
    finally:
        app.dependency_overrides.clear()
        broken_engine.dispose()


def _parse_timestamp(value):
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def test_timestamps_are_utc(client, db):
    fish = add_fish(db, "Clownfish", sightings=2)
    add_sensor(db, "House Reef", KOH_TAO[0], KOH_TAO[1], readings=[(5, 27.0)])

    body = client.get(f"/api/fish/{fish.id}").json()
    for sighting in body["sightings"]:
        stamp = _parse_timestamp(sighting["timestamp"])
        assert stamp.utcoffset() == timedelta(0)
        reading_stamp = _parse_timestamp(sighting["temperatureTimestamp"])
        assert reading_stamp.utcoffset() == timedelta(0)

    newest = _parse_timestamp(body["latestSighting"]["timestamp"])
    assert newest == BASE_TIME + timedelta(minutes=1)
    assert _parse_timestamp(body["latestSighting"]["temperatureTimestamp"]) == BASE_TIME + timedelta(minutes=5)
