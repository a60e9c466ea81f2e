# File: tests/conftest.py

from datetime import datetime, timedelta, timezone

import numpy as np
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from divesight.api.deps import get_db
from divesight.db.init_db import init_db
from divesight.db.session import create_db_engine
from divesight.main import app
from divesight.models.fish import Fish, FishSighting
from divesight.models.temperature_sensor import TemperatureReading, TemperatureSensor

KOH_TAO = (10.0956, 99.8280)

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def rng():
    return np.random.default_rng(20240101)


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def add_fish(db, name, rarity=None, sightings=0, **fields):
    fish = Fish(name=name, rarity=rarity, **fields)
    db.add(fish)
    db.flush()
    for i in range(sightings):
        db.add(
            FishSighting(
                fish_id=fish.id,
                latitude=KOH_TAO[0] + 0.001 * i,
                longitude=KOH_TAO[1],
                timestamp=BASE_TIME + timedelta(minutes=i),
            )
        )
    db.commit()
    return fish


def add_sensor(db, name, lat, lon, readings=()):
    sensor = TemperatureSensor(name=name, latitude=lat, longitude=lon)
    db.add(sensor)
    db.flush()
    for minutes, temperature in readings:
        db.add(
            TemperatureReading(
                sensor_id=sensor.id,
                temperature=temperature,
                timestamp=BASE_TIME + timedelta(minutes=minutes),
            )
        )
    db.commit()
    return sensor
