# File: tests/test_seed.py

import pytest
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError

from divesight.db.seed import DIVING_CENTERS, FISH, reseed
from divesight.models.diving_center import DivingCenter
from divesight.models.fish import Fish, FishSighting
from divesight.models.temperature_sensor import TemperatureSensor
from divesight.services.geo_point_service import distance_km

from conftest import KOH_TAO, add_fish


def _count(db, model):
    return db.scalar(select(func.count()).select_from(model))


def test_reseed_replaces_everything(db, rng):
    add_fish(db, "Leftover Fish", sightings=2)
    db.add(DivingCenter(name="Closed Shop", latitude=0.0, longitude=0.0))
    db.commit()

    counts = reseed(db, center_lat=KOH_TAO[0], center_lon=KOH_TAO[1], radius_km=5.0, rng=rng)

    assert counts["diving_centers"] == _count(db, DivingCenter) == len(DIVING_CENTERS)
    assert counts["fish"] == _count(db, Fish) == len(FISH)
    assert counts["fish_sightings"] == _count(db, FishSighting) == len(FISH)
    assert counts["temperature_sensors"] == _count(db, TemperatureSensor)
    assert db.scalar(select(Fish).where(Fish.name == "Leftover Fish")) is None
    assert db.scalar(select(DivingCenter).where(DivingCenter.name == "Closed Shop")) is None

    for s in db.scalars(select(FishSighting)):
        assert distance_km(KOH_TAO[0], KOH_TAO[1], s.latitude, s.longitude) <= 5.0 + 1e-6


def test_reseed_is_repeatable(db, rng):
    reseed(db, center_lat=KOH_TAO[0], center_lon=KOH_TAO[1], radius_km=5.0, rng=rng)
    reseed(db, center_lat=KOH_TAO[0], center_lon=KOH_TAO[1], radius_km=5.0, rng=rng)

    assert _count(db, Fish) == len(FISH)
    assert _count(db, FishSighting) == len(FISH)


def test_fish_with_sightings_cannot_be_deleted(db):
    fish = add_fish(db, "Clownfish", sightings=1)
    fish_id = fish.id

    with pytest.raises(IntegrityError):
        db.execute(delete(Fish).where(Fish.id == fish_id))
        db.commit()
    db.rollback()

    with pytest.raises(IntegrityError):
        db.delete(db.get(Fish, fish_id))
        db.commit()
    db.rollback()

    assert db.get(Fish, fish_id) is not None
