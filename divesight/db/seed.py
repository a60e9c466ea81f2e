"""
Destructive reseed of reference data.

Wipes every table (children first, so the RESTRICT foreign keys hold) and
bulk-inserts the Koh Tao diving centers, the fish catalogue, the simulated
temperature sensors and one starting sighting per fish.
"""

from datetime import timedelta

import numpy as np
from sqlalchemy import delete, insert
from sqlalchemy.orm import Session

from divesight.models.base import new_id, utc_now
from divesight.models.diving_center import DivingCenter
from divesight.models.fish import Fish, FishSighting, Rarity
from divesight.models.temperature_sensor import TemperatureReading, TemperatureSensor
from divesight.services.geo_point_service import random_point_in_circle

DIVING_CENTERS = [
    {"name": "Master Divers", "latitude": 10.0927, "longitude": 99.8366},
    {"name": "The Divers Boat", "latitude": 10.0987, "longitude": 99.8250},
    {"name": "IDC Koh Tao", "latitude": 10.1009, "longitude": 99.8263},
    {"name": "Sairee Cottage Diving", "latitude": 10.0981, "longitude": 99.8302},
    {"name": "Big Blue Diving", "latitude": 10.0965, "longitude": 99.8274},
]

FISH = [
    {"name": "Clownfish", "rarity": Rarity.COMMON, "size_cm": 11.0, "weight_kg": 0.25},
    {"name": "Moorish Idol", "rarity": Rarity.COMMON, "size_cm": 22.0, "weight_kg": 0.6},
    {"name": "Sailfin Snapper", "rarity": Rarity.COMMON, "size_cm": 50.0, "weight_kg": 3.0},
    {"name": "Pickhandle Barracuda", "rarity": Rarity.COMMON, "size_cm": 90.0, "weight_kg": 7.5},
    {"name": "Blue-spotted Stingray", "rarity": Rarity.COMMON, "size_cm": 35.0, "weight_kg": 2.0},
    {"name": "Titan Triggerfish", "rarity": Rarity.RARE, "size_cm": 75.0, "weight_kg": 6.0},
    {"name": "Longfin Batfish", "rarity": Rarity.RARE, "size_cm": 45.0, "weight_kg": 2.5},
    {"name": "Giant Moray", "rarity": Rarity.RARE, "size_cm": 300.0, "weight_kg": 30.0},
    {"name": "Blacktip Reef Shark", "rarity": Rarity.EPIC, "size_cm": 160.0, "weight_kg": 24.0},
    {"name": "Whale Shark", "rarity": Rarity.EPIC, "size_cm": 1200.0, "weight_kg": 19000.0},
    {"name": "Yellowtail Barracuda", "rarity": None, "size_cm": None, "weight_kg": None},
]

TEMPERATURE_SENSORS = [
    {"name": "Chumphon Pinnacle", "latitude": 10.1375, "longitude": 99.8211},
    {"name": "Sail Rock", "latitude": 9.9400, "longitude": 99.9610},
    {"name": "Twins", "latitude": 10.1155, "longitude": 99.8135},
    {"name": "Shark Island", "latitude": 10.0539, "longitude": 99.8400},
    {"name": "White Rock", "latitude": 10.1048, "longitude": 99.8105},
]

# Simulated sea-surface temperatures in the Gulf of Thailand (°C)
SIMULATED_TEMPERATURE_RANGE = (26.0, 31.0)


def reseed(
    db: Session,
    *,
    center_lat: float,
    center_lon: float,
    radius_km: float,
    rng: np.random.Generator | None = None,
) -> dict[str, int]:
    """
    Replace all reference data and return inserted row counts per table.
    """
    rng = rng or np.random.default_rng()
    now = utc_now()

    for model in (TemperatureReading, TemperatureSensor, FishSighting, Fish, DivingCenter):
        db.execute(delete(model))

    db.execute(insert(DivingCenter), [{"id": new_id(), **row} for row in DIVING_CENTERS])

    fish_rows = [{"id": new_id(), "image": None, **row} for row in FISH]
    db.execute(insert(Fish), fish_rows)

    sensor_rows = [{"id": new_id(), **row} for row in TEMPERATURE_SENSORS]
    db.execute(insert(TemperatureSensor), sensor_rows)

    low, high = SIMULATED_TEMPERATURE_RANGE
    db.execute(
        insert(TemperatureReading),
        [
            {
                "id": new_id(),
                "sensor_id": sensor["id"],
                "temperature": round(float(rng.uniform(low, high)), 1),
                "timestamp": now,
            }
            for sensor in sensor_rows
        ],
    )

    sighting_rows = []
    for fish in fish_rows:
        point = random_point_in_circle(center_lat, center_lon, radius_km, rng=rng)
        sighting_rows.append(
            {
                "id": new_id(),
                "fish_id": fish["id"],
                "latitude": point.lat,
                "longitude": point.lon,
                "timestamp": now - timedelta(minutes=float(rng.integers(0, 60))),
            }
        )
    db.execute(insert(FishSighting), sighting_rows)

    db.commit()

    return {
        "diving_centers": len(DIVING_CENTERS),
        "fish": len(fish_rows),
        "temperature_sensors": len(sensor_rows),
        "temperature_readings": len(sensor_rows),
        "fish_sightings": len(sighting_rows),
    }
