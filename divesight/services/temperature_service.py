# divesight/services/temperature_service.py
"""
Water-temperature correlation for fish sightings.

The nearest sensor is picked by squared planar distance on raw latitude and
longitude values, which assumes all sensors lie within one diving area.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

import numpy as np
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from divesight.models.fish import Rarity
from divesight.models.temperature_sensor import TemperatureReading, TemperatureSensor


@dataclass(frozen=True)
class TemperatureRange:
    min: float
    max: float

    def contains(self, temperature: float) -> bool:
        return self.min <= temperature <= self.max


@dataclass(frozen=True)
class LatestReading:
    temperature: float
    timestamp: datetime


@dataclass(frozen=True)
class SensorSnapshot:
    sensor_id: str
    latitude: float
    longitude: float
    reading: Optional[LatestReading]


@dataclass(frozen=True)
class TemperatureCorrelation:
    sensor_id: str
    temperature: float
    timestamp: datetime
    in_preferred_range: bool


# Preferred water temperature (°C) for species seen around Koh Tao
SPECIES_TEMPERATURE_RANGES: dict[str, TemperatureRange] = {
    "whale shark": TemperatureRange(21.0, 30.0),
    "clownfish": TemperatureRange(24.0, 28.0),
    "blue-spotted stingray": TemperatureRange(22.0, 29.0),
    "titan triggerfish": TemperatureRange(22.0, 29.0),
    "yellowtail barracuda": TemperatureRange(22.0, 30.0),
    "giant moray": TemperatureRange(22.0, 28.0),
    "bumphead parrotfish": TemperatureRange(23.0, 29.0),
    "longfin batfish": TemperatureRange(24.0, 30.0),
    "blacktip reef shark": TemperatureRange(23.0, 29.0),
    "sailfin snapper": TemperatureRange(24.0, 30.0),
    "pickhandle barracuda": TemperatureRange(22.0, 30.0),
    "moorish idol": TemperatureRange(23.0, 28.0),
}

RARITY_TEMPERATURE_RANGES: dict[Rarity, TemperatureRange] = {
    Rarity.COMMON: TemperatureRange(24.0, 30.0),
    Rarity.RARE: TemperatureRange(22.0, 28.0),
    Rarity.EPIC: TemperatureRange(23.0, 27.0),
}

DEFAULT_TEMPERATURE_RANGE = TemperatureRange(20.0, 30.0)


def preferred_temperature_range(name: str, rarity: Rarity | None) -> TemperatureRange:
    """
    Look up the preferred range by species name, then by rarity tier,
    then fall back to the default range.
    """
    by_name = SPECIES_TEMPERATURE_RANGES.get(name.strip().lower())
    if by_name is not None:
        return by_name
    if rarity is not None:
        return RARITY_TEMPERATURE_RANGES[Rarity(rarity)]
    return DEFAULT_TEMPERATURE_RANGE


def load_sensor_snapshots(db: Session) -> list[SensorSnapshot]:
    """
    Every sensor with its most recent reading (or None), ordered by sensor id.
    """
    latest = (
        select(
            TemperatureReading.sensor_id.label("sensor_id"),
            func.max(TemperatureReading.timestamp).label("latest_ts"),
        )
        .group_by(TemperatureReading.sensor_id)
        .subquery()
    )

    stmt = (
        select(TemperatureSensor, TemperatureReading)
        .outerjoin(latest, latest.c.sensor_id == TemperatureSensor.id)
        .outerjoin(
            TemperatureReading,
            (TemperatureReading.sensor_id == TemperatureSensor.id)
            & (TemperatureReading.timestamp == latest.c.latest_ts),
        )
        .order_by(TemperatureSensor.id, TemperatureReading.id)
    )

    snapshots: list[SensorSnapshot] = []
    seen: set[str] = set()
    for sensor, reading in db.execute(stmt):
        # two readings can share the latest timestamp; keep one
        if sensor.id in seen:
            continue
        seen.add(sensor.id)
        snapshots.append(
            SensorSnapshot(
                sensor_id=sensor.id,
                latitude=sensor.latitude,
                longitude=sensor.longitude,
                reading=(
                    LatestReading(reading.temperature, reading.timestamp)
                    if reading is not None
                    else None
                ),
            )
        )
    return snapshots


def nearest_sensor(
    lat: float,
    lon: float,
    sensors: Sequence[SensorSnapshot],
) -> SensorSnapshot | None:
    """
    The sensor with a reading closest to (lat, lon) by squared planar distance.

    Ties go to the sensor that comes first in `sensors`.
    """
    candidates = [s for s in sensors if s.reading is not None]
    if not candidates:
        return None

    coords = np.array([(s.latitude, s.longitude) for s in candidates], dtype=float)
    d2 = (coords[:, 0] - lat) ** 2 + (coords[:, 1] - lon) ** 2
    return candidates[int(np.argmin(d2))]


def correlate(
    lat: float,
    lon: float,
    sensors: Sequence[SensorSnapshot],
    temperature_range: TemperatureRange,
) -> TemperatureCorrelation | None:
    sensor = nearest_sensor(lat, lon, sensors)
    if sensor is None:
        return None

    reading = sensor.reading
    return TemperatureCorrelation(
        sensor_id=sensor.sensor_id,
        temperature=reading.temperature,
        timestamp=reading.timestamp,
        in_preferred_range=temperature_range.contains(reading.temperature),
    )
