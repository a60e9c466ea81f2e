# File: divesight/services/fish_service.py

"""
Read-side fish queries.

Each fish is returned with its preferred water-temperature range and its
sightings enriched with the nearest sensor's latest reading.
"""

from typing import Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from divesight.models.fish import Fish, FishSighting
from divesight.schemas.fish import FishDetail, FishRead, SightingRead
from divesight.services.temperature_service import (
    SensorSnapshot,
    TemperatureRange,
    correlate,
    load_sensor_snapshots,
    preferred_temperature_range,
)


def _sighting_to_read(
    sighting: FishSighting,
    sensors: Sequence[SensorSnapshot],
    temperature_range: TemperatureRange,
) -> SightingRead:
    correlation = correlate(sighting.latitude, sighting.longitude, sensors, temperature_range)
    return SightingRead(
        id=sighting.id,
        fish_id=sighting.fish_id,
        latitude=sighting.latitude,
        longitude=sighting.longitude,
        timestamp=sighting.timestamp,
        nearest_sensor_id=correlation.sensor_id if correlation else None,
        water_temperature=correlation.temperature if correlation else None,
        temperature_timestamp=correlation.timestamp if correlation else None,
        is_preferred_temperature=correlation.in_preferred_range if correlation else None,
    )


def _fish_fields(fish: Fish, temperature_range: TemperatureRange) -> dict:
    return {
        "id": fish.id,
        "name": fish.name,
        "image": fish.image,
        "rarity": fish.rarity,
        "size_cm": fish.size_cm,
        "weight_kg": fish.weight_kg,
        "preferred_temperature_min": temperature_range.min,
        "preferred_temperature_max": temperature_range.max,
    }


def _latest_sightings(db: Session) -> dict[str, FishSighting]:
    """Most recent sighting per fish id."""
    latest = (
        select(
            FishSighting.fish_id.label("fish_id"),
            func.max(FishSighting.timestamp).label("latest_ts"),
        )
        .group_by(FishSighting.fish_id)
        .subquery()
    )
    stmt = (
        select(FishSighting)
        .join(
            latest,
            (FishSighting.fish_id == latest.c.fish_id)
            & (FishSighting.timestamp == latest.c.latest_ts),
        )
        .order_by(FishSighting.id)
    )

    by_fish: dict[str, FishSighting] = {}
    for sighting in db.scalars(stmt):
        by_fish.setdefault(sighting.fish_id, sighting)
    return by_fish


def get_all_fish(db: Session) -> list[FishRead]:
    fishes = db.scalars(select(Fish).order_by(Fish.name, Fish.id)).all()
    if not fishes:
        return []

    latest = _latest_sightings(db)
    sensors = load_sensor_snapshots(db)

    result = []
    for fish in fishes:
        temperature_range = preferred_temperature_range(fish.name, fish.rarity)
        sighting = latest.get(fish.id)
        result.append(
            FishRead(
                **_fish_fields(fish, temperature_range),
                latest_sighting=(
                    _sighting_to_read(sighting, sensors, temperature_range)
                    if sighting is not None
                    else None
                ),
            )
        )
    return result


def get_fish_by_id(db: Session, fish_id: str) -> Optional[FishDetail]:
    """
    A single fish with its full sighting history (oldest first).

    Returns None if the fish does not exist.
    """
    fish = db.get(Fish, fish_id)
    if fish is None:
        return None

    sightings = db.scalars(
        select(FishSighting)
        .where(FishSighting.fish_id == fish_id)
        .order_by(FishSighting.timestamp, FishSighting.id)
    ).all()
    sensors = load_sensor_snapshots(db) if sightings else []
    temperature_range = preferred_temperature_range(fish.name, fish.rarity)

    history = [_sighting_to_read(s, sensors, temperature_range) for s in sightings]
    return FishDetail(
        **_fish_fields(fish, temperature_range),
        latest_sighting=history[-1] if history else None,
        sightings=history,
    )
