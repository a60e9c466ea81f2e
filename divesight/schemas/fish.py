# File: divesight/schemas/fish.py

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from divesight.models.fish import Rarity
from divesight.schemas.common import CamelModel


# -----------------------------
# Sightings
# -----------------------------

class SightingRead(CamelModel):
    id: str
    fish_id: str
    latitude: float
    longitude: float
    timestamp: datetime

    # Nearest temperature sensor; all None when no reading is available
    nearest_sensor_id: Optional[str] = None
    water_temperature: Optional[float] = None
    temperature_timestamp: Optional[datetime] = None
    is_preferred_temperature: Optional[bool] = None


# -----------------------------
# Fish
# -----------------------------

class FishBase(CamelModel):
    id: str
    name: str
    image: Optional[str] = None
    rarity: Optional[Rarity] = None
    size_cm: Optional[float] = None
    weight_kg: Optional[float] = None


class FishRead(FishBase):
    preferred_temperature_min: float
    preferred_temperature_max: float
    latest_sighting: Optional[SightingRead] = None


class FishDetail(FishRead):
    sightings: List[SightingRead] = []
