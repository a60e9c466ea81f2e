# divesight/services/fish_sighting_service.py
"""
Sighting rotation: simulates fish moving around the diving area.

On every tick a subset of fish is picked; each picked fish loses its oldest
sighting and gains a fresh one at a random point inside the diving area.
Each fish is rotated in its own transaction, so readers never see a fish
between the delete and the insert, and one failing fish does not undo the
others.
"""

import enum
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Iterable, Sequence, TypeVar

import numpy as np
from sqlalchemy import false, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from divesight.models.base import utc_now
from divesight.models.fish import Fish, FishSighting, Rarity
from divesight.services.geo_point_service import random_point_in_circle

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RefreshMode(str, enum.Enum):
    ALL = "all"
    RANDOM = "random"
    COIN_FLIP = "coin_flip"


@dataclass
class RotationReport:
    candidates: int
    refreshed: list[str] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)
    finished_at: datetime | None = None


class SightingRotator:
    """
    Refreshes fish sightings inside a disc around (center_lat, center_lon).

    Args:
        session_factory: Callable returning a new SQLAlchemy Session
        center_lat, center_lon, radius_km: Diving area
        rng: numpy Generator used for counts, selection and locations
        clock: Returns the timestamp stored on new sightings
    """

    def __init__(
        self,
        session_factory: sessionmaker | Callable[[], Session],
        *,
        center_lat: float,
        center_lon: float,
        radius_km: float,
        rng: np.random.Generator | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.session_factory = session_factory
        self.center_lat = center_lat
        self.center_lon = center_lon
        self.radius_km = radius_km
        self.rng = rng or np.random.default_rng()
        self.clock = clock

    # -----------------------------
    # Selection policy
    # -----------------------------
    def refresh_count(self, mode: RefreshMode, candidate_count: int) -> int:
        if candidate_count <= 0:
            return 0
        if mode == RefreshMode.ALL:
            return candidate_count
        if mode == RefreshMode.RANDOM:
            return int(self.rng.integers(1, candidate_count, endpoint=True))
        if mode == RefreshMode.COIN_FLIP:
            return int(self.rng.integers(0, 1, endpoint=True))
        raise ValueError(f"Unknown refresh mode: {mode!r}")

    def select_fish(self, candidates: Sequence[T], count: int) -> list[T]:
        """`count` distinct candidates, uniformly at random without replacement."""
        count = max(0, min(count, len(candidates)))
        order = self.rng.permutation(len(candidates))
        return [candidates[i] for i in order[:count]]

    # -----------------------------
    # Store operations
    # -----------------------------
    def load_candidates(self, rarities: Iterable[Rarity | None] | None = None) -> list[str]:
        stmt = select(Fish.id).order_by(Fish.id)
        if rarities is not None:
            rarities = list(rarities)
            tiers = [r for r in rarities if r is not None]
            clauses = [Fish.rarity.in_(tiers)] if tiers else []
            if None in rarities:
                clauses.append(Fish.rarity.is_(None))
            stmt = stmt.where(or_(*clauses)) if clauses else stmt.where(false())

        with self.session_factory() as db:
            return list(db.scalars(stmt))

    def rotate_fish(self, fish_id: str) -> FishSighting:
        """Replace the fish's oldest sighting with a new one, atomically."""
        point = random_point_in_circle(
            self.center_lat, self.center_lon, self.radius_km, rng=self.rng
        )

        with self.session_factory() as db, db.begin():
            oldest = db.scalars(
                select(FishSighting)
                .where(FishSighting.fish_id == fish_id)
                .order_by(FishSighting.timestamp, FishSighting.id)
                .limit(1)
            ).first()
            if oldest is not None:
                db.delete(oldest)

            sighting = FishSighting(
                fish_id=fish_id,
                latitude=point.lat,
                longitude=point.lon,
                timestamp=self.clock(),
            )
            db.add(sighting)
            db.flush()
            db.expunge(sighting)

        return sighting

    # -----------------------------
    # Tick
    # -----------------------------
    def tick(
        self,
        mode: RefreshMode = RefreshMode.RANDOM,
        rarities: Iterable[Rarity | None] | None = None,
    ) -> RotationReport:
        candidates = self.load_candidates(rarities)
        selected = self.select_fish(candidates, self.refresh_count(mode, len(candidates)))

        report = RotationReport(candidates=len(candidates))
        for fish_id in selected:
            try:
                self.rotate_fish(fish_id)
            except SQLAlchemyError as e:
                logger.exception("Failed to rotate sightings for fish %s", fish_id)
                report.errors[fish_id] = str(e)
            else:
                report.refreshed.append(fish_id)

        report.finished_at = self.clock()
        logger.info(
            "Updated sightings for %d out of %d fish at %s",
            len(report.refreshed),
            report.candidates,
            report.finished_at.isoformat(),
        )
        return report
