# File: divesight/models/fish.py

"""
Fish species and their simulated sightings.

Sightings are append/delete only. The foreign key restricts deletes so a
fish that still has sightings cannot be removed by a plain delete; the
relationship uses passive_deletes="all" so the ORM leaves that decision to
the database instead of nulling out fish_id.
"""

import enum
from datetime import datetime

from sqlalchemy import Enum, Float, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from divesight.models.base import Base, UTCDateTime, new_id, utc_now


class Rarity(str, enum.Enum):
    COMMON = "COMMON"
    RARE = "RARE"
    EPIC = "EPIC"


class Fish(Base):
    __tablename__ = "fish"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    rarity: Mapped[Rarity | None] = mapped_column(Enum(Rarity), nullable=True, index=True)
    size_cm: Mapped[float | None] = mapped_column(Float, nullable=True)
    weight_kg: Mapped[float | None] = mapped_column(Float, nullable=True)

    sightings: Mapped[list["FishSighting"]] = relationship(
        back_populates="fish",
        order_by="FishSighting.timestamp",
        passive_deletes="all",
    )


class FishSighting(Base):
    __tablename__ = "fish_sightings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    fish_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("fish.id", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
        index=True,
    )
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=utc_now,
        nullable=False,
    )

    fish: Mapped[Fish] = relationship(back_populates="sightings")
