# File: divesight/models/temperature_sensor.py

"""
Simulated water-temperature sensors.

Readings are append-only; the API only ever looks at the latest one per sensor.
"""

from datetime import datetime

from sqlalchemy import Float, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from divesight.models.base import Base, UTCDateTime, new_id, utc_now


class TemperatureSensor(Base):
    __tablename__ = "temperature_sensors"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)

    readings: Mapped[list["TemperatureReading"]] = relationship(
        back_populates="sensor",
        passive_deletes="all",
    )


class TemperatureReading(Base):
    __tablename__ = "temperature_readings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    sensor_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("temperature_sensors.id", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
        index=True,
    )
    temperature: Mapped[float] = mapped_column(Float, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=utc_now,
        nullable=False,
    )

    sensor: Mapped[TemperatureSensor] = relationship(back_populates="readings")
