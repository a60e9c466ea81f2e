# File: divesight/models/diving_center.py

from sqlalchemy import Float, String
from sqlalchemy.orm import Mapped, mapped_column

from divesight.models.base import Base, new_id


class DivingCenter(Base):
    __tablename__ = "diving_centers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
