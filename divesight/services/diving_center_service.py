# File: divesight/services/diving_center_service.py

from sqlalchemy import select
from sqlalchemy.orm import Session

from divesight.models.diving_center import DivingCenter


def get_all_diving_centers(db: Session) -> list[DivingCenter]:
    return list(db.scalars(select(DivingCenter).order_by(DivingCenter.name)))
