# File: divesight/schemas/diving_center.py

from divesight.schemas.common import CamelModel


class DivingCenterRead(CamelModel):
    id: str
    name: str
    latitude: float
    longitude: float
