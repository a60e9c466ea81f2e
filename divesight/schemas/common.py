# File: divesight/schemas/common.py

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Response models serialize with camelCase keys for the front-end."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
