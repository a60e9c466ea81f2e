# File: divesight/core/config.py

import os
from functools import lru_cache
from typing import List, Literal

from pydantic import BaseModel, field_validator


class Settings(BaseModel):
    PROJECT_NAME: str = "DiveSight API"
    VERSION: str = "0.1.0"

    api_prefix: str = "/api"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS (comma separated when given through the environment)
    backend_cors_origins: List[str] = os.getenv(
        "BACKEND_CORS_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173",
    )

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./divesight.db")

    # Diving area that simulated sightings are scattered over (Koh Tao)
    diving_area_lat: float = os.getenv("DIVING_AREA_LAT", "10.0956")
    diving_area_lon: float = os.getenv("DIVING_AREA_LON", "99.8280")
    diving_area_radius_km: float = os.getenv("DIVING_AREA_RADIUS_KM", "5.0")

    # Sighting rotation
    sighting_updates_enabled: bool = os.getenv("SIGHTING_UPDATES_ENABLED", "true")
    sighting_update_minutes: float = os.getenv("FISH_SIGHTING_UPDATE_RATE", "5")
    rare_sighting_update_minutes: float = os.getenv("RARE_FISH_SIGHTING_UPDATE_RATE", "30")
    rotation_strategy: Literal["all", "random", "tiered"] = os.getenv(
        "ROTATION_STRATEGY", "random"
    )

    class Config:
        # defaults come from the environment as strings
        validate_default = True

    @field_validator("backend_cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        if isinstance(v, list):
            return v
        return []

    @field_validator("diving_area_radius_km")
    @classmethod
    def radius_not_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("must not be negative")
        return v

    @field_validator("sighting_update_minutes", "rare_sighting_update_minutes")
    @classmethod
    def interval_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be positive")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
