# divesight/services/geo_point_service.py
"""
Random points inside a disc on the Earth's surface.

Points are sampled uniformly by area: the bearing is uniform and the
distance is R * sqrt(u), then projected along a great circle from the
center with pyproj.
"""

import math
from dataclasses import dataclass

import numpy as np
from pyproj import Geod

# Mean Earth radius in metres (IUGG)
EARTH_RADIUS_M = 6371008.8

SPHERE = Geod(a=EARTH_RADIUS_M, f=0.0)


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lon: float


def destination_point(lat: float, lon: float, bearing_deg: float, distance_km: float) -> GeoPoint:
    """Project a point from (lat, lon) along a great circle."""
    dest_lon, dest_lat, _ = SPHERE.fwd(lon, lat, bearing_deg % 360.0, distance_km * 1000.0)
    return GeoPoint(lat=float(dest_lat), lon=float(dest_lon))


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in kilometres."""
    _, _, meters = SPHERE.inv(lon1, lat1, lon2, lat2)
    return float(meters) / 1000.0


def random_point_in_circle(
    center_lat: float,
    center_lon: float,
    radius_km: float,
    rng: np.random.Generator | None = None,
) -> GeoPoint:
    """
    Return a random point within `radius_km` of the center.

    Args:
        center_lat, center_lon: Center of the disc in degrees
        radius_km: Disc radius in kilometres (0 returns the center itself)
        rng: numpy Generator used for the bearing and distance draws

    Returns:
        GeoPoint with lat in [-90, 90] and lon wrapped into [-180, 180]
    """
    if not math.isfinite(radius_km) or radius_km < 0:
        raise ValueError(f"radius_km must be a non-negative number, got {radius_km!r}")
    if radius_km == 0:
        return GeoPoint(lat=center_lat, lon=center_lon)

    rng = rng or np.random.default_rng()
    bearing = rng.random() * 360.0
    distance = radius_km * math.sqrt(rng.random())

    return destination_point(center_lat, center_lon, bearing, distance)
