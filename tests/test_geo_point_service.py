# File: tests/test_geo_point_service.py

import numpy as np
import pytest

from divesight.services.geo_point_service import (
    GeoPoint,
    destination_point,
    distance_km,
    random_point_in_circle,
)

CENTER = (10.0956, 99.8280)


def test_zero_radius_returns_center_exactly(rng):
    for _ in range(100):
        assert random_point_in_circle(*CENTER, 0.0, rng=rng) == GeoPoint(*CENTER)


def test_negative_radius_rejected(rng):
    with pytest.raises(ValueError):
        random_point_in_circle(*CENTER, -1.0, rng=rng)


@pytest.mark.parametrize("radius_km", [0.5, 5.0, 250.0])
def test_points_stay_inside_disc(rng, radius_km):
    for _ in range(10_000):
        p = random_point_in_circle(*CENTER, radius_km, rng=rng)
        assert distance_km(CENTER[0], CENTER[1], p.lat, p.lon) <= radius_km + 1e-6


def test_distances_are_area_uniform(rng):
    """Uniform by area: about a quarter of the points fall inside R/2."""
    radius_km = 5.0
    distances = np.array(
        [
            distance_km(CENTER[0], CENTER[1], p.lat, p.lon)
            for p in (random_point_in_circle(*CENTER, radius_km, rng=rng) for _ in range(10_000))
        ]
    )

    inner_share = np.mean(distances <= radius_km / 2)
    assert 0.22 < inner_share < 0.28

    # density grows linearly with d: counts per ring roughly 1:3:5:7
    counts, _ = np.histogram(distances, bins=4, range=(0, radius_km))
    expected = np.array([1, 3, 5, 7]) / 16 * len(distances)
    assert np.all(np.abs(counts - expected) < 0.1 * len(distances) / 4)


def test_destination_follows_bearing():
    north = destination_point(0.0, 0.0, 0.0, 111.195)
    assert north.lat == pytest.approx(1.0, abs=1e-3)
    assert north.lon == pytest.approx(0.0, abs=1e-9)

    east = destination_point(0.0, 0.0, 450.0, 111.195)  # bearing wraps to 90
    assert east.lat == pytest.approx(0.0, abs=1e-9)
    assert east.lon == pytest.approx(1.0, abs=1e-3)


def test_longitude_wraps_across_antimeridian(rng):
    for _ in range(2_000):
        p = random_point_in_circle(0.0, 179.99, 50.0, rng=rng)
        assert -180.0 <= p.lon <= 180.0
        assert -90.0 <= p.lat <= 90.0


def test_latitude_bounded_near_pole(rng):
    for _ in range(2_000):
        p = random_point_in_circle(89.95, 0.0, 50.0, rng=rng)
        assert -90.0 <= p.lat <= 90.0
        assert -180.0 <= p.lon <= 180.0
