"""Pytest configuration and shared fixtures."""

import math

import pytest

from sitegate.domain.value_objects.geo_point import EARTH_RADIUS_M, GeoPoint

# Length of one degree of latitude on the haversine sphere
METRES_PER_DEG_LAT = EARTH_RADIUS_M * math.pi / 180


def _north_of(point: GeoPoint, metres: float, accuracy: float | None = None) -> GeoPoint:
    return GeoPoint(
        latitude=point.latitude + metres / METRES_PER_DEG_LAT,
        longitude=point.longitude,
        accuracy=accuracy,
    )


@pytest.fixture
def north_of():
    """Factory: a point `metres` due north of another (exact on the haversine sphere)."""
    return _north_of


@pytest.fixture
def site_ring() -> list[GeoPoint]:
    """~111m x 61m rectangle near Izhevsk, counter-clockwise from SW."""
    return [
        GeoPoint(latitude=56.850, longitude=53.200),
        GeoPoint(latitude=56.850, longitude=53.201),
        GeoPoint(latitude=56.851, longitude=53.201),
        GeoPoint(latitude=56.851, longitude=53.200),
    ]


@pytest.fixture
def ne_corner(site_ring) -> GeoPoint:
    return site_ring[2]
