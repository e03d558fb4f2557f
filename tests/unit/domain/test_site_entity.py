"""Tests for the Site entity."""

from sitegate.domain.entities.site import Site
from sitegate.domain.value_objects.geo_point import GeoPoint


def test_site_defaults_to_no_location_data():
    site = Site(id=1, name="Склад")
    assert site.geometry == []
    assert site.has_geometry() is False
    assert site.has_location_data() is False


def test_site_with_center_only():
    site = Site(id=1, name="Склад", center=GeoPoint(latitude=56.85, longitude=53.2))
    assert site.has_geometry() is False
    assert site.has_location_data() is True


def test_site_with_geometry(site_ring):
    site = Site(id=1, name="Корпус", geometry=[[site_ring]])
    assert site.has_geometry() is True
    assert site.has_location_data() is True


def test_sites_do_not_share_default_geometry():
    a = Site(id=1, name="a")
    b = Site(id=2, name="b")
    assert a.geometry is not b.geometry
