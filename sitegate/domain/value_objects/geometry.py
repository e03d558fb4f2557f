"""Site boundary shapes.

A ring is one closed loop of vertices (first and last need not repeat).
A polygon is an outer ring followed by any holes, and a site geometry is
a list of polygons, one per disconnected footprint.
"""

from collections.abc import Sequence

from sitegate.domain.value_objects.geo_point import GeoPoint

Ring = Sequence[GeoPoint]
Polygon = Sequence[Ring]
SiteGeometry = Sequence[Polygon]


def vertex_count(geometry: SiteGeometry | None) -> int:
    if not geometry:
        return 0
    return sum(len(ring) for polygon in geometry for ring in polygon)
