"""GeofencePolicy — decide whether a GPS fix is on a construction site.

Layered decision:
1. the fix lies inside any ring of the site geometry, or
2. the fix lies within (accuracy + buffer) metres of a ring's nearest vertex, or
3. when no geometry is known, the fix lies within
   (accuracy + buffer + centre slack) metres of the site centre.

Geometry, when present, always wins: the centre is never consulted for a
site that has a boundary. Every ring of a polygon (outer boundary and holes
alike) is tested on its own and the results are OR-ed, so a point inside a
hole still counts as on site.

All functions are pure and total over well-typed input.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from sitegate.domain.value_objects.enums import PresenceMatch
from sitegate.domain.value_objects.geo_point import GeoPoint
from sitegate.domain.value_objects.geometry import Ring, SiteGeometry, vertex_count

logger = logging.getLogger(__name__)

# Accuracy assumed for a fix that reports none (metres)
DEFAULT_ACCURACY_M = 15.0
# Tolerance added around polygon vertices on top of the fix accuracy
DEFAULT_BUFFER_M = 50.0
# Extra slack for the backend-supplied centre, which is only approximate
CENTER_EXTRA_BUFFER_M = 50.0


@dataclass(frozen=True)
class SitePresence:
    """Outcome of a presence check, with the numbers that produced it."""

    on_site: bool
    match: PresenceMatch
    distance_m: float | None = None  # nearest vertex / centre distance
    allowed_m: float | None = None
    polygon_index: int | None = None
    ring_index: int | None = None
    reason: str = ""


def distance(a: GeoPoint, b: GeoPoint) -> float:
    """Haversine distance in metres; only latitude/longitude are used."""
    return a.distance_m(b)


def point_in_ring(point: GeoPoint, ring: Ring) -> bool:
    """Ray-casting containment test with x = longitude, y = latitude.

    The ring is closed implicitly by pairing each vertex with its
    predecessor. Fewer than 3 vertices is never inside. Points exactly on
    an edge may go either way.
    """
    n = len(ring)
    if n < 3:
        return False

    x = point.longitude
    y = point.latitude
    inside = False

    for i in range(n):
        j = (i - 1 + n) % n
        xi, yi = ring[i].longitude, ring[i].latitude
        xj, yj = ring[j].longitude, ring[j].latitude

        if (yi > y) != (yj > y):
            x_intersect = (xj - xi) * (y - yi) / (yj - yi) + xi
            if x < x_intersect:
                inside = not inside

    return inside


def _min_vertex_distance(point: GeoPoint, ring: Ring) -> float:
    return min((distance(point, vertex) for vertex in ring), default=math.inf)


def evaluate_site_presence(
    user_location: GeoPoint | None,
    site_geometry: SiteGeometry | None = None,
    site_center: GeoPoint | None = None,
    buffer: float = DEFAULT_BUFFER_M,
    default_accuracy: float = DEFAULT_ACCURACY_M,
    center_extra_buffer: float = CENTER_EXTRA_BUFFER_M,
) -> SitePresence:
    """Run the layered presence check and explain the result.

    Args:
        user_location: latest device fix, or None when there is none yet.
        site_geometry: polygons of the site, already normalized to (lat, lon).
        site_center: approximate centre, used only without geometry.
        buffer: proximity tolerance in metres added to the fix accuracy.
        default_accuracy: accuracy substituted when the fix has none.
        center_extra_buffer: extra metres allowed around the centre.

    Returns:
        SitePresence whose `on_site` is the gate decision.
    """
    if user_location is None:
        logger.debug("Presence check: no user location")
        return SitePresence(
            on_site=False,
            match=PresenceMatch.NO_LOCATION,
            reason="No user location",
        )

    accuracy = user_location.accuracy_or(default_accuracy)
    logger.debug(
        "Presence check for (%f, %f), accuracy=%.1fm",
        user_location.latitude, user_location.longitude, accuracy,
    )

    if site_geometry:
        total_buffer = accuracy + buffer
        nearest = math.inf
        logger.debug(
            "Checking %d polygon(s), %d vertices",
            len(site_geometry), vertex_count(site_geometry),
        )

        for i, polygon in enumerate(site_geometry):
            for j, ring in enumerate(polygon):
                if point_in_ring(user_location, ring):
                    logger.debug("User is inside polygon [%d][%d]", i, j)
                    return SitePresence(
                        on_site=True,
                        match=PresenceMatch.INSIDE_POLYGON,
                        distance_m=0.0,
                        allowed_m=total_buffer,
                        polygon_index=i,
                        ring_index=j,
                        reason=f"Inside polygon [{i}][{j}]",
                    )

                min_distance = _min_vertex_distance(user_location, ring)
                logger.debug(
                    "Distance to polygon [%d][%d]: %.2fm (buffer %.2fm)",
                    i, j, min_distance, total_buffer,
                )
                if min_distance <= total_buffer:
                    return SitePresence(
                        on_site=True,
                        match=PresenceMatch.NEAR_POLYGON,
                        distance_m=min_distance,
                        allowed_m=total_buffer,
                        polygon_index=i,
                        ring_index=j,
                        reason=(
                            f"Within {total_buffer:.1f}m of polygon [{i}][{j}] "
                            f"({min_distance:.1f}m)"
                        ),
                    )
                nearest = min(nearest, min_distance)

        logger.debug("User is not inside or near any polygon")
        return SitePresence(
            on_site=False,
            match=PresenceMatch.OUTSIDE,
            distance_m=None if math.isinf(nearest) else nearest,
            allowed_m=total_buffer,
            reason="Not inside or near any site polygon",
        )

    if site_center is not None:
        center_distance = distance(user_location, site_center)
        allowed = accuracy + buffer + center_extra_buffer
        on_site = center_distance <= allowed
        logger.debug(
            "No polygons, distance to centre %.2fm (allowed %.2fm)",
            center_distance, allowed,
        )
        return SitePresence(
            on_site=on_site,
            match=PresenceMatch.NEAR_CENTER if on_site else PresenceMatch.OUTSIDE,
            distance_m=center_distance,
            allowed_m=allowed,
            reason=(
                f"{center_distance:.1f}m from site centre "
                f"({'within' if on_site else 'beyond'} {allowed:.1f}m)"
            ),
        )

    logger.debug("No site geometry or centre to check against")
    return SitePresence(
        on_site=False,
        match=PresenceMatch.NO_SITE_DATA,
        reason="Site has no boundary or centre",
    )


def is_user_on_site(
    user_location: GeoPoint | None,
    site_geometry: SiteGeometry | None = None,
    site_center: GeoPoint | None = None,
    buffer: float = DEFAULT_BUFFER_M,
) -> bool:
    """True if the user may perform on-site actions at this site."""
    return evaluate_site_presence(
        user_location, site_geometry, site_center, buffer
    ).on_site
