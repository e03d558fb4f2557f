"""Backend geometry normalization — raw records to canonical GeoPoints.

The backend stores polygon vertices with their field names swapped
(a `latitude` field holding the longitude). Everything coming from outside
passes through here with an explicit CoordinateOrder tag so the geofence
policy can take field names at face value.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from sitegate.domain.value_objects.enums import CoordinateOrder
from sitegate.domain.value_objects.geo_point import GeoPoint
from sitegate.domain.value_objects.geometry import Polygon, Ring, SiteGeometry


def _as_float(value: Any, field: str) -> float:
    # bool is an int subclass, but never a coordinate
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Invalid {field}: {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid {field}: {value!r}") from None


def to_geo_point(
    raw: Mapping[str, Any] | Sequence[Any],
    order: CoordinateOrder = CoordinateOrder.LAT_LON,
) -> GeoPoint:
    """Convert one raw record to a GeoPoint.

    Accepts either a mapping with `latitude`/`longitude` (and optional
    `accuracy`) keys, or a 2- or 3-element sequence `[first, second, accuracy?]`.
    Under LON_LAT the first/`latitude` value is taken as the longitude.

    Raises:
        ValueError: missing field or non-numeric value.
    """
    if isinstance(raw, Mapping):
        if "latitude" not in raw or "longitude" not in raw:
            raise ValueError(f"Coordinate record needs latitude and longitude: {raw!r}")
        first = _as_float(raw["latitude"], "latitude")
        second = _as_float(raw["longitude"], "longitude")
        raw_accuracy = raw.get("accuracy")
    elif isinstance(raw, Sequence) and not isinstance(raw, (str, bytes)):
        if len(raw) not in (2, 3):
            raise ValueError(f"Coordinate pair must have 2 or 3 items: {raw!r}")
        first = _as_float(raw[0], "coordinate")
        second = _as_float(raw[1], "coordinate")
        raw_accuracy = raw[2] if len(raw) == 3 else None
    else:
        raise ValueError(f"Unsupported coordinate record: {raw!r}")

    accuracy = None if raw_accuracy is None else _as_float(raw_accuracy, "accuracy")
    if accuracy is not None and accuracy < 0:
        raise ValueError(f"Accuracy must be non-negative: {accuracy}")

    if CoordinateOrder(order) is CoordinateOrder.LON_LAT:
        return GeoPoint(latitude=second, longitude=first, accuracy=accuracy)
    return GeoPoint(latitude=first, longitude=second, accuracy=accuracy)


def normalize_ring(raw: Sequence[Any], order: CoordinateOrder) -> Ring:
    return [to_geo_point(point, order) for point in raw]


def normalize_polygon(raw: Sequence[Any], order: CoordinateOrder) -> Polygon:
    return [normalize_ring(ring, order) for ring in raw]


def normalize_geometry(raw: Sequence[Any] | None, order: CoordinateOrder) -> SiteGeometry:
    """Normalize a nested polygon list; None or [] gives an empty geometry."""
    if not raw:
        return []
    if isinstance(raw, (str, bytes, Mapping)):
        raise ValueError(f"Geometry must be a list of polygons: {raw!r}")
    return [normalize_polygon(polygon, order) for polygon in raw]


def normalize_center(
    raw: Mapping[str, Any] | Sequence[Any] | None,
    order: CoordinateOrder,
) -> GeoPoint | None:
    if raw is None:
        return None
    return to_geo_point(raw, order)
