"""GeoPoint value object — immutable (lat, lon) fix with optional accuracy."""

import math
from dataclasses import dataclass

EARTH_RADIUS_M = 6_371_000.0


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float
    accuracy: float | None = None  # metres, horizontal uncertainty radius

    def distance_m(self, other: "GeoPoint") -> float:
        """Great-circle distance in metres between two points (Haversine)."""
        lat1 = math.radians(self.latitude)
        lat2 = math.radians(other.latitude)
        dlat = math.radians(other.latitude - self.latitude)
        dlon = math.radians(other.longitude - self.longitude)

        a = (
            math.sin(dlat / 2) ** 2
            + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
        )
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

        return EARTH_RADIUS_M * c

    def accuracy_or(self, default: float) -> float:
        """Accuracy radius, or `default` when the fix carries none."""
        return default if self.accuracy is None else self.accuracy
