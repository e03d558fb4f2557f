"""Site entity — a construction site with its boundary and fallback centre."""

from dataclasses import dataclass, field

from sitegate.domain.value_objects.geo_point import GeoPoint
from sitegate.domain.value_objects.geometry import SiteGeometry


@dataclass
class Site:
    id: int
    name: str
    geometry: SiteGeometry = field(default_factory=list)
    center: GeoPoint | None = None

    def has_geometry(self) -> bool:
        return bool(self.geometry)

    def has_location_data(self) -> bool:
        return self.has_geometry() or self.center is not None
