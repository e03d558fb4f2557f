"""Request / response models shared by the API routers."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from sitegate.domain.policies.geofence import SitePresence
from sitegate.domain.value_objects.enums import CoordinateOrder, GatedAction, PresenceMatch
from sitegate.domain.value_objects.geo_point import GeoPoint


class UserLocation(BaseModel):
    latitude: float
    longitude: float
    accuracy: float | None = Field(default=None, ge=0)

    def to_geo_point(self) -> GeoPoint:
        return GeoPoint(
            latitude=self.latitude,
            longitude=self.longitude,
            accuracy=self.accuracy,
        )


class EvaluateRequest(BaseModel):
    user_location: UserLocation | None = None
    # Raw backend shape: polygons → rings → {latitude, longitude} or [a, b]
    geometry: list[list[list[Any]]] | None = None
    center: dict[str, Any] | list[float] | None = None
    coordinate_order: CoordinateOrder = CoordinateOrder.LAT_LON
    buffer_m: float | None = Field(default=None, ge=0)


class PresenceResponse(BaseModel):
    on_site: bool
    match: PresenceMatch
    distance_m: float | None = None
    allowed_m: float | None = None
    polygon_index: int | None = None
    ring_index: int | None = None
    reason: str

    @classmethod
    def from_presence(cls, presence: SitePresence) -> "PresenceResponse":
        return cls(
            on_site=presence.on_site,
            match=presence.match,
            distance_m=presence.distance_m,
            allowed_m=presence.allowed_m,
            polygon_index=presence.polygon_index,
            ring_index=presence.ring_index,
            reason=presence.reason,
        )


class AccessRequest(BaseModel):
    action: GatedAction
    user_location: UserLocation | None = None


class AccessResponse(BaseModel):
    site_id: int
    action: GatedAction
    allowed: bool
    message: str
    presence: PresenceResponse
