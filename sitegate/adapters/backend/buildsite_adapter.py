"""Backend object-details adapter — implements SiteRepository."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from sitegate.adapters.backend.normalizer import normalize_center, normalize_geometry
from sitegate.application.errors import BackendUnavailableError, InvalidSiteDataError
from sitegate.application.ports.site_repo import SiteRepository
from sitegate.config import settings
from sitegate.domain.entities.site import Site
from sitegate.domain.value_objects.enums import CoordinateOrder

logger = logging.getLogger(__name__)

OBJECT_DATA_PATH = "/buildsite/getObjectData"


class BuildsiteApiAdapter(SiteRepository):
    """Reads site polygons and centre from `buildsite/getObjectData`."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        polygon_order: CoordinateOrder | None = None,
        center_order: CoordinateOrder | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or settings.backend_url).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.backend_timeout
        self._polygon_order = polygon_order or settings.polygon_coordinate_order
        self._center_order = center_order or settings.center_coordinate_order
        self._transport = transport

    async def get_site(self, site_id: int, token: str | None = None) -> Site | None:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(
                    OBJECT_DATA_PATH,
                    params={"id": site_id, "details": "true"},
                    headers=headers,
                )
        except httpx.HTTPError as e:
            logger.exception("Backend request failed for site %s", site_id)
            raise BackendUnavailableError(f"Backend request failed: {e}") from e

        if response.status_code == 404:
            logger.info("Site %s not found on backend", site_id)
            return None
        if response.is_error:
            logger.warning(
                "Backend answered %d for site %s", response.status_code, site_id,
            )
            raise BackendUnavailableError(
                f"Backend answered HTTP {response.status_code} for site {site_id}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise InvalidSiteDataError(f"Site {site_id}: response is not JSON") from e

        return self._to_site(site_id, payload)

    def _to_site(self, site_id: int, payload: Any) -> Site:
        if not isinstance(payload, dict):
            raise InvalidSiteDataError(f"Site {site_id}: expected a JSON object")

        try:
            geometry = normalize_geometry(payload.get("coordinates"), self._polygon_order)
        except (ValueError, TypeError) as e:
            raise InvalidSiteDataError(f"Site {site_id}: {e}") from e

        # The centre only matters for sites without polygons
        try:
            center = normalize_center(payload.get("geo_data"), self._center_order)
        except (ValueError, TypeError) as e:
            if not geometry:
                raise InvalidSiteDataError(f"Site {site_id}: {e}") from e
            logger.warning("Site %s: ignoring malformed centre: %s", site_id, e)
            center = None

        backend_id = payload.get("id")
        if isinstance(backend_id, bool) or not isinstance(backend_id, int):
            backend_id = site_id

        site = Site(
            id=backend_id,
            name=payload.get("sitename") or "",
            geometry=geometry,
            center=center,
        )
        logger.info(
            "Loaded site %s (%s): %d polygon(s), centre=%s",
            site.id, site.name, len(site.geometry), site.center is not None,
        )
        return site
