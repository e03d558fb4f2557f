"""CheckSiteAccessUseCase — may this user perform a gated action here?"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sitegate.application.errors import SiteNotFoundError
from sitegate.application.ports.site_repo import SiteRepository
from sitegate.domain.policies.geofence import (
    CENTER_EXTRA_BUFFER_M,
    DEFAULT_ACCURACY_M,
    DEFAULT_BUFFER_M,
    SitePresence,
    evaluate_site_presence,
)
from sitegate.domain.value_objects.enums import GatedAction
from sitegate.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)

OFF_SITE_MESSAGE = "You must be on the site to perform this action"
ON_SITE_MESSAGE = "Action allowed"


@dataclass
class AccessDecision:
    """Gate outcome for one action attempt."""

    site_id: int
    action: GatedAction
    allowed: bool
    presence: SitePresence
    message: str


class CheckSiteAccessUseCase:
    """Loads a site and runs the geofence policy for a gated action."""

    def __init__(
        self,
        site_repo: SiteRepository,
        buffer_m: float = DEFAULT_BUFFER_M,
        default_accuracy_m: float = DEFAULT_ACCURACY_M,
        center_extra_buffer_m: float = CENTER_EXTRA_BUFFER_M,
    ):
        self._sites = site_repo
        self._buffer = buffer_m
        self._default_accuracy = default_accuracy_m
        self._center_extra = center_extra_buffer_m

    async def execute(
        self,
        site_id: int,
        action: GatedAction,
        user_location: GeoPoint | None,
        token: str | None = None,
    ) -> AccessDecision:
        """Decide whether `action` is allowed at `site_id`.

        Raises:
            SiteNotFoundError: the backend has no such site.
            BackendUnavailableError, InvalidSiteDataError: from the repository.
        """
        site = await self._sites.get_site(site_id, token)
        if site is None:
            raise SiteNotFoundError(site_id)

        presence = evaluate_site_presence(
            user_location,
            site.geometry,
            site.center,
            buffer=self._buffer,
            default_accuracy=self._default_accuracy,
            center_extra_buffer=self._center_extra,
        )
        logger.info(
            "Site %s, action=%s: %s (%s)",
            site_id, action.value,
            "ON SITE" if presence.on_site else "OFF SITE", presence.reason,
        )

        return AccessDecision(
            site_id=site_id,
            action=action,
            allowed=presence.on_site,
            presence=presence,
            message=ON_SITE_MESSAGE if presence.on_site else OFF_SITE_MESSAGE,
        )
