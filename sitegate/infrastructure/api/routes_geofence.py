"""Geofence endpoints — ad-hoc evaluation and per-site action gating."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from sitegate.adapters.backend.normalizer import normalize_center, normalize_geometry
from sitegate.application.errors import (
    BackendUnavailableError,
    InvalidSiteDataError,
    SiteNotFoundError,
)
from sitegate.application.use_cases.check_site_access import CheckSiteAccessUseCase
from sitegate.config import settings
from sitegate.domain.policies.geofence import evaluate_site_presence
from sitegate.infrastructure.api.dependencies import (
    get_bearer_token,
    get_check_site_access_uc,
)
from sitegate.infrastructure.api.schemas import (
    AccessRequest,
    AccessResponse,
    EvaluateRequest,
    PresenceResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["geofence"])


@router.post("/geofence/evaluate", response_model=PresenceResponse)
async def evaluate(body: EvaluateRequest):
    """Evaluate a fix against geometry supplied in the request."""
    try:
        geometry = normalize_geometry(body.geometry, body.coordinate_order)
        center = normalize_center(body.center, body.coordinate_order)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    presence = evaluate_site_presence(
        body.user_location.to_geo_point() if body.user_location else None,
        geometry,
        center,
        buffer=body.buffer_m if body.buffer_m is not None else settings.proximity_buffer_m,
        default_accuracy=settings.default_accuracy_m,
        center_extra_buffer=settings.center_extra_buffer_m,
    )
    return PresenceResponse.from_presence(presence)


@router.post("/sites/{site_id}/access", response_model=AccessResponse)
async def check_access(
    site_id: int,
    body: AccessRequest,
    token: str | None = Depends(get_bearer_token),
    access_uc: CheckSiteAccessUseCase = Depends(get_check_site_access_uc),
):
    """Gate a write action on the user's presence at the site."""
    try:
        decision = await access_uc.execute(
            site_id,
            body.action,
            body.user_location.to_geo_point() if body.user_location else None,
            token=token,
        )
    except SiteNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidSiteDataError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except BackendUnavailableError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return AccessResponse(
        site_id=decision.site_id,
        action=decision.action,
        allowed=decision.allowed,
        message=decision.message,
        presence=PresenceResponse.from_presence(decision.presence),
    )
