"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

from fastapi import Header

from sitegate.adapters.backend.buildsite_adapter import BuildsiteApiAdapter
from sitegate.application.ports.site_repo import SiteRepository
from sitegate.application.use_cases.check_site_access import CheckSiteAccessUseCase
from sitegate.config import settings

# Stateless adapter, safe to share across requests
_site_adapter = BuildsiteApiAdapter()


def get_site_repo() -> SiteRepository:
    return _site_adapter


def get_bearer_token(authorization: str | None = Header(default=None)) -> str | None:
    """Extract the raw token from an `Authorization: Bearer ...` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_check_site_access_uc() -> CheckSiteAccessUseCase:
    return CheckSiteAccessUseCase(
        site_repo=get_site_repo(),
        buffer_m=settings.proximity_buffer_m,
        default_accuracy_m=settings.default_accuracy_m,
        center_extra_buffer_m=settings.center_extra_buffer_m,
    )
