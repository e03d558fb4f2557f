"""Health check endpoint."""

from fastapi import APIRouter

from sitegate.config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Liveness probe; the backend itself is not contacted."""
    return {
        "status": "ok",
        "service": "SiteGate - construction site geofence",
        "backend": settings.backend_url,
    }
