"""SiteGate — FastAPI application factory."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sitegate.config import settings
from sitegate.infrastructure.api.routes_geofence import router as geofence_router
from sitegate.infrastructure.api.routes_health import router as health_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s | %(message)s",
    )

    app = FastAPI(
        title="SiteGate — construction site geofence",
        description="On-site presence checks gating inspection write actions",
        version="0.1.0",
    )

    # CORS for the Expo web build
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router, prefix="/api")
    app.include_router(geofence_router, prefix="/api")

    logger.info("SiteGate ready, backend=%s", settings.backend_url)
    return app


app = create_app()
