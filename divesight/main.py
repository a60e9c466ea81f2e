# divesight/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from divesight.api.routes.api import api_router
from divesight.core.config import Settings, settings
from divesight.core.logging_config import configure_logging
from divesight.db.init_db import init_db
from divesight.db.session import SessionLocal
from divesight.services.fish_sighting_service import SightingRotator
from divesight.services.scheduler import RotationScheduler, build_rotation_jobs

logger = logging.getLogger(__name__)


def create_scheduler(config: Settings) -> RotationScheduler:
    rotator = SightingRotator(
        SessionLocal,
        center_lat=config.diving_area_lat,
        center_lon=config.diving_area_lon,
        radius_km=config.diving_area_radius_km,
    )
    return RotationScheduler(build_rotation_jobs(config, rotator))


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()

    scheduler = None
    if settings.sighting_updates_enabled:
        scheduler = create_scheduler(settings)
        scheduler.start()
    app.state.scheduler = scheduler

    logger.info("Server ready")
    try:
        yield
    finally:
        if scheduler is not None:
            await scheduler.stop()


def create_application() -> FastAPI:
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # ---------- CORS ----------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.backend_cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # ---------- ROUTERS ----------
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/healthz", tags=["health"])
    def healthz():
        return {"status": "ok"}

    return app


app = create_application()
