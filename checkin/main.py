# =======================================================================================
# checkin/main.py - FastAPI Application Entry Point
# =======================================================================================
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import config
from .api.routes.auth import router as auth_router
from .api.routes.attendees import router as attendees_router
from .api.routes.checkin import router as checkin_router
from .api.routes.dashboard import router as dashboard_router
from .api.routes.growth import router as growth_router
from .api.routes.settings import router as settings_router
from .database import db_manager
from .models.schemas import HealthResponse
from .utils.logger import setup_logging

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    setup_logging(config.LOG_LEVEL)

    app = FastAPI(
        title="Prayer Meeting Check-In API",
        version=__version__,
        description="Attendance check-in, admin dashboard and growth calculator",
        debug=config.API_DEBUG,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(checkin_router, prefix="/api", tags=["check-in"])
    app.include_router(auth_router, prefix="/api", tags=["auth"])
    app.include_router(dashboard_router, prefix="/api", tags=["dashboard"])
    app.include_router(attendees_router, prefix="/api", tags=["attendees"])
    app.include_router(settings_router, prefix="/api", tags=["settings"])
    app.include_router(growth_router, prefix="/api", tags=["growth"])

    @app.get("/api/health", response_model=HealthResponse, tags=["health"])
    def api_health():
        try:
            db_manager.fetch_one("SELECT 1")
            return HealthResponse(status="ok", dataAvailable=True, message=None)
        except Exception as e:
            logger.error("Health check failed: %s", e)
            return HealthResponse(status="error", dataAvailable=False, message=str(e))

    @app.get("/health")
    def legacy_health():
        return {"status": "ok", "dataAvailable": True}

    @app.on_event("startup")
    async def startup_event():
        db_manager.create_schema()
        logger.info("Prayer Meeting Check-In API started")

    return app


app = create_app()
