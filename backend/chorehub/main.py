"""ChoreHub API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ChoreHubError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Services are built on startup via the lifespan and closed on shutdown,
      unless the caller injected them (tests)

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_app() factory plus a module-level app for `uvicorn chorehub.main:app`
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chorehub.api.error_handlers import register_error_handlers
from chorehub.api.routes import (
    activities, chores, health, households, invites, live, members, workload,
)
from chorehub.config import Settings, get_settings
from chorehub.infrastructure.observability import setup_logging
from chorehub.services.composition import Services, build_services

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None, services: Services | None = None,
) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        owned = services is None
        app.state.services = services or build_services(settings)
        db = app.state.services.db
        if owned and db is not None and settings.database_url.startswith("sqlite"):
            await db.create_all()
        logger.info("ChoreHub API started")
        yield
        logger.info("ChoreHub API shutting down")
        if owned:
            await app.state.services.close()

    app = FastAPI(title="ChoreHub API", version="1.0.0", lifespan=lifespan)
    if services is not None:
        app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(households.router)
    app.include_router(chores.router)
    app.include_router(members.router)
    app.include_router(workload.router)
    app.include_router(invites.router)
    app.include_router(activities.router)
    app.include_router(live.router)

    register_error_handlers(app)
    return app


app = create_app()
