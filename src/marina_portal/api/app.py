"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from marina_portal import __version__
from marina_portal.api.routes import (
    admin_router,
    employees_router,
    health_router,
    schedule_router,
    time_off_router,
)
from marina_portal.config import get_settings
from marina_portal.database import create_tables, dispose_db, get_session
from marina_portal.services import RosterService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    settings = get_settings()
    await create_tables()
    if settings.sync_on_startup:
        async with get_session() as session:
            await RosterService(session).sync_from_sources(
                settings.roster_path, settings.weekly_shifts_path
            )
    yield
    await dispose_db()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Marina Portal API",
        description="Employee schedule, time-off eligibility and week grid layout",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            },
        )

    app.include_router(health_router)
    app.include_router(employees_router, prefix="/api/v1")
    app.include_router(time_off_router, prefix="/api/v1")
    app.include_router(schedule_router, prefix="/api/v1")
    app.include_router(admin_router, prefix="/api/v1")

    return app


# Default app instance for uvicorn
app = create_app()
