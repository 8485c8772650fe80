"""Service health: database reachability and the cached roster it serves."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, status
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from marina_portal.api.dependencies import DbSession
from marina_portal.services import RosterService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    database: str
    employee_count: int | None = None
    template_count: int | None = None


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
)
async def health_check(db: DbSession) -> HealthResponse:
    """Report database state and the size of the cached roster.

    An empty roster is reported as ``degraded``: the week grid and the
    time-off form have nothing to show until a sync succeeds.
    """
    try:
        snapshot = await RosterService(db).load_snapshot()
    except SQLAlchemyError:
        logger.warning("Database health check failed", exc_info=True)
        return HealthResponse(
            status="degraded",
            timestamp=datetime.now(timezone.utc),
            database="unhealthy",
        )

    return HealthResponse(
        status="healthy" if snapshot.employees else "degraded",
        timestamp=datetime.now(timezone.utc),
        database="healthy",
        employee_count=len(snapshot.employees),
        template_count=len(snapshot.templates),
    )
