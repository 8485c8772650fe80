"""Roster endpoints."""

from fastapi import APIRouter, status

from marina_portal.api.dependencies import AppSettings, DbSession, Snapshot
from marina_portal.api.schemas import (
    EmployeeListResponse,
    EmployeeResponse,
    RosterReloadResponse,
)
from marina_portal.scheduling.snapshot import DEFAULT_COLOR
from marina_portal.services import RosterService

router = APIRouter(tags=["roster"])


@router.get("/employees", response_model=EmployeeListResponse)
async def list_employees(snapshot: Snapshot) -> EmployeeListResponse:
    """Roster in display order, with legend colors."""
    items = [
        EmployeeResponse(
            employee_id=e.employee_id,
            name=e.name,
            position=e.position,
            pto_hours=e.pto_hours,
            psl_hours=e.psl_hours,
            color=e.color,
            legend_color=e.color or DEFAULT_COLOR,
        )
        for e in snapshot.employees
    ]
    return EmployeeListResponse(items=items, total=len(items))


@router.post(
    "/roster/reload",
    response_model=RosterReloadResponse,
    status_code=status.HTTP_200_OK,
)
async def reload_roster(db: DbSession, settings: AppSettings) -> RosterReloadResponse:
    """Refresh roster and weekly templates from their source files.

    Each source replaces its cache only when it loads cleanly.
    """
    result = await RosterService(db).sync_from_sources(
        settings.roster_path, settings.weekly_shifts_path
    )
    await db.commit()
    return RosterReloadResponse.model_validate(result)
