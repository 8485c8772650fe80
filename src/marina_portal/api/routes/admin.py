"""Admin-only totals and exports."""

from typing import Annotated

from fastapi import APIRouter, Query
from fastapi.responses import Response

from marina_portal.api.dependencies import AdminAccess, DbSession, Now, Snapshot
from marina_portal.api.routes.schedule import csv_download
from marina_portal.api.schemas import AdminTotalsResponse, EmployeeTotalsResponse
from marina_portal.scheduling.reports import (
    admin_csv_filename,
    build_admin_csv,
    year_options,
    yearly_totals,
)
from marina_portal.services import TimeOffService

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/totals", response_model=AdminTotalsResponse)
async def get_totals(
    _admin: AdminAccess,
    db: DbSession,
    snapshot: Snapshot,
    now: Now,
    year: Annotated[int | None, Query()] = None,
) -> AdminTotalsResponse:
    """Requested / approved / taken hours per employee for a year."""
    year = year or now.year
    requests = await TimeOffService(db).list_requests()
    totals = yearly_totals(snapshot, requests, year, now)
    return AdminTotalsResponse(
        year=year,
        available_years=year_options(now.date()),
        rows=[EmployeeTotalsResponse.model_validate(t) for t in totals],
    )


@router.get("/totals/export")
async def export_totals(
    _admin: AdminAccess,
    db: DbSession,
    snapshot: Snapshot,
    now: Now,
    year: Annotated[int | None, Query()] = None,
) -> Response:
    """Yearly totals as CSV."""
    year = year or now.year
    requests = await TimeOffService(db).list_requests()
    totals = yearly_totals(snapshot, requests, year, now)
    return csv_download(build_admin_csv(totals, year), admin_csv_filename(year))
