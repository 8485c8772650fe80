"""Week grid endpoints."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Query
from fastapi.responses import Response

from marina_portal.api.dependencies import DbSession, Now, Snapshot
from marina_portal.api.schemas import WeekGridResponse
from marina_portal.scheduling.grid import WeekGridRenderer
from marina_portal.scheduling.policy import start_of_week
from marina_portal.scheduling.reports import (
    build_week_csv,
    requests_in_week,
    week_csv_filename,
)
from marina_portal.services import TimeOffService

router = APIRouter(prefix="/schedule", tags=["schedule"])


def csv_download(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/week", response_model=WeekGridResponse)
async def get_week(
    db: DbSession,
    snapshot: Snapshot,
    now: Now,
    day: Annotated[date | None, Query(alias="date")] = None,
) -> WeekGridResponse:
    """Lay out the week containing ``date`` (default: this week)."""
    requests = await TimeOffService(db).list_requests()
    grid = WeekGridRenderer().render(day or now.date(), snapshot, requests, today=now.date())
    return WeekGridResponse.model_validate(grid)


@router.get("/week/export")
async def export_week(
    db: DbSession,
    snapshot: Snapshot,
    now: Now,
    day: Annotated[date | None, Query(alias="date")] = None,
) -> Response:
    """CSV of the requests that touch the week containing ``date``."""
    week_start = start_of_week(day or now.date())
    requests = requests_in_week(await TimeOffService(db).list_requests(), week_start)
    return csv_download(build_week_csv(requests, snapshot), week_csv_filename(week_start))
