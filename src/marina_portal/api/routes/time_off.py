"""Time-off request endpoints."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from marina_portal.api.dependencies import DbSession, Now, Snapshot
from marina_portal.api.schemas import (
    ErrorResponse,
    RejectionDetail,
    TimeOffCreate,
    TimeOffListResponse,
    TimeOffResponse,
)
from marina_portal.services import TimeOffService

router = APIRouter(prefix="/time-off", tags=["time-off"])


@router.post(
    "",
    response_model=TimeOffResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
)
async def submit_time_off(
    db: DbSession,
    snapshot: Snapshot,
    now: Now,
    payload: TimeOffCreate,
) -> TimeOffResponse:
    """Evaluate a request; record it and deduct the balance when approved."""
    result = await TimeOffService(db).submit(payload.to_form(), snapshot, now)
    if result.record is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=RejectionDetail(reasons=result.reasons).model_dump(),
        )
    await db.commit()
    return TimeOffResponse.model_validate(result.record)


@router.get("", response_model=TimeOffListResponse)
async def list_time_off(
    db: DbSession,
    employee_id: Annotated[str | None, Query()] = None,
) -> TimeOffListResponse:
    """List recorded requests, optionally for one employee."""
    records = await TimeOffService(db).list_requests(employee_id)
    return TimeOffListResponse(
        items=[TimeOffResponse.model_validate(r) for r in records],
        total=len(records),
    )
