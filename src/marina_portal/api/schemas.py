"""Pydantic schemas for API request/response models."""

from datetime import date, datetime, time
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from marina_portal.scheduling.types import (
    BarLayer,
    RequestStatus,
    TimeOffForm,
    TimeOffKind,
)


class ErrorResponse(BaseModel):
    """Generic error body."""

    detail: Any
    code: str | None = None


# ============================================================================
# Roster schemas
# ============================================================================


class EmployeeResponse(BaseModel):
    """Roster entry, including the legend color."""

    model_config = ConfigDict(from_attributes=True)

    employee_id: str
    name: str
    position: str
    pto_hours: float
    psl_hours: float
    color: str | None = None
    legend_color: str


class EmployeeListResponse(BaseModel):
    items: list[EmployeeResponse]
    total: int


class RosterReloadResponse(BaseModel):
    """Result of refreshing the roster and template caches."""

    model_config = ConfigDict(from_attributes=True)

    roster_refreshed: bool
    templates_refreshed: bool
    employee_count: int
    template_count: int


# ============================================================================
# Time-off schemas
# ============================================================================


class TimeOffCreate(BaseModel):
    """Time-off request form."""

    model_config = ConfigDict(populate_by_name=True)

    kind: TimeOffKind = Field(alias="type")
    employee_id: str
    full_day: bool = True
    start_date: date
    end_date: date
    start_time: time = time(8, 0)
    end_time: time = time(16, 0)
    notes: str = ""

    @field_validator("employee_id", mode="before")
    @classmethod
    def _employee_id_to_str(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v

    def to_form(self) -> TimeOffForm:
        return TimeOffForm(
            kind=self.kind,
            employee_id=self.employee_id,
            full_day=self.full_day,
            start_date=self.start_date,
            end_date=self.end_date,
            start_time=self.start_time,
            end_time=self.end_time,
            notes=self.notes,
        )


class TimeOffResponse(BaseModel):
    """Recorded time-off request."""

    model_config = ConfigDict(from_attributes=True)

    request_id: str
    employee_id: str
    kind: TimeOffKind
    start_at: datetime
    end_at: datetime
    hours: float
    notes: str
    status: RequestStatus
    created_at: datetime
    verification_needed: bool


class TimeOffListResponse(BaseModel):
    items: list[TimeOffResponse]
    total: int


class RejectionDetail(BaseModel):
    """Body of a rejected time-off submission."""

    message: str = "Not approved"
    reasons: list[str]


# ============================================================================
# Week grid schemas
# ============================================================================


class BarResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    layer: BarLayer
    lane_key: str
    lane_index: int
    left_minutes: int
    width_minutes: int
    left_pct: float
    width_pct: float
    top_px: int
    label: str
    title: str
    css_class: str
    employee_id: str | None = None
    request_id: str | None = None
    background_color: str | None = None
    border_color: str | None = None


class DayRowResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    day: date
    weekday_label: str
    date_label: str
    lanes: dict[str, int]
    track_height_px: int
    bars: list[BarResponse]


class HourTickResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    hour: int
    label: str
    left_pct: float


class WeekGridResponse(BaseModel):
    """Positioned layout of one week."""

    model_config = ConfigDict(from_attributes=True)

    week_start: date
    title: str
    previous_week: date
    next_week: date
    today_week: date
    ticks: list[HourTickResponse]
    days: list[DayRowResponse]


# ============================================================================
# Admin schemas
# ============================================================================


class EmployeeTotalsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    employee_id: str
    name: str
    position: str
    requested: float
    approved: float
    taken: float
    pto_requested: float
    pto_approved: float
    pto_taken: float
    sick_requested: float
    sick_approved: float
    sick_taken: float


class AdminTotalsResponse(BaseModel):
    year: int
    available_years: list[int]
    rows: list[EmployeeTotalsResponse]
