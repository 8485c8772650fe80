"""Roster and weekly-shift source files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from marina_portal.scheduling.errors import InvalidRecordError, SourceUnavailableError
from marina_portal.scheduling.types import Employee, ShiftEntry, WeeklyShiftTemplate


class RosterEntry(BaseModel):
    """One employee object in the roster file."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    position: str = ""
    pto_hours: float = Field(default=0.0, alias="ptoHours", ge=0)
    psl_hours: float = Field(default=0.0, alias="pslHours", ge=0)
    color: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, v: Any) -> str:
        return str(v) if v is not None else v

    @field_validator("pto_hours", "psl_hours", mode="before")
    @classmethod
    def _missing_balance(cls, v: Any) -> Any:
        return 0.0 if v is None else v

    @field_validator("position", mode="before")
    @classmethod
    def _position_default(cls, v: Any) -> str:
        return "" if v is None else str(v)


class ShiftIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    weekday: int = Field(ge=0, le=6)
    start: str = "07:00"
    end: str = "17:00"

    @field_validator("start", "end", mode="before")
    @classmethod
    def _blank_clock(cls, v: Any, info: ValidationInfo) -> Any:
        if v in (None, ""):
            return "07:00" if info.field_name == "start" else "17:00"
        return str(v)


class TemplateEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    employee_name: str = Field(alias="employeeName")
    shifts: list[ShiftIn] = Field(default_factory=list)


class WeeklyShiftsFile(BaseModel):
    """Top-level weekly-shift document: ``{"data": [...]}``."""

    model_config = ConfigDict(extra="ignore")

    data: list[TemplateEntry]


def _read_json(path: str | Path) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise SourceUnavailableError(str(path), str(e)) from e


def parse_roster(payload: Any, source: str = "roster") -> list[Employee]:
    """Validate a roster payload (JSON array) into employees in file order."""
    if not isinstance(payload, list):
        raise SourceUnavailableError(source, "roster is not a JSON array")
    try:
        entries = [RosterEntry.model_validate(item) for item in payload]
        employees = [
            Employee(
                employee_id=e.id,
                name=e.name,
                position=e.position,
                pto_hours=e.pto_hours,
                psl_hours=e.psl_hours,
                color=e.color,
                roster_order=i,
            )
            for i, e in enumerate(entries)
        ]
    except (ValidationError, InvalidRecordError) as e:
        raise SourceUnavailableError(source, str(e)) from e

    # Employee ids key the stored roster and the grid lanes.
    seen: set[str] = set()
    for employee in employees:
        if employee.employee_id in seen:
            raise SourceUnavailableError(
                source, f"duplicate employee id {employee.employee_id!r}"
            )
        seen.add(employee.employee_id)
    return employees


def parse_weekly_shifts(payload: Any, source: str = "weekly shifts") -> list[WeeklyShiftTemplate]:
    """Validate a weekly-shift payload into templates in file order."""
    try:
        doc = WeeklyShiftsFile.model_validate(payload)
        return [
            WeeklyShiftTemplate(
                employee_name=t.employee_name,
                shifts=tuple(
                    ShiftEntry(weekday=s.weekday, start=s.start, end=s.end)
                    for s in t.shifts
                ),
            )
            for t in doc.data
        ]
    except (ValidationError, InvalidRecordError) as e:
        raise SourceUnavailableError(source, str(e)) from e


def read_roster(path: str | Path) -> list[Employee]:
    return parse_roster(_read_json(path), str(path))


def read_weekly_shifts(path: str | Path) -> list[WeeklyShiftTemplate]:
    return parse_weekly_shifts(_read_json(path), str(path))
