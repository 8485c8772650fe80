"""Type definitions for the scheduling core."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum

from marina_portal.scheduling.errors import InvalidRecordError


class TimeOffKind(str, Enum):
    """Time-off request kinds."""

    PTO = "PTO"
    SICK = "SICK"
    OTHER = "OTHER"

    @property
    def label(self) -> str:
        return "Sick" if self is TimeOffKind.SICK else self.value

    @property
    def css_class(self) -> str:
        return self.value.lower()


class RequestStatus(str, Enum):
    """Time-off request status values.

    Only APPROVED is produced today; the other values are reserved for a
    review flow.
    """

    APPROVED = "approved"
    PENDING = "pending"
    DENIED = "denied"


def parse_clock(value: str | None, default: str) -> time:
    """Parse an ``H:MM`` / ``HH:MM`` clock string, falling back to ``default``."""
    raw = str(value).strip() if value else default
    parts = raw.split(":")
    try:
        hour = int(parts[0] or 0)
        minute = int(parts[1] or 0) if len(parts) > 1 else 0
        return time(hour, minute)
    except ValueError as e:
        raise InvalidRecordError("clock time", str(e), raw) from e


@dataclass(frozen=True)
class Employee:
    """Roster entry with accrued leave balances."""

    employee_id: str
    name: str
    position: str = ""
    pto_hours: float = 0.0
    psl_hours: float = 0.0
    color: str | None = None
    roster_order: int = 0

    def __post_init__(self) -> None:
        if not str(self.employee_id).strip():
            raise InvalidRecordError("employee", "id is blank")
        if not str(self.name).strip():
            raise InvalidRecordError("employee", "name is blank", self.employee_id)
        if self.pto_hours < 0 or self.psl_hours < 0:
            raise InvalidRecordError(
                "employee", "leave balance is negative", self.employee_id
            )


@dataclass(frozen=True)
class TimeOffRequest:
    """An accepted time-off record."""

    request_id: str
    employee_id: str
    kind: TimeOffKind
    start_at: datetime
    end_at: datetime
    hours: float
    created_at: datetime
    notes: str = ""
    status: RequestStatus = RequestStatus.APPROVED
    verification_needed: bool = False

    def __post_init__(self) -> None:
        if self.end_at <= self.start_at:
            raise InvalidRecordError(
                "time-off request", "end is not after start", self.request_id
            )
        if self.hours < 0:
            raise InvalidRecordError(
                "time-off request", "hours are negative", self.request_id
            )


@dataclass(frozen=True)
class ShiftEntry:
    """One recurring shift in a weekly template."""

    weekday: int  # 0=Sunday .. 6=Saturday
    start: str = "07:00"
    end: str = "17:00"

    def __post_init__(self) -> None:
        if not 0 <= self.weekday <= 6:
            raise InvalidRecordError("shift", f"weekday {self.weekday} out of range")
        # Fail on unparseable clock strings at construction time
        parse_clock(self.start, "07:00")
        parse_clock(self.end, "17:00")

    @property
    def start_time(self) -> time:
        return parse_clock(self.start, "07:00")

    @property
    def end_time(self) -> time:
        return parse_clock(self.end, "17:00")


@dataclass(frozen=True)
class WeeklyShiftTemplate:
    """Baseline weekly shifts for one named employee."""

    employee_name: str
    shifts: tuple[ShiftEntry, ...] = ()

    def shifts_on(self, weekday: int) -> list[ShiftEntry]:
        return [s for s in self.shifts if s.weekday == weekday]


@dataclass
class TimeOffForm:
    """A submitted time-off request form."""

    kind: TimeOffKind
    employee_id: str
    full_day: bool
    start_date: date
    end_date: date
    start_time: time = time(8, 0)
    end_time: time = time(16, 0)
    notes: str = ""


@dataclass
class EligibilityResult:
    """Outcome of evaluating a time-off form."""

    record: TimeOffRequest | None = None
    reasons: list[str] = field(default_factory=list)

    @property
    def accepted(self) -> bool:
        return self.record is not None and not self.reasons

    @classmethod
    def ok(cls, record: TimeOffRequest) -> EligibilityResult:
        return cls(record=record)

    @classmethod
    def rejected(cls, *reasons: str) -> EligibilityResult:
        return cls(reasons=list(reasons))


# ---------------------------------------------------------------------------
# Week grid layout
# ---------------------------------------------------------------------------


class BarLayer(str, Enum):
    """Rendering layer of a bar; shifts sit behind time-off."""

    SHIFT = "shift"
    TIME_OFF = "time_off"


@dataclass
class Bar:
    """A positioned horizontal bar on a day's track."""

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


@dataclass
class DayRow:
    """One day of the week grid."""

    day: date
    weekday_label: str
    date_label: str
    lanes: dict[str, int]
    track_height_px: int
    bars: list[Bar] = field(default_factory=list)


@dataclass(frozen=True)
class HourTick:
    """Header tick on the time axis."""

    hour: int
    label: str
    left_pct: float


@dataclass
class WeekGrid:
    """Full layout of a visible week."""

    week_start: date
    title: str
    previous_week: date
    next_week: date
    today_week: date
    ticks: list[HourTick]
    days: list[DayRow]
