"""Time-off policy constants and calendar helpers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

HOURS_PER_DAY = 8


@dataclass(frozen=True)
class SummerWindow:
    """Recurring summer window, evaluated per calendar year."""

    start_month: int = 6
    start_day: int = 1
    end_month: int = 9
    end_day: int = 30
    pto_cap_days: int = 3

    def contains(self, value: date | datetime) -> bool:
        d = value.date() if isinstance(value, datetime) else value
        start = date(d.year, self.start_month, self.start_day)
        end = date(d.year, self.end_month, self.end_day)
        return start <= d <= end


@dataclass(frozen=True)
class ViewWindow:
    """Visible daily time axis (07:00 to 18:00)."""

    start: time = time(7, 0)
    end: time = time(18, 0)

    @property
    def total_minutes(self) -> int:
        return (self.end.hour - self.start.hour) * 60 + (
            self.end.minute - self.start.minute
        )

    def bounds(self, day: date) -> tuple[datetime, datetime]:
        return datetime.combine(day, self.start), datetime.combine(day, self.end)

    def minutes_since_start(self, instant: datetime) -> int:
        """Minutes from the window start, clipped to the window.

        Floors partial minutes so a bar never extends past its real end.
        """
        start, end = self.bounds(instant.date())
        if instant <= start:
            return 0
        if instant >= end:
            return self.total_minutes
        return int((instant - start).total_seconds() // 60)


@dataclass(frozen=True)
class LaneMetrics:
    """Pixel metrics of a lane stack."""

    lane_height: float = 24
    lane_gap: float = 6
    row_padding: float = 6

    def lane_top(self, lane_index: int) -> int:
        return round(self.row_padding + lane_index * (self.lane_height + self.lane_gap))

    def track_height(self, lane_count: int) -> int:
        if lane_count <= 0:
            return round(self.row_padding * 2 + self.lane_height)
        return round(
            self.row_padding * 2
            + lane_count * self.lane_height
            + max(0, lane_count - 1) * self.lane_gap
        )


@dataclass(frozen=True)
class TimeOffPolicy:
    """Business rules applied by the eligibility engine."""

    hours_per_full_day: int = HOURS_PER_DAY
    lead_time_days_for_pto: int = 14
    sick_verification_days: int = 3
    summer: SummerWindow = SummerWindow()
    view: ViewWindow = ViewWindow()


DEFAULT_POLICY = TimeOffPolicy()


def inclusive_day_count(start: date, end: date) -> int:
    """Number of calendar days from start to end, both included."""
    return (end - start).days + 1


def hours_between(start: datetime, end: datetime) -> float:
    return max(0.0, (end - start).total_seconds() / 3600)


def start_of_week(day: date) -> date:
    """Sunday on or before ``day``."""
    return day - timedelta(days=sunday_weekday(day))


def sunday_weekday(day: date) -> int:
    """Weekday index with 0=Sunday .. 6=Saturday."""
    return (day.weekday() + 1) % 7
