"""Week grid layout: per-day lanes and bar geometry on the daily time axis."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from marina_portal.scheduling.policy import (
    DEFAULT_POLICY,
    LaneMetrics,
    TimeOffPolicy,
    ViewWindow,
    start_of_week,
    sunday_weekday,
)
from marina_portal.scheduling.snapshot import RosterSnapshot, hex_to_rgba
from marina_portal.scheduling.types import (
    Bar,
    BarLayer,
    DayRow,
    HourTick,
    TimeOffRequest,
    WeekGrid,
)

SHIFT_FILL_ALPHA = 0.20
SHIFT_BORDER_ALPHA = 0.38


def fallback_lane_key(name: str) -> str:
    """Lane key for a template name that matches no roster entry."""
    return f"name:{name}"


def clock_label(instant: datetime) -> str:
    hour12 = (instant.hour + 11) % 12 + 1
    suffix = "AM" if instant.hour < 12 else "PM"
    return f"{hour12}:{instant.minute:02d} {suffix}"


def week_title(week_start: date) -> str:
    end = week_start + timedelta(days=6)
    return f"{week_start:%b} {week_start.day} – {end:%b} {end.day}, {end.year}"


@dataclass(frozen=True)
class Segment:
    """Portion of a request that falls on one day, clipped to the view window."""

    day: date
    start: datetime
    end: datetime


def split_into_daily_segments(
    request: TimeOffRequest, view: ViewWindow = DEFAULT_POLICY.view
) -> list[Segment]:
    segments: list[Segment] = []
    s, e = request.start_at, request.end_at
    day = s.date()
    while day <= e.date():
        day_start, day_end = view.bounds(day)
        seg_start = max(day_start, s if day == s.date() else day_start)
        seg_end = min(day_end, e if day == e.date() else day_end)
        if seg_end > seg_start:
            segments.append(Segment(day=day, start=seg_start, end=seg_end))
        day += timedelta(days=1)
    return segments


class LaneMap:
    """Key to lane-index mapping for one day of one render pass.

    Indices are assigned in insertion order and never change; a key not seen
    before is appended as a new trailing lane.
    """

    def __init__(self, keys: Iterable[str] = ()):
        self._lanes: dict[str, int] = {}
        for key in keys:
            self.lane_for(key)

    def lane_for(self, key: str) -> int:
        k = str(key)
        if k not in self._lanes:
            self._lanes[k] = len(self._lanes)
        return self._lanes[k]

    def __len__(self) -> int:
        return len(self._lanes)

    def __contains__(self, key: object) -> bool:
        return str(key) in self._lanes

    def as_dict(self) -> dict[str, int]:
        return dict(self._lanes)


def sort_lane_keys(keys: Iterable[str], snapshot: RosterSnapshot) -> list[str]:
    """Roster order first; keys absent from the roster after, lexically."""
    absent = len(snapshot.employees)

    def sort_key(k: str) -> tuple[int, str]:
        order = snapshot.order_of(k)
        return (absent if order is None else order, k)

    return sorted(set(keys), key=sort_key)


@dataclass
class _PendingBar:
    layer: BarLayer
    lane_key: str
    left: int
    width: int
    label: str
    title: str
    css_class: str
    employee_id: str | None = None
    request_id: str | None = None
    color: str | None = None


class WeekGridRenderer:
    """Lays out baseline shifts and time-off bars for a visible week."""

    def __init__(
        self,
        policy: TimeOffPolicy = DEFAULT_POLICY,
        metrics: LaneMetrics | None = None,
    ):
        self.view = policy.view
        self.metrics = metrics or LaneMetrics()

    def render(
        self,
        any_day: date,
        snapshot: RosterSnapshot,
        requests: Sequence[TimeOffRequest],
        today: date | None = None,
    ) -> WeekGrid:
        week_start = start_of_week(any_day)
        today = today or date.today()
        days = [
            self.render_day(week_start + timedelta(days=i), snapshot, requests)
            for i in range(7)
        ]
        return WeekGrid(
            week_start=week_start,
            title=week_title(week_start),
            previous_week=week_start - timedelta(days=7),
            next_week=week_start + timedelta(days=7),
            today_week=start_of_week(today),
            ticks=self.hour_ticks(),
            days=days,
        )

    def hour_ticks(self) -> list[HourTick]:
        total = self.view.total_minutes
        ticks = []
        for hour in range(self.view.start.hour, self.view.end.hour + 1):
            offset = (hour - self.view.start.hour) * 60 - self.view.start.minute
            label = f"{(hour + 11) % 12 + 1}{'a' if hour < 12 else 'p'}"
            ticks.append(HourTick(hour=hour, label=label, left_pct=offset / total * 100))
        return ticks

    def render_day(
        self,
        day: date,
        snapshot: RosterSnapshot,
        requests: Sequence[TimeOffRequest],
    ) -> DayRow:
        # First pass: every bar and every lane key the day needs
        keys: list[str] = []
        pending: list[_PendingBar] = []
        weekday = sunday_weekday(day)

        for template in snapshot.templates:
            emp_id = snapshot.resolve_name(template.employee_name)
            for shift in template.shifts_on(weekday):
                if emp_id:
                    keys.append(emp_id)
                placed = self._place(
                    datetime.combine(day, shift.start_time),
                    datetime.combine(day, shift.end_time),
                )
                if placed is None:
                    continue
                label = snapshot.display_name(emp_id) if emp_id else template.employee_name
                key = emp_id or fallback_lane_key(label)
                keys.append(key)
                pending.append(
                    _PendingBar(
                        layer=BarLayer.SHIFT,
                        lane_key=key,
                        left=placed[0],
                        width=placed[1],
                        label=label,
                        title=f"Shift • {label} {shift.start}–{shift.end}",
                        css_class="shift-bar",
                        employee_id=emp_id,
                        color=snapshot.color_of(emp_id) if emp_id else None,
                    )
                )

        for req in requests:
            for seg in split_into_daily_segments(req, self.view):
                if seg.day != day:
                    continue
                keys.append(req.employee_id)
                placed = self._place(seg.start, seg.end)
                if placed is None:
                    continue
                name = snapshot.display_name(req.employee_id)
                pending.append(
                    _PendingBar(
                        layer=BarLayer.TIME_OFF,
                        lane_key=req.employee_id,
                        left=placed[0],
                        width=placed[1],
                        label=f"{req.kind.label} – {name}",
                        title=(
                            f"{req.kind.label} • {name}\n"
                            f"{clock_label(seg.start)} – {clock_label(seg.end)}"
                        ),
                        css_class=f"emp-bar {req.kind.css_class}",
                        employee_id=req.employee_id,
                        request_id=req.request_id,
                    )
                )

        # Second pass: fixed lane indices, then geometry
        lanes = LaneMap(sort_lane_keys(keys, snapshot))
        bars = [self._to_bar(p, lanes) for p in pending]
        return DayRow(
            day=day,
            weekday_label=f"{day:%a}",
            date_label=f"{day.month}/{day.day}",
            lanes=lanes.as_dict(),
            track_height_px=self.metrics.track_height(len(lanes)),
            bars=bars,
        )

    def _place(self, start: datetime, end: datetime) -> tuple[int, int] | None:
        """(left, width) in minutes on the axis, or None when nothing is visible."""
        total = self.view.total_minutes
        left = min(max(self.view.minutes_since_start(start), 0), total)
        right = min(max(self.view.minutes_since_start(end), 0), total)
        width = right - left
        if width <= 0:
            return None
        return left, width

    def _to_bar(self, pending: _PendingBar, lanes: LaneMap) -> Bar:
        total = self.view.total_minutes
        index = lanes.lane_for(pending.lane_key)
        return Bar(
            layer=pending.layer,
            lane_key=pending.lane_key,
            lane_index=index,
            left_minutes=pending.left,
            width_minutes=pending.width,
            left_pct=pending.left / total * 100,
            width_pct=pending.width / total * 100,
            top_px=self.metrics.lane_top(index),
            label=pending.label,
            title=pending.title,
            css_class=pending.css_class,
            employee_id=pending.employee_id,
            request_id=pending.request_id,
            background_color=hex_to_rgba(pending.color, SHIFT_FILL_ALPHA),
            border_color=hex_to_rgba(pending.color, SHIFT_BORDER_ALPHA),
        )
