"""Admin totals and CSV exports."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from marina_portal.scheduling.snapshot import RosterSnapshot
from marina_portal.scheduling.types import RequestStatus, TimeOffKind, TimeOffRequest

ADMIN_CSV_HEADER = [
    "Year",
    "Employee",
    "Position",
    "Requested (hrs)",
    "Approved (hrs)",
    "Taken (hrs)",
]
WEEK_CSV_HEADER = ["Start", "End", "Type", "Employee", "Status"]

_COUNTED_KINDS = (TimeOffKind.PTO, TimeOffKind.SICK)


@dataclass
class EmployeeTotals:
    """Requested / approved / taken hours for one employee and year."""

    employee_id: str
    name: str
    position: str
    pto_requested: float = 0.0
    pto_approved: float = 0.0
    pto_taken: float = 0.0
    sick_requested: float = 0.0
    sick_approved: float = 0.0
    sick_taken: float = 0.0

    @property
    def requested(self) -> float:
        return self.pto_requested + self.sick_requested

    @property
    def approved(self) -> float:
        return self.pto_approved + self.sick_approved

    @property
    def taken(self) -> float:
        return self.pto_taken + self.sick_taken

    def add(self, request: TimeOffRequest, now: datetime) -> None:
        prefix = "pto" if request.kind == TimeOffKind.PTO else "sick"
        approved = request.status == RequestStatus.APPROVED
        self._bump(f"{prefix}_requested", request.hours)
        if approved:
            self._bump(f"{prefix}_approved", request.hours)
            if request.end_at < now:
                self._bump(f"{prefix}_taken", request.hours)

    def _bump(self, attr: str, hours: float) -> None:
        setattr(self, attr, getattr(self, attr) + hours)


def year_options(today: date) -> list[int]:
    return list(range(today.year - 2, today.year + 2))


def yearly_totals(
    snapshot: RosterSnapshot,
    requests: Iterable[TimeOffRequest],
    year: int,
    now: datetime,
) -> list[EmployeeTotals]:
    """Per-employee totals, in roster order, for requests touching ``year``."""
    totals = {
        e.employee_id: EmployeeTotals(e.employee_id, e.name, e.position)
        for e in snapshot.employees
    }
    for req in requests:
        if req.start_at.year != year and req.end_at.year != year:
            continue
        if req.kind not in _COUNTED_KINDS:
            continue
        bucket = totals.get(req.employee_id)
        if bucket is not None:
            bucket.add(req, now)
    return list(totals.values())


def requests_in_week(
    requests: Iterable[TimeOffRequest], week_start: date
) -> list[TimeOffRequest]:
    """Requests that end on/after the week start and start before the week ends."""
    lo = datetime.combine(week_start, datetime.min.time())
    hi = lo + timedelta(days=7)
    return [r for r in requests if r.end_at >= lo and r.start_at < hi]


def _write_csv(rows: Sequence[Sequence[object]]) -> str:
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerows(rows)
    return output.getvalue().rstrip("\n")


def build_admin_csv(totals: Sequence[EmployeeTotals], year: int) -> str:
    rows: list[list[object]] = [ADMIN_CSV_HEADER]
    for t in totals:
        rows.append([
            year,
            t.name,
            t.position,
            f"{t.requested:.1f}",
            f"{t.approved:.1f}",
            f"{t.taken:.1f}",
        ])
    return _write_csv(rows)


def build_week_csv(
    requests: Iterable[TimeOffRequest],
    snapshot: RosterSnapshot,
) -> str:
    rows: list[list[object]] = [WEEK_CSV_HEADER]
    for r in requests:
        rows.append([
            r.start_at.isoformat(),
            r.end_at.isoformat(),
            r.kind.label,
            snapshot.display_name(r.employee_id),
            r.status.value,
        ])
    return _write_csv(rows)


def admin_csv_filename(year: int) -> str:
    return f"employee_timeoff_totals_{year}.csv"


def week_csv_filename(week_start: date) -> str:
    return f"employee_schedule_week_{week_start.isoformat()}.csv"
