"""Time-off eligibility engine.

Evaluation order (stops at the first failing check):
1) Resolve start/end instants (full-day requests span the view window)
2) End must be after start
3) Employee must exist
4) Compute hours
5) PTO: notice period, summer cap, balance
6) SICK: balance, verification flag for long absences
7) Build the approved record
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime, timedelta
from uuid import uuid4

from marina_portal.scheduling.policy import (
    DEFAULT_POLICY,
    TimeOffPolicy,
    hours_between,
    inclusive_day_count,
)
from marina_portal.scheduling.snapshot import RosterSnapshot
from marina_portal.scheduling.types import (
    EligibilityResult,
    Employee,
    RequestStatus,
    TimeOffForm,
    TimeOffKind,
    TimeOffRequest,
)

END_BEFORE_START = "End must be after start"
EMPLOYEE_NOT_FOUND = "Employee not found"
INSUFFICIENT_PTO = "Insufficient PTO balance"
INSUFFICIENT_SICK = "Insufficient WA Paid Sick Leave balance"


class EligibilityEngine:
    """Validates time-off forms against notice, balance and summer-cap rules."""

    def __init__(self, policy: TimeOffPolicy = DEFAULT_POLICY):
        self.policy = policy

    def evaluate(
        self,
        form: TimeOffForm,
        snapshot: RosterSnapshot,
        existing: Iterable[TimeOffRequest],
        now: datetime,
    ) -> EligibilityResult:
        """Evaluate a form, returning an approved record or the rejection reasons."""
        start_at, end_at = self.resolve_instants(form)
        if end_at <= start_at:
            return EligibilityResult.rejected(END_BEFORE_START)

        employee = snapshot.get(form.employee_id)
        if employee is None:
            return EligibilityResult.rejected(EMPLOYEE_NOT_FOUND)

        hours = self.compute_hours(form, start_at, end_at)
        verification_needed = False

        if form.kind == TimeOffKind.PTO:
            lead = datetime.combine(form.start_date, datetime.min.time()) - now
            if lead < timedelta(days=self.policy.lead_time_days_for_pto):
                return EligibilityResult.rejected(
                    f"PTO requires at least {self.policy.lead_time_days_for_pto} "
                    "days of notice"
                )

            summer = self.policy.summer
            if summer.contains(form.start_date) or summer.contains(form.end_date):
                used = self.count_summer_pto_days(
                    employee.employee_id, form.start_date.year, existing
                )
                if used + self.requested_days(form, hours) > summer.pto_cap_days:
                    return EligibilityResult.rejected(
                        f"Summer PTO cap of {summer.pto_cap_days} day(s) exceeded"
                    )

            if hours > employee.pto_hours:
                return EligibilityResult.rejected(INSUFFICIENT_PTO)

        elif form.kind == TimeOffKind.SICK:
            if hours > employee.psl_hours:
                return EligibilityResult.rejected(INSUFFICIENT_SICK)
            days = self.requested_days(form, hours)
            verification_needed = days > self.policy.sick_verification_days

        record = TimeOffRequest(
            request_id=str(uuid4()),
            employee_id=employee.employee_id,
            kind=form.kind,
            start_at=start_at,
            end_at=end_at,
            hours=hours,
            notes=form.notes or "",
            status=RequestStatus.APPROVED,
            created_at=now,
            verification_needed=verification_needed,
        )
        return EligibilityResult.ok(record)

    def resolve_instants(self, form: TimeOffForm) -> tuple[datetime, datetime]:
        if form.full_day:
            start_time, end_time = self.policy.view.start, self.policy.view.end
        else:
            start_time, end_time = form.start_time, form.end_time
        return (
            datetime.combine(form.start_date, start_time),
            datetime.combine(form.end_date, end_time),
        )

    def compute_hours(
        self, form: TimeOffForm, start_at: datetime, end_at: datetime
    ) -> float:
        if form.full_day:
            days = inclusive_day_count(form.start_date, form.end_date)
            return float(days * self.policy.hours_per_full_day)
        return max(0.5, hours_between(start_at, end_at))

    def requested_days(self, form: TimeOffForm, hours: float) -> int:
        """Whole days requested; partial-day hours round up."""
        if form.full_day:
            return inclusive_day_count(form.start_date, form.end_date)
        return math.ceil(hours / self.policy.hours_per_full_day)

    def count_summer_pto_days(
        self,
        employee_id: str,
        year: int,
        existing: Iterable[TimeOffRequest],
    ) -> int:
        """Summer days already covered by the employee's PTO in ``year``.

        Steps through each request in 24-hour increments from its start,
        counting every step that lands inside the summer window.
        """
        total = 0
        for req in existing:
            if req.employee_id != str(employee_id) or req.kind != TimeOffKind.PTO:
                continue
            if req.start_at.year != year and req.end_at.year != year:
                continue
            cursor = req.start_at
            while cursor <= req.end_at:
                if self.policy.summer.contains(cursor):
                    total += 1
                cursor += timedelta(days=1)
        return total


def apply_balance(employee: Employee, record: TimeOffRequest) -> Employee:
    """Employee with the record's hours deducted from the matching balance."""
    if record.kind == TimeOffKind.PTO:
        return replace(employee, pto_hours=max(0.0, employee.pto_hours - record.hours))
    if record.kind == TimeOffKind.SICK:
        return replace(employee, psl_hours=max(0.0, employee.psl_hours - record.hours))
    return employee
