"""Roster and weekly-template cache service."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from marina_portal.models import EmployeeRow, WeeklyShiftRow
from marina_portal.scheduling.errors import InvalidRecordError, SourceUnavailableError
from marina_portal.scheduling.snapshot import RosterSnapshot
from marina_portal.scheduling.types import Employee, ShiftEntry, WeeklyShiftTemplate
from marina_portal.services.sources import read_roster, read_weekly_shifts

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Outcome of a best-effort refresh from the source files."""

    roster_refreshed: bool
    templates_refreshed: bool
    employee_count: int
    template_count: int


class RosterService:
    """Reads and replaces the cached roster and weekly templates.

    Source refreshes replace the cache only on success; a missing or
    malformed file leaves the previous copy in place.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def load_snapshot(self) -> RosterSnapshot:
        """Build a validated snapshot from the cache, skipping malformed rows."""
        return RosterSnapshot(
            employees=tuple(await self.list_employees()),
            templates=tuple(await self.list_templates()),
        )

    async def list_employees(self) -> list[Employee]:
        result = await self.session.execute(
            select(EmployeeRow).order_by(EmployeeRow.roster_order)
        )
        employees: list[Employee] = []
        for row in result.scalars().all():
            try:
                employees.append(row.to_domain())
            except InvalidRecordError:
                logger.warning("Skipping malformed employee row %s", row.employee_id)
        return employees

    async def list_templates(self) -> list[WeeklyShiftTemplate]:
        result = await self.session.execute(
            select(WeeklyShiftRow).order_by(
                WeeklyShiftRow.template_order, WeeklyShiftRow.shift_order
            )
        )
        grouped: dict[int, tuple[str, list[ShiftEntry]]] = {}
        for row in result.scalars().all():
            name, shifts = grouped.setdefault(row.template_order, (row.employee_name, []))
            try:
                entry = row.to_domain()
            except InvalidRecordError:
                logger.warning("Skipping malformed shift row %s", row.weekly_shift_id)
                continue
            if entry is not None:
                shifts.append(entry)
        return [
            WeeklyShiftTemplate(employee_name=name, shifts=tuple(shifts))
            for name, shifts in grouped.values()
        ]

    async def replace_roster(self, employees: Sequence[Employee]) -> None:
        """Make the employee cache match ``employees`` exactly, balances included."""
        result = await self.session.execute(select(EmployeeRow))
        existing = {row.employee_id: row for row in result.scalars().all()}
        for employee in employees:
            row = existing.pop(employee.employee_id, None)
            if row is None:
                self.session.add(EmployeeRow.from_domain(employee))
                continue
            row.name = employee.name
            row.position = employee.position
            row.pto_hours = employee.pto_hours
            row.psl_hours = employee.psl_hours
            row.color = employee.color
            row.roster_order = employee.roster_order
        for row in existing.values():
            await self.session.delete(row)
        await self.session.flush()

    async def replace_templates(self, templates: Sequence[WeeklyShiftTemplate]) -> None:
        await self.session.execute(delete(WeeklyShiftRow))
        for t_idx, template in enumerate(templates):
            if not template.shifts:
                self.session.add(
                    WeeklyShiftRow(
                        employee_name=template.employee_name,
                        template_order=t_idx,
                        shift_order=0,
                        weekday=None,
                    )
                )
                continue
            for s_idx, shift in enumerate(template.shifts):
                self.session.add(
                    WeeklyShiftRow(
                        employee_name=template.employee_name,
                        template_order=t_idx,
                        shift_order=s_idx,
                        weekday=shift.weekday,
                        start=shift.start,
                        end=shift.end,
                    )
                )
        await self.session.flush()

    async def save_balances(self, employee: Employee) -> None:
        """Persist an employee's current leave balances."""
        row = await self.session.get(EmployeeRow, employee.employee_id)
        if row is None:
            self.session.add(EmployeeRow.from_domain(employee))
        else:
            row.pto_hours = employee.pto_hours
            row.psl_hours = employee.psl_hours
        await self.session.flush()

    async def sync_from_sources(
        self, roster_path: str | Path, weekly_shifts_path: str | Path
    ) -> SyncResult:
        """Refresh roster and templates from their files, once each, no retry."""
        roster_refreshed = templates_refreshed = False
        employees: list[Employee] | None = None
        templates: list[WeeklyShiftTemplate] | None = None

        try:
            employees = read_roster(roster_path)
        except SourceUnavailableError as e:
            logger.warning("Roster sync skipped: %s", e.reason)
        if employees is not None:
            await self.replace_roster(employees)
            roster_refreshed = True

        try:
            templates = read_weekly_shifts(weekly_shifts_path)
        except SourceUnavailableError as e:
            logger.warning("Weekly shifts sync skipped: %s", e.reason)
        if templates is not None:
            await self.replace_templates(templates)
            templates_refreshed = True

        snapshot = await self.load_snapshot()
        logger.info(
            "Roster sync finished: %d employee(s), %d template(s)",
            len(snapshot.employees),
            len(snapshot.templates),
        )
        return SyncResult(
            roster_refreshed=roster_refreshed,
            templates_refreshed=templates_refreshed,
            employee_count=len(snapshot.employees),
            template_count=len(snapshot.templates),
        )
