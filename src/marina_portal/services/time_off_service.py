"""Time-off submission and queries."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from marina_portal.models import TimeOffRequestRow
from marina_portal.scheduling.eligibility import EligibilityEngine, apply_balance
from marina_portal.scheduling.errors import InvalidRecordError
from marina_portal.scheduling.snapshot import RosterSnapshot
from marina_portal.scheduling.types import EligibilityResult, TimeOffForm, TimeOffRequest
from marina_portal.services.roster_service import RosterService

logger = logging.getLogger(__name__)


class TimeOffService:
    """Evaluates and records time-off requests.

    Nothing is written unless the eligibility engine accepts the form; on
    acceptance the record is stored and the matching balance is decremented.
    """

    def __init__(self, session: AsyncSession, engine: EligibilityEngine | None = None):
        self.session = session
        self.engine = engine or EligibilityEngine()

    async def list_requests(self, employee_id: str | None = None) -> list[TimeOffRequest]:
        query = select(TimeOffRequestRow).order_by(
            TimeOffRequestRow.created_at, TimeOffRequestRow.request_id
        )
        if employee_id is not None:
            query = query.where(TimeOffRequestRow.employee_id == str(employee_id))
        result = await self.session.execute(query)

        records: list[TimeOffRequest] = []
        for row in result.scalars().all():
            try:
                records.append(row.to_domain())
            except (InvalidRecordError, ValueError):
                logger.warning("Skipping malformed time-off row %s", row.request_id)
        return records

    async def submit(
        self, form: TimeOffForm, snapshot: RosterSnapshot, now: datetime
    ) -> EligibilityResult:
        existing = await self.list_requests()
        result = self.engine.evaluate(form, snapshot, existing, now)
        record = result.record
        if record is None:
            logger.info(
                "Time-off request for %s not approved: %s",
                form.employee_id,
                "; ".join(result.reasons),
            )
            return result

        self.session.add(TimeOffRequestRow.from_domain(record))

        employee = snapshot.get(record.employee_id)
        if employee is not None:
            await RosterService(self.session).save_balances(apply_balance(employee, record))

        await self.session.flush()
        logger.info(
            "Recorded %s time-off %s for %s (%.1f h)",
            record.kind.value,
            record.request_id,
            record.employee_id,
            record.hours,
        )
        return result
