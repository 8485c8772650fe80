"""Time-off request model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Float, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from marina_portal.models.base import Base
from marina_portal.scheduling.types import RequestStatus, TimeOffKind, TimeOffRequest


class TimeOffRequestRow(Base):
    """Persisted time-off record.

    ``employee_id`` is not a foreign key: a roster refresh replaces the
    employee table wholesale and must not cascade into history.
    """

    __tablename__ = "time_off_request"

    request_id: Mapped[str] = mapped_column(String, primary_key=True)
    employee_id: Mapped[str] = mapped_column(String, nullable=False)
    kind: Mapped[str] = mapped_column(String, nullable=False)
    start_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    hours: Mapped[float] = mapped_column(Float, nullable=False)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(String, nullable=False, default="approved")
    verification_needed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    __table_args__ = (
        CheckConstraint("end_at > start_at", name="time_off_end_after_start"),
        CheckConstraint("hours >= 0", name="time_off_hours_nonnegative"),
        CheckConstraint(
            "kind IN ('PTO', 'SICK', 'OTHER')", name="time_off_kind_check"
        ),
        CheckConstraint(
            "status IN ('approved', 'pending', 'denied')",
            name="time_off_status_check",
        ),
        Index("ix_time_off_employee", "employee_id"),
        Index("ix_time_off_range", "start_at", "end_at"),
    )

    def to_domain(self) -> TimeOffRequest:
        return TimeOffRequest(
            request_id=self.request_id,
            employee_id=self.employee_id,
            kind=TimeOffKind(self.kind),
            start_at=self.start_at,
            end_at=self.end_at,
            hours=self.hours,
            notes=self.notes or "",
            status=RequestStatus(self.status),
            created_at=self.created_at,
            verification_needed=bool(self.verification_needed),
        )

    @classmethod
    def from_domain(cls, record: TimeOffRequest) -> TimeOffRequestRow:
        return cls(
            request_id=record.request_id,
            employee_id=record.employee_id,
            kind=record.kind.value,
            start_at=record.start_at,
            end_at=record.end_at,
            hours=record.hours,
            notes=record.notes,
            status=record.status.value,
            verification_needed=record.verification_needed,
            created_at=record.created_at,
        )
