"""Roster and weekly-template models."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from marina_portal.models.base import Base, TimestampMixin
from marina_portal.scheduling.types import Employee, ShiftEntry


class EmployeeRow(Base, TimestampMixin):
    """Cached roster entry with leave balances."""

    __tablename__ = "employee"

    employee_id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    position: Mapped[str] = mapped_column(String, nullable=False, default="")
    pto_hours: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    psl_hours: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    color: Mapped[str | None] = mapped_column(String, nullable=True)
    roster_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("pto_hours >= 0", name="employee_pto_nonnegative"),
        CheckConstraint("psl_hours >= 0", name="employee_psl_nonnegative"),
    )

    def to_domain(self) -> Employee:
        return Employee(
            employee_id=self.employee_id,
            name=self.name,
            position=self.position or "",
            pto_hours=self.pto_hours,
            psl_hours=self.psl_hours,
            color=self.color,
            roster_order=self.roster_order,
        )

    @classmethod
    def from_domain(cls, employee: Employee) -> EmployeeRow:
        return cls(
            employee_id=employee.employee_id,
            name=employee.name,
            position=employee.position,
            pto_hours=employee.pto_hours,
            psl_hours=employee.psl_hours,
            color=employee.color,
            roster_order=employee.roster_order,
        )


class WeeklyShiftRow(Base):
    """One recurring shift from the weekly-template cache."""

    __tablename__ = "weekly_shift"

    weekly_shift_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    employee_name: Mapped[str] = mapped_column(String, nullable=False)
    template_order: Mapped[int] = mapped_column(Integer, nullable=False)
    shift_order: Mapped[int] = mapped_column(Integer, nullable=False)
    weekday: Mapped[int | None] = mapped_column(Integer, nullable=True)
    start: Mapped[str] = mapped_column(String, nullable=False, default="07:00")
    end: Mapped[str] = mapped_column(String, nullable=False, default="17:00")

    __table_args__ = (
        CheckConstraint(
            "weekday IS NULL OR weekday BETWEEN 0 AND 6",
            name="weekly_shift_weekday_check",
        ),
    )

    def to_domain(self) -> ShiftEntry | None:
        """Shift entry, or None for a template row that carries no shift."""
        if self.weekday is None:
            return None
        return ShiftEntry(weekday=self.weekday, start=self.start, end=self.end)
