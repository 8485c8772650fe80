"""ORM models."""

from marina_portal.models.base import Base, TimestampMixin
from marina_portal.models.employee import EmployeeRow, WeeklyShiftRow
from marina_portal.models.time_off import TimeOffRequestRow

__all__ = [
    "Base",
    "TimestampMixin",
    "EmployeeRow",
    "WeeklyShiftRow",
    "TimeOffRequestRow",
]
