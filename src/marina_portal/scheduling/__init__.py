"""Time-off eligibility and week grid layout."""

from marina_portal.scheduling.eligibility import EligibilityEngine, apply_balance
from marina_portal.scheduling.grid import LaneMap, WeekGridRenderer
from marina_portal.scheduling.policy import DEFAULT_POLICY, TimeOffPolicy
from marina_portal.scheduling.snapshot import RosterSnapshot

__all__ = [
    "EligibilityEngine",
    "apply_balance",
    "LaneMap",
    "WeekGridRenderer",
    "DEFAULT_POLICY",
    "TimeOffPolicy",
    "RosterSnapshot",
]
