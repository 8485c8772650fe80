"""Portal services."""

from marina_portal.services.roster_service import RosterService, SyncResult
from marina_portal.services.time_off_service import TimeOffService

__all__ = [
    "RosterService",
    "SyncResult",
    "TimeOffService",
]
