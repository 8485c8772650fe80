"""API routes."""

from marina_portal.api.routes.admin import router as admin_router
from marina_portal.api.routes.employees import router as employees_router
from marina_portal.api.routes.health import router as health_router
from marina_portal.api.routes.schedule import router as schedule_router
from marina_portal.api.routes.time_off import router as time_off_router

__all__ = [
    "admin_router",
    "employees_router",
    "health_router",
    "schedule_router",
    "time_off_router",
]
