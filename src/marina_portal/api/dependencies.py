"""FastAPI dependencies for dependency injection."""

from collections.abc import AsyncGenerator
from datetime import datetime
from typing import Annotated

from fastapi import Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from marina_portal.config import Settings, get_settings
from marina_portal.database import init_db
from marina_portal.scheduling.snapshot import RosterSnapshot
from marina_portal.services import RosterService


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    _, factory = init_db()
    async with factory() as session:
        try:
            yield session
        finally:
            await session.close()


def get_now() -> datetime:
    """Current local time; overridden in tests."""
    return datetime.now()


async def get_snapshot(
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> RosterSnapshot:
    """Roster snapshot handed to the engine and renderer for this request."""
    return await RosterService(db).load_snapshot()


async def require_admin(
    settings: Annotated[Settings, Depends(get_settings)],
    admin: Annotated[str | None, Query()] = None,
) -> bool:
    """Gate admin-only views behind ``admin=1`` or a configured admin flag.

    This toggles visibility only; it is not authentication.
    """
    if admin == "1" or settings.admin_flag_set:
        return True
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Admin view is not enabled",
    )


# Type aliases for cleaner dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db_session)]
Now = Annotated[datetime, Depends(get_now)]
Snapshot = Annotated[RosterSnapshot, Depends(get_snapshot)]
AdminAccess = Annotated[bool, Depends(require_admin)]
AppSettings = Annotated[Settings, Depends(get_settings)]
