"""Pytest fixtures for marina portal tests."""

from __future__ import annotations

from datetime import datetime
from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from marina_portal.models import Base
from marina_portal.scheduling.snapshot import RosterSnapshot
from marina_portal.scheduling.types import (
    Employee,
    ShiftEntry,
    TimeOffKind,
    TimeOffRequest,
    WeeklyShiftTemplate,
)

# Fixed clock used across the suite
NOW = datetime(2026, 1, 1, 9, 0)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
async def engine(tmp_path):
    """Create a file-backed SQLite engine for one test."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'portal.db'}",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def employees() -> list[Employee]:
    """Small roster; ids are strings as stored."""
    return [
        Employee("1", "Tony Piggot", "Yard Manager", 40.0, 40.0, "#007F7E", 0),
        Employee("2", "Karli Rich", "Office Lead", 16.0, 8.0, "#C11A44", 1),
        Employee("3", "Bri Ghallager", "Service Writer", 80.0, 32.0, None, 2),
    ]


@pytest.fixture
def templates() -> list[WeeklyShiftTemplate]:
    return [
        WeeklyShiftTemplate(
            "Tony Piggot",
            (ShiftEntry(1, "07:00", "15:30"), ShiftEntry(2, "07:00", "15:30")),
        ),
        WeeklyShiftTemplate("Bri Galagher", (ShiftEntry(1, "09:00", "17:30"),)),
    ]


@pytest.fixture
def snapshot(employees, templates) -> RosterSnapshot:
    return RosterSnapshot(employees=tuple(employees), templates=tuple(templates))


def _make_request(
    employee_id: str,
    start_at: datetime,
    end_at: datetime,
    kind: TimeOffKind = TimeOffKind.PTO,
    hours: float = 8.0,
    request_id: str = "req-1",
) -> TimeOffRequest:
    """Build an approved record without going through the engine."""
    return TimeOffRequest(
        request_id=request_id,
        employee_id=employee_id,
        kind=kind,
        start_at=start_at,
        end_at=end_at,
        hours=hours,
        created_at=NOW,
    )


@pytest.fixture
def make_request():
    """Factory for approved records."""
    return _make_request

