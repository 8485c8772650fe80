"""Integration test fixtures with a real SQLite database."""

from __future__ import annotations

import json
import shutil
from collections.abc import AsyncGenerator
from dataclasses import replace
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from marina_portal.api.app import create_app
from marina_portal.api.dependencies import get_db_session, get_now
from marina_portal.config import Settings, get_settings
from marina_portal.services import RosterService

DATA_DIR = Path(__file__).resolve().parents[2] / "data"


@pytest.fixture
def source_dir(tmp_path) -> Path:
    """Copy of the bundled sample roster and weekly shifts."""
    target = tmp_path / "data"
    shutil.copytree(DATA_DIR, target)
    return target


@pytest.fixture
def test_settings(source_dir, tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'portal.db'}",
        roster_path=str(source_dir / "employees.json"),
        weekly_shifts_path=str(source_dir / "weekly_shifts.json"),
        host="127.0.0.1",
        port=8000,
        debug=False,
        log_level="INFO",
        admin_mode=False,
        current_user_is_admin=False,
        sync_on_startup=False,
    )


@pytest.fixture
async def seeded(session_factory, test_settings):
    """Load the sample roster into the test database."""
    async with session_factory() as session:
        await RosterService(session).sync_from_sources(
            test_settings.roster_path, test_settings.weekly_shifts_path
        )
        await session.commit()


@pytest.fixture
def app_settings(test_settings):
    """Mutable holder so tests can flip admin flags."""
    return {"settings": test_settings}


@pytest.fixture
async def client(
    session_factory, app_settings, seeded, now
) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    app = create_app()

    async def override_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_session
    app.dependency_overrides[get_now] = lambda: now
    app.dependency_overrides[get_settings] = lambda: app_settings["settings"]

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def enable_admin_flag(app_settings):
    app_settings["settings"] = replace(app_settings["settings"], admin_mode=True)


@pytest.fixture
def write_roster(source_dir):
    """Overwrite the roster source file."""

    def _write(entries: list[dict]) -> None:
        (source_dir / "employees.json").write_text(json.dumps(entries), encoding="utf-8")

    return _write
