"""Application startup tests.

Runs the FastAPI lifespan against a file-backed SQLite database with the
startup roster refresh switched on.
"""

import logging
from dataclasses import replace

import pytest

from marina_portal.api.app import create_app
from marina_portal.database import dispose_db
from marina_portal.services import RosterService

pytestmark = pytest.mark.asyncio


@pytest.fixture
async def startup_settings(monkeypatch, test_settings):
    """Point the app's settings at the test database with startup sync on."""
    settings = replace(test_settings, sync_on_startup=True)
    monkeypatch.setattr("marina_portal.api.app.get_settings", lambda: settings)
    monkeypatch.setattr("marina_portal.database.get_settings", lambda: settings)
    await dispose_db()
    yield settings
    await dispose_db()


async def load_snapshot(session_factory):
    async with session_factory() as session:
        return await RosterService(session).load_snapshot()


class TestStartupSync:
    """Test the roster refresh run when the application starts."""

    async def test_startup_seeds_roster(self, startup_settings, session_factory):
        app = create_app()

        async with app.router.lifespan_context(app):
            pass

        snapshot = await load_snapshot(session_factory)
        assert len(snapshot.employees) == 6
        assert len(snapshot.templates) == 7
        assert snapshot.employees[0].name == "Tony Piggot"

    async def test_repeated_id_keeps_cached_roster(
        self, startup_settings, seeded, session_factory, write_roster, caplog
    ):
        write_roster(
            [{"id": 1, "name": "Tony Piggot"}, {"id": 1, "name": "Tony Again"}]
        )
        app = create_app()

        with caplog.at_level(logging.WARNING):
            async with app.router.lifespan_context(app):
                pass

        assert "Roster sync skipped" in caplog.text
        snapshot = await load_snapshot(session_factory)
        assert len(snapshot.employees) == 6
        assert snapshot.get("1").name == "Tony Piggot"

    async def test_missing_sources_do_not_block_startup(
        self, startup_settings, session_factory, source_dir, caplog
    ):
        (source_dir / "employees.json").unlink()
        (source_dir / "weekly_shifts.json").unlink()
        app = create_app()

        with caplog.at_level(logging.WARNING):
            async with app.router.lifespan_context(app):
                pass

        assert "Roster sync skipped" in caplog.text
        assert "Weekly shifts sync skipped" in caplog.text
        snapshot = await load_snapshot(session_factory)
        assert snapshot.employees == ()
        assert snapshot.templates == ()
