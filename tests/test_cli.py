"""Tests for the operational CLI."""

from pathlib import Path

import pytest

from marina_portal.cli import PortalCli

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@pytest.fixture
def cli_args(tmp_path):
    return ["--database-url", f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}"]


class TestPortalCli:
    """Test CLI commands against a scratch database."""

    def test_no_command_prints_help(self, capsys):
        assert PortalCli().run([]) == 1
        assert "usage:" in capsys.readouterr().out

    def test_sync_then_week(self, cli_args, capsys):
        cli = PortalCli()
        code = cli.run(
            cli_args
            + [
                "sync",
                "--roster",
                str(DATA_DIR / "employees.json"),
                "--weekly-shifts",
                str(DATA_DIR / "weekly_shifts.json"),
            ]
        )

        assert code == 0
        out = capsys.readouterr().out
        assert "6 employees" in out
        assert "7 templates" in out

        assert cli.run(cli_args + ["week", "--date", "2026-10-21"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("Oct 18 – Oct 24, 2026")
        assert "Shift • Tony Piggot 07:00–15:30" in out

    def test_sync_with_missing_source(self, cli_args, tmp_path, capsys):
        code = PortalCli().run(
            cli_args
            + [
                "sync",
                "--roster",
                str(tmp_path / "missing.json"),
                "--weekly-shifts",
                str(DATA_DIR / "weekly_shifts.json"),
            ]
        )

        assert code == 2
        assert "kept cached copy" in capsys.readouterr().out

    def test_exports_write_files(self, cli_args, tmp_path):
        week_out = tmp_path / "week.csv"
        totals_out = tmp_path / "totals.csv"

        assert PortalCli().run(
            cli_args + ["export-week", "--date", "2026-10-19", "--output", str(week_out)]
        ) == 0
        assert PortalCli().run(
            cli_args + ["totals", "--year", "2026", "--output", str(totals_out)]
        ) == 0

        assert week_out.read_text(encoding="utf-8") == "Start,End,Type,Employee,Status\n"
        assert totals_out.read_text(encoding="utf-8").startswith("Year,Employee,Position")
