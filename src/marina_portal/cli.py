"""Marina portal command line interface.

Provides operational tools for:
- Refreshing the cached roster and weekly shifts
- Printing a week grid
- Exporting week and yearly-totals CSVs

Usage:
    python -m marina_portal.cli sync
    python -m marina_portal.cli week --date 2026-10-19
    python -m marina_portal.cli export-week --date 2026-10-19 --output week.csv
    python -m marina_portal.cli totals --year 2026 --output totals.csv
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable

from marina_portal.config import get_settings
from marina_portal.database import create_tables, dispose_db, get_session, init_db
from marina_portal.scheduling.grid import WeekGridRenderer
from marina_portal.scheduling.policy import start_of_week
from marina_portal.scheduling.reports import (
    admin_csv_filename,
    build_admin_csv,
    build_week_csv,
    requests_in_week,
    week_csv_filename,
    yearly_totals,
)
from marina_portal.scheduling.types import BarLayer, WeekGrid
from marina_portal.services import RosterService, TimeOffService

logger = logging.getLogger(__name__)


def parse_date(s: str) -> date:
    """Parse ISO date string."""
    return date.fromisoformat(s)


class PortalCli:
    """Marina portal command line interface."""

    def __init__(self) -> None:
        self.parser = self._build_parser()

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser."""
        parser = argparse.ArgumentParser(
            prog="python -m marina_portal.cli",
            description="Marina portal operational tools",
        )
        parser.add_argument(
            "--database-url",
            type=str,
            help="Override DATABASE_URL",
        )
        subparsers = parser.add_subparsers(dest="command", help="Commands")

        # sync command
        sync = subparsers.add_parser(
            "sync",
            help="Refresh the cached roster and weekly shifts from source files",
        )
        sync.add_argument("--roster", type=Path, help="Roster JSON path")
        sync.add_argument("--weekly-shifts", type=Path, help="Weekly shifts JSON path")

        # week command
        week = subparsers.add_parser(
            "week",
            help="Print the week grid containing a date",
        )
        week.add_argument(
            "--date",
            type=parse_date,
            help="Any day of the week (default: today)",
        )

        # export-week command
        export_week = subparsers.add_parser(
            "export-week",
            help="Export requests touching a week as CSV",
        )
        export_week.add_argument("--date", type=parse_date, help="Any day of the week")
        export_week.add_argument(
            "--output",
            type=Path,
            help="Output file path (default: employee_schedule_week_<week start>.csv)",
        )

        # totals command
        totals = subparsers.add_parser(
            "totals",
            help="Export yearly PTO / sick totals as CSV",
        )
        totals.add_argument("--year", type=int, help="Calendar year (default: this year)")
        totals.add_argument(
            "--output",
            type=Path,
            help="Output file path (default: employee_timeoff_totals_<year>.csv)",
        )

        return parser

    def run(self, args: list[str] | None = None) -> int:
        """Run CLI with arguments."""
        parsed = self.parser.parse_args(args)

        if not parsed.command:
            self.parser.print_help()
            return 1

        commands: dict[str, Callable[[argparse.Namespace], Any]] = {
            "sync": self._cmd_sync,
            "week": self._cmd_week,
            "export-week": self._cmd_export_week,
            "totals": self._cmd_totals,
        }

        handler = commands.get(parsed.command)
        if handler is None:
            print(f"Unknown command: {parsed.command}", file=sys.stderr)
            return 1

        try:
            return asyncio.run(self._dispatch(handler, parsed))
        except Exception as e:
            logger.exception("Command %s failed", parsed.command)
            print(f"ERROR: {e}", file=sys.stderr)
            return 1

    async def _dispatch(
        self,
        handler: Callable[[argparse.Namespace], Any],
        args: argparse.Namespace,
    ) -> int:
        init_db(args.database_url)
        try:
            await create_tables()
            return await handler(args)
        finally:
            await dispose_db()

    async def _cmd_sync(self, args: argparse.Namespace) -> int:
        """Refresh the cache from the source files."""
        settings = get_settings()
        roster_path = args.roster or settings.roster_path
        shifts_path = args.weekly_shifts or settings.weekly_shifts_path

        async with get_session() as session:
            result = await RosterService(session).sync_from_sources(roster_path, shifts_path)

        print(f"Roster ({roster_path}): ", end="")
        print(f"{result.employee_count} employees" if result.roster_refreshed else "kept cached copy")
        print(f"Weekly shifts ({shifts_path}): ", end="")
        print(
            f"{result.template_count} templates"
            if result.templates_refreshed
            else "kept cached copy"
        )
        return 0 if result.roster_refreshed and result.templates_refreshed else 2

    async def _cmd_week(self, args: argparse.Namespace) -> int:
        """Print the week grid."""
        now = datetime.now()
        async with get_session() as session:
            snapshot = await RosterService(session).load_snapshot()
            requests = await TimeOffService(session).list_requests()

        grid = WeekGridRenderer().render(args.date or now.date(), snapshot, requests, today=now.date())
        self._print_grid(grid)
        return 0

    def _print_grid(self, grid: WeekGrid) -> None:
        print(grid.title)
        print("=" * 60)
        for row in grid.days:
            print(f"\n{row.weekday_label} {row.date_label}  ({len(row.lanes)} lanes)")
            if not row.bars:
                print("  -")
            for bar in row.bars:
                marker = "#" if bar.layer is BarLayer.TIME_OFF else "-"
                print(f"  [{bar.lane_index}] {marker} {bar.title}")

    async def _cmd_export_week(self, args: argparse.Namespace) -> int:
        """Write the week CSV."""
        week_start = start_of_week(args.date or date.today())
        async with get_session() as session:
            snapshot = await RosterService(session).load_snapshot()
            requests = await TimeOffService(session).list_requests()

        selected = requests_in_week(requests, week_start)
        output = args.output or Path(week_csv_filename(week_start))
        output.write_text(build_week_csv(selected, snapshot) + "\n", encoding="utf-8")
        print(f"Exported {len(selected)} requests to {output}")
        return 0

    async def _cmd_totals(self, args: argparse.Namespace) -> int:
        """Write the yearly totals CSV."""
        now = datetime.now()
        year = args.year or now.year
        async with get_session() as session:
            snapshot = await RosterService(session).load_snapshot()
            requests = await TimeOffService(session).list_requests()

        totals = yearly_totals(snapshot, requests, year, now)
        output = args.output or Path(admin_csv_filename(year))
        output.write_text(build_admin_csv(totals, year) + "\n", encoding="utf-8")
        print(f"Exported totals for {len(totals)} employees to {output}")
        return 0


def main() -> int:
    """CLI entry point."""
    logging.basicConfig(level=get_settings().log_level)
    cli = PortalCli()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
