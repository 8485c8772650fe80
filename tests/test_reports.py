"""Tests for admin totals and CSV exports."""

from dataclasses import replace
from datetime import date, datetime

from marina_portal.scheduling.reports import (
    admin_csv_filename,
    build_admin_csv,
    build_week_csv,
    requests_in_week,
    week_csv_filename,
    year_options,
    yearly_totals,
)
from marina_portal.scheduling.snapshot import RosterSnapshot
from marina_portal.scheduling.types import Employee, RequestStatus, TimeOffKind

AS_OF = datetime(2026, 3, 1, 12, 0)


class TestYearlyTotals:
    """Test requested / approved / taken aggregation."""

    def test_totals_by_employee(self, snapshot, make_request):
        requests = [
            make_request(
                "1", datetime(2026, 1, 21, 7), datetime(2026, 1, 25, 18), hours=40.0,
                request_id="a",
            ),
            make_request(
                "1", datetime(2026, 4, 1, 7), datetime(2026, 4, 1, 18),
                kind=TimeOffKind.SICK, request_id="b",
            ),
            make_request(
                "2", datetime(2026, 2, 2, 7), datetime(2026, 2, 2, 18),
                kind=TimeOffKind.OTHER, request_id="c",
            ),
            make_request(
                "2", datetime(2025, 7, 1, 7), datetime(2025, 7, 1, 18), request_id="d"
            ),
            make_request(
                "99", datetime(2026, 2, 2, 7), datetime(2026, 2, 2, 18), request_id="e"
            ),
        ]

        totals = yearly_totals(snapshot, requests, 2026, AS_OF)

        assert [t.employee_id for t in totals] == ["1", "2", "3"]
        tony, karli, bri = totals
        assert (tony.requested, tony.approved, tony.taken) == (48.0, 48.0, 40.0)
        assert (tony.pto_taken, tony.sick_approved, tony.sick_taken) == (40.0, 8.0, 0.0)
        assert (karli.requested, karli.approved, karli.taken) == (0.0, 0.0, 0.0)
        assert bri.requested == 0.0

    def test_request_touching_year_boundary_counts(self, snapshot, make_request):
        req = make_request(
            "1", datetime(2025, 12, 31, 7), datetime(2026, 1, 1, 18), hours=16.0
        )

        assert yearly_totals(snapshot, [req], 2025, AS_OF)[0].requested == 16.0
        assert yearly_totals(snapshot, [req], 2026, AS_OF)[0].requested == 16.0

    def test_pending_counts_as_requested_only(self, snapshot, make_request):
        req = replace(
            make_request("1", datetime(2026, 1, 5, 7), datetime(2026, 1, 5, 18)),
            status=RequestStatus.PENDING,
        )

        tony = yearly_totals(snapshot, [req], 2026, AS_OF)[0]

        assert (tony.requested, tony.approved, tony.taken) == (8.0, 0.0, 0.0)

    def test_year_options(self):
        assert year_options(date(2026, 10, 19)) == [2024, 2025, 2026, 2027]


class TestAdminCsv:
    """Test the yearly totals export."""

    def test_header_and_rows(self, snapshot, make_request):
        req = make_request(
            "1", datetime(2026, 1, 21, 7), datetime(2026, 1, 25, 18), hours=40.0
        )
        totals = yearly_totals(snapshot, [req], 2026, AS_OF)

        lines = build_admin_csv(totals, 2026).split("\n")

        assert lines[0] == (
            "Year,Employee,Position,Requested (hrs),Approved (hrs),Taken (hrs)"
        )
        assert lines[1] == "2026,Tony Piggot,Yard Manager,40.0,40.0,40.0"
        assert lines[3] == "2026,Bri Ghallager,Service Writer,0.0,0.0,0.0"
        assert len(lines) == 4

    def test_fields_with_commas_and_quotes_are_quoted(self):
        snap = RosterSnapshot(
            employees=(Employee("7", 'Leanne "Lee" Layton', "Dock, Hand"),)
        )
        totals = yearly_totals(snap, [], 2026, AS_OF)

        row = build_admin_csv(totals, 2026).split("\n")[1]

        assert row == '2026,"Leanne ""Lee"" Layton","Dock, Hand",0.0,0.0,0.0'

    def test_filename(self):
        assert admin_csv_filename(2026) == "employee_timeoff_totals_2026.csv"


class TestWeekCsv:
    """Test the weekly schedule export."""

    def test_week_filter(self, make_request):
        week_start = date(2026, 10, 18)
        inside = make_request(
            "1", datetime(2026, 10, 19, 10), datetime(2026, 10, 19, 12), request_id="in"
        )
        straddles = make_request(
            "1", datetime(2026, 10, 16, 7), datetime(2026, 10, 18, 9), request_id="st"
        )
        before = make_request(
            "1", datetime(2026, 10, 10, 7), datetime(2026, 10, 17, 18), request_id="b"
        )
        next_week = make_request(
            "1", datetime(2026, 10, 25, 7), datetime(2026, 10, 25, 18), request_id="n"
        )

        selected = requests_in_week([inside, straddles, before, next_week], week_start)

        assert [r.request_id for r in selected] == ["in", "st"]

    def test_rows(self, snapshot, make_request):
        requests = [
            make_request("2", datetime(2026, 10, 19, 10), datetime(2026, 10, 19, 12)),
            make_request(
                "42",
                datetime(2026, 10, 20, 7),
                datetime(2026, 10, 20, 18),
                kind=TimeOffKind.SICK,
            ),
        ]

        csv_text = build_week_csv(requests, snapshot)

        assert csv_text.split("\n") == [
            "Start,End,Type,Employee,Status",
            "2026-10-19T10:00:00,2026-10-19T12:00:00,PTO,Karli Rich,approved",
            "2026-10-20T07:00:00,2026-10-20T18:00:00,Sick,Emp 42,approved",
        ]

    def test_filename(self):
        assert (
            week_csv_filename(date(2026, 10, 18))
            == "employee_schedule_week_2026-10-18.csv"
        )
