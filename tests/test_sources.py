"""Tests for roster and weekly-shift source parsing."""

import json
from pathlib import Path

import pytest

from marina_portal.scheduling.errors import SourceUnavailableError
from marina_portal.services.sources import (
    parse_roster,
    parse_weekly_shifts,
    read_roster,
    read_weekly_shifts,
)


class TestRosterSource:
    """Test roster file validation."""

    def test_parses_entries_in_file_order(self):
        payload = [
            {"id": 5, "name": "Mitchel French", "position": "Dock Hand", "ptoHours": 40},
            {
                "id": "1",
                "name": "Tony Piggot",
                "position": None,
                "ptoHours": 12.5,
                "pslHours": None,
                "color": "#007F7E",
                "extra": "ignored",
            },
        ]

        employees = parse_roster(payload)

        assert [e.employee_id for e in employees] == ["5", "1"]
        assert [e.roster_order for e in employees] == [0, 1]
        mitchel, tony = employees
        assert mitchel.psl_hours == 0.0
        assert mitchel.color is None
        assert tony.position == ""
        assert tony.pto_hours == 12.5
        assert tony.psl_hours == 0.0

    def test_rejects_non_array(self):
        with pytest.raises(SourceUnavailableError) as exc_info:
            parse_roster({"data": []})

        assert "not a JSON array" in exc_info.value.reason

    @pytest.mark.parametrize(
        "entry",
        [
            {"name": "No Id"},
            {"id": 1, "name": "Negative", "ptoHours": -4},
            {"id": 1, "name": "   "},
        ],
    )
    def test_rejects_malformed_entries(self, entry):
        with pytest.raises(SourceUnavailableError):
            parse_roster([entry])

    def test_rejects_duplicate_ids(self):
        with pytest.raises(SourceUnavailableError) as exc_info:
            parse_roster(
                [{"id": 1, "name": "Tony Piggot"}, {"id": 1, "name": "Tony Again"}]
            )

        assert exc_info.value.reason == "duplicate employee id '1'"

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceUnavailableError) as exc_info:
            read_roster(tmp_path / "missing.json")

        assert exc_info.value.source.endswith("missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "employees.json"
        path.write_text("[{not json", encoding="utf-8")

        with pytest.raises(SourceUnavailableError):
            read_roster(path)


class TestWeeklyShiftSource:
    """Test weekly-shift file validation."""

    def test_parses_templates(self, tmp_path):
        path = tmp_path / "weekly_shifts.json"
        path.write_text(
            json.dumps(
                {
                    "data": [
                        {
                            "employeeName": "Bri Galagher",
                            "shifts": [
                                {"weekday": 2, "start": "9:00", "end": "17:30"},
                                {"weekday": 6, "start": "", "end": None},
                            ],
                        },
                        {"employeeName": "Seasonal Helper"},
                    ]
                }
            ),
            encoding="utf-8",
        )

        templates = read_weekly_shifts(path)

        assert [t.employee_name for t in templates] == ["Bri Galagher", "Seasonal Helper"]
        tuesday, saturday = templates[0].shifts
        assert (tuesday.weekday, tuesday.start, tuesday.end) == (2, "9:00", "17:30")
        assert tuesday.start_time.hour == 9
        assert (saturday.start, saturday.end) == ("07:00", "17:00")
        assert templates[1].shifts == ()

    @pytest.mark.parametrize(
        "payload",
        [
            [],
            {"rows": []},
            {"data": [{"employeeName": "X", "shifts": [{"weekday": 7}]}]},
            {"data": [{"employeeName": "X", "shifts": [{"weekday": 1, "start": "ab"}]}]},
        ],
    )
    def test_rejects_malformed_documents(self, payload):
        with pytest.raises(SourceUnavailableError):
            parse_weekly_shifts(payload)

    def test_bundled_sample_files_parse(self):
        """The sample data shipped with the project is valid."""
        root = Path(__file__).resolve().parent.parent / "data"

        employees = read_roster(root / "employees.json")
        templates = read_weekly_shifts(root / "weekly_shifts.json")

        assert len(employees) == 6
        assert any(t.employee_name == "Bri Galagher" for t in templates)
