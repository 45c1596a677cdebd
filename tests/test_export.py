"""Unit tests for export service."""
import csv
import io
import json

import pytest
from training_log_api.parsers.log_parser import parse_content
from training_log_api.services.export_service import ExportService


def structure(sessions):
    """Titles, dates, exercise names and targets of parsed sessions."""
    return [
        (s.title, s.date, [(e.name, e.target_sets, e.target) for e in s.exercises])
        for s in sessions
    ]


def effort_values(sessions):
    """Loads and states of every effort, with results compared in seconds for time."""
    values = []
    for session in sessions:
        for exercise in session.exercises:
            for exercise_set in exercise.sets:
                for effort in exercise_set.efforts:
                    result = effort.result
                    amount = result.duration.seconds if result.kind == "time" else result.count
                    values.append((effort.load, result.state, amount, exercise_set.comment))
    return values


class TestRenderNotation:
    """Canonical notation output."""

    def test_push_day(self, push_day_log):
        text = ExportService.render_notation(parse_content(push_day_log))

        assert text == (
            "# Push Day\n"
            "20/02/2025\n"
            "Bench Press (4x8)\n"
            "- 45kg A\n"
            "- 45kg C7\n"
            "- 40kg C6\n"
            "- 35kg A\n"
        )

    def test_drop_sets_and_comments(self):
        text = ExportService.render_notation(
            parse_content("# T\n01/03/2025 09:05\nFlyes (3x12):\n- 10/5kg C7/5 'burn'\n")
        )

        assert "01/03/2025 09:05" in text
        assert "- 10kg/5kg C7/5 'burn'" in text

    def test_time_objective(self):
        text = ExportService.render_notation(parse_content("Plank (4*1min) : A, /, C55s"))

        assert "Plank (4x1min)" in text
        assert "- C55s" in text

    def test_empty(self):
        assert ExportService.render_notation([]) == ""

    def test_effort_without_load_or_result_keeps_its_set(self):
        text = ExportService.render_notation(
            parse_content("Squat (3x5): 60kg A\n- skipped 'knee'\n- /, 60kg A\n")
        )

        assert text == "#\nSquat (3x5)\n- 60kg A\n- _ 'knee'\n- _\n- 60kg A\n"

    def test_set_count_survives_round_trip(self):
        original = parse_content("Squat (3x5): /, 60kg A\n")
        reparsed = parse_content(ExportService.render_notation(original))

        assert len(reparsed[0].exercises[0].sets) == 2
        assert reparsed[0].exercises[0].sets[0].efforts[0].load is None

    def test_round_trip(self, training_log):
        original = parse_content(training_log)
        reparsed = parse_content(ExportService.render_notation(original))

        assert structure(reparsed) == structure(original)
        assert effort_values(reparsed) == effort_values(original)

    @pytest.mark.parametrize("text", [
        "# \n",
        "Squat (5x5)\nDeadlift (1x5)\n",
        "Row (3x10): 22.5kg A, / B, 20kg C\n",
        "Curl (3x12):\n- 15/10/5kg A\n- 15/10kg C8\n",
        "Hang (3x30s): C20, / A, /\n",
        "Squat (3x5): /, 60kg A\n",
        "Squat (3x5): 60kg A\n- skipped 'knee'\n- C3\n",
        "Curl (3x12):\n- 15/10kg C8\n- 80/70\n",
    ])
    def test_round_trip_shapes(self, text):
        original = parse_content(text)
        reparsed = parse_content(ExportService.render_notation(original))

        assert structure(reparsed) == structure(original)
        assert effort_values(reparsed) == effort_values(original)


class TestRenderCsv:
    """Flat CSV export."""

    def test_rows(self, training_log):
        text = ExportService.render_csv(parse_content(training_log))
        rows = list(csv.reader(io.StringIO(text)))

        assert rows[0] == ["Date", "Exercise", "Set", "Weight", "Reps", "Time", "Status", "Comment"]
        assert len(rows) == 1 + 17
        assert rows[1] == ["2025-02-20", "Bench Press", "1", "45", "8", "", "A", ""]
        assert ["2025-02-20", "Cable Flyes", "2", "10", "12", "", "B", "shoulder felt tight"] in rows
        assert ["2025-02-20", "Plank", "1", "", "", "60", "A", ""] in rows

    def test_every_cell_is_quoted(self):
        text = ExportService.render_csv(parse_content('# T\n01/01/2025\nSquat (1x5): 100kg A\n'))
        assert text.splitlines()[1] == '"2025-01-01","Squat","1","100","5","","A",""'

    def test_undated_sessions_are_skipped(self):
        text = ExportService.render_csv(parse_content("Squat (1x5): 100kg A"))
        assert text.splitlines() == ['"Date","Exercise","Set","Weight","Reps","Time","Status","Comment"']


class TestRenderJson:
    def test_json(self, push_day_log):
        data = json.loads(ExportService.render_json(parse_content(push_day_log)))

        assert data[0]["title"] == "Push Day"
        assert data[0]["date"] == "2025-02-20T00:00:00"
        effort = data[0]["exercises"][0]["sets"][1]["efforts"][0]
        assert effort["load"] == {"value": 45, "unit": "kg"}
        assert effort["result"] == {"kind": "reps", "count": 7, "state": "C"}
        assert effort["is_repeat"] is False
