"""
Unit Tests for the test exporter and the results CSV
"""

from dataclasses import replace
from datetime import datetime, timezone

from conftest import essay, make_test, mcq
from exam_app.core.models import SubmissionState, SubmissionSummary
from exam_app.core.results_exporter import RESULTS_HEADER, export_results_csv
from exam_app.core.test_exporter import serialize_test
from exam_app.core.test_importer import parse_test_text


class TestSerializeTest:
    """Tests for writing the text format."""

    def test_serialize_test_when_header_then_all_fields_written(self):
        test = replace(make_test(mcq("q1")), description="Two\n lines", is_published=False)
        header = serialize_test(test).split("\n\n---\n\n")[0]
        assert header.splitlines() == [
            "TITLE: Sample test",
            "ID: t1",
            "DESCRIPTION: Two lines",
            "DURATION: 10",
            "PUBLISHED: no",
        ]

    def test_serialize_test_when_mcq_then_letters_and_key(self):
        block = serialize_test(make_test(mcq("q1", correct=3, marks=2, negative=1))).split("---")[1]
        assert "A: A option" in block
        assert "D: D option" in block
        assert "CORRECT: D" in block
        assert "MARKS: 2" in block
        assert "NEGATIVE: 1" in block
        assert "TYPE:" not in block

    def test_serialize_test_when_free_text_then_type_and_no_options(self):
        block = serialize_test(make_test(essay("q1", marks=4))).split("---")[1]
        assert "TYPE: Essay" in block
        assert "A:" not in block
        assert "CORRECT" not in block

    def test_serialize_test_when_parsed_again_then_same_test(self, mixed_test):
        """Exported text loads back unchanged."""
        assert parse_test_text(serialize_test(mixed_test)) == mixed_test

    def test_serialize_test_when_multiline_text_then_continuation_lines(self):
        question = replace(mcq("q1", correct=0), text="Line one\nLine two")
        text = serialize_test(make_test(question))
        assert "Q: Line one\nLine two\n" in text
        assert parse_test_text(text).questions[0].text == "Line one\nLine two"


class TestExportResultsCsv:
    """Tests for the teacher's results CSV."""

    def test_export_results_csv_when_no_rows_then_header_only(self):
        assert export_results_csv([]) == ",".join(RESULTS_HEADER) + "\n"

    def test_export_results_csv_when_pending_then_blank_score(self):
        submitted = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)
        rows = [
            SubmissionSummary("alice", SubmissionState.GRADED, 7, 300, submitted, score=5),
            SubmissionSummary("bob", SubmissionState.PENDING, 7, 120, None),
        ]
        lines = export_results_csv(rows).splitlines()
        assert lines[1] == "alice,5,7,300,2024-05-01T09:30:00+00:00"
        assert lines[2] == "bob,,7,120,"
