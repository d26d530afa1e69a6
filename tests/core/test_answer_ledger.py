"""
Unit Tests for AnswerLedger
"""

import pytest

from exam_app.core.answer_ledger import AnswerLedger


class TestAnswerLedger:
    """Tests for AnswerLedger."""

    def test_set_when_same_id_twice_then_last_write_wins(self):
        """Re-answering replaces the earlier value."""
        ledger = AnswerLedger()
        ledger.set("q1", 0)
        ledger.set("q1", 2)
        assert ledger.get("q1") == 2
        assert ledger.answered_count() == 1

    def test_answered_count_when_distinct_ids_then_counts_each(self):
        """Count equals the number of distinct ids."""
        ledger = AnswerLedger()
        for question_id, value in [("q1", 0), ("q2", "text"), ("q1", 3), ("q3", "")]:
            ledger.set(question_id, value)
        assert ledger.answered_count() == 3
        assert len(ledger) == 3

    def test_get_when_missing_then_returns_none(self):
        """Unanswered questions have no entry."""
        ledger = AnswerLedger()
        assert ledger.get("q9") is None
        assert ledger.has_answer("q9") is False
        assert "q9" not in ledger

    def test_snapshot_when_ledger_changes_later_then_snapshot_unchanged(self):
        """Snapshots are detached copies."""
        ledger = AnswerLedger()
        ledger.set("q1", 1)
        snapshot = ledger.snapshot()
        ledger.set("q1", 3)
        ledger.set("q2", "late")
        assert dict(snapshot) == {"q1": 1}

    def test_snapshot_when_mutated_then_raises_type_error(self):
        """Snapshots are read-only."""
        ledger = AnswerLedger()
        ledger.set("q1", 1)
        snapshot = ledger.snapshot()
        with pytest.raises(TypeError):
            snapshot["q1"] = 2  # type: ignore[index]
