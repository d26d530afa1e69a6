"""In-memory record of a student's current answers."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from exam_app.core.models import Answer


class AnswerLedger:
    """Mutable mapping of question id to the latest answer given.

    No validation against the answer key happens here; a missing entry means
    the question is unanswered.
    """

    def __init__(self) -> None:
        self._answers: dict[str, Answer] = {}

    def set(self, question_id: str, answer: Answer) -> None:
        self._answers[question_id] = answer

    def get(self, question_id: str) -> Answer | None:
        return self._answers.get(question_id)

    def has_answer(self, question_id: str) -> bool:
        return question_id in self._answers

    def answered_count(self) -> int:
        return len(self._answers)

    def snapshot(self) -> Mapping[str, Answer]:
        """Return a read-only copy that later writes cannot reach."""
        return MappingProxyType(dict(self._answers))

    def __len__(self) -> int:
        return len(self._answers)

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._answers
