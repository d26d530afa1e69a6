"""Component showing a graded submission with per-question outcomes."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QVBoxLayout,
    QWidget,
)

from exam_app.constants.ui_constants import RESULTS_TITLE
from exam_app.core.attempt import format_remaining
from exam_app.core.models import QuestionOutcome, QuestionResult, SubmissionStatus, TestDefinition
from exam_app.styling.styles import Styles

_OUTCOME_LABELS = {
    QuestionOutcome.CORRECT: "Correct",
    QuestionOutcome.INCORRECT: "Incorrect",
    QuestionOutcome.SKIPPED: "Skipped",
    QuestionOutcome.AWARDED: "Marked",
}


class ResultsPanel(QWidget):
    """Score summary plus one line per question."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.title_label = QLabel(RESULTS_TITLE, self)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.title_label)

        self.score_label = QLabel("", self)
        self.score_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.score_label)

        stats_row = QHBoxLayout()
        self.correct_label = QLabel("", self)
        stats_row.addWidget(self.correct_label)
        self.skipped_label = QLabel("", self)
        stats_row.addWidget(self.skipped_label)
        stats_row.addStretch()
        self.time_label = QLabel("", self)
        stats_row.addWidget(self.time_label)
        layout.addLayout(stats_row)

        self.results_list = QListWidget(self)
        layout.addWidget(self.results_list, stretch=1)

    def show_status(self, test: TestDefinition | None, status: SubmissionStatus) -> None:
        percentage = status.percentage or 0
        self.title_label.setText(f"{RESULTS_TITLE}: {test.title}" if test is not None else RESULTS_TITLE)
        self.score_label.setText(f"{status.score} / {status.total_marks}  ({percentage}%)")
        self.score_label.setStyleSheet(Styles.get_score_style(percentage))
        self.correct_label.setText(f"Correct: {status.correct_count}")
        self.skipped_label.setText(f"Skipped: {status.skipped_count}")
        self.time_label.setText(f"Time taken: {format_remaining(status.time_taken_seconds)}")

        self.results_list.clear()
        for number, result in enumerate(status.results, start=1):
            self.results_list.addItem(_describe(number, result, test))


def _describe(number: int, result: QuestionResult, test: TestDefinition | None) -> str:
    line = (
        f"Q{number}. {_OUTCOME_LABELS[result.outcome]}"
        f"  {result.awarded_marks}/{result.max_marks}"
    )
    if result.correct_option_index is None:
        return line
    correct_letter = chr(ord("A") + result.correct_option_index)
    if isinstance(result.selected, int):
        line += f"  (your answer {chr(ord('A') + result.selected)}, correct {correct_letter})"
    else:
        line += f"  (correct {correct_letter})"
    question = test.question_by_id(result.question_id) if test is not None else None
    if question is not None and result.correct_option_index < len(question.options):
        line += f": {question.options[result.correct_option_index]}"
    return line
