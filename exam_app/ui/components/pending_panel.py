"""Component shown when a submission is waiting for the teacher to grade it."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget

from exam_app.constants.ui_constants import PENDING_MESSAGE, PENDING_TITLE
from exam_app.core.attempt import format_remaining
from exam_app.core.models import SubmissionStatus, TestDefinition
from exam_app.styling.styles import Styles


class PendingPanel(QWidget):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout()
        self.setLayout(layout)
        layout.addStretch()

        self.title_label = QLabel(PENDING_TITLE, self)
        self.title_label.setAlignment(Qt.AlignCenter)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.title_label)

        self.test_label = QLabel("", self)
        self.test_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.test_label)

        self.message_label = QLabel(PENDING_MESSAGE, self)
        self.message_label.setAlignment(Qt.AlignCenter)
        self.message_label.setWordWrap(True)
        layout.addWidget(self.message_label)

        self.time_label = QLabel("", self)
        self.time_label.setAlignment(Qt.AlignCenter)
        self.time_label.setStyleSheet(Styles.get_muted_label_style())
        layout.addWidget(self.time_label)
        layout.addStretch()

    def show_status(self, test: TestDefinition | None, status: SubmissionStatus) -> None:
        self.test_label.setText(test.title if test is not None else "")
        self.time_label.setText(f"Time taken: {format_remaining(status.time_taken_seconds)}")
