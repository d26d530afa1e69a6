"""Qt main window showing one page per phase of a test attempt."""

from __future__ import annotations

import logging

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from exam_app.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION, HELP_TEXT
from exam_app.constants.ui_constants import (
    AUTO_SUBMIT_MESSAGE,
    AUTO_SUBMIT_TITLE,
    LOAD_FAILED_TITLE,
    LOADING_MESSAGE,
    NOT_FOUND_MESSAGE,
    SUBMIT_FAILED_TITLE,
    WINDOW_TITLE,
)
from exam_app.core.attempt import SubmitReason
from exam_app.core.errors import TestServiceError
from exam_app.core.services.test_service import TestService
from exam_app.core.session_controller import SessionPhase, TestSessionController
from exam_app.styling.styles import Styles
from exam_app.ui.clock_driver import QtClockDriver
from exam_app.ui.components.attempt_panel import AttemptPanel
from exam_app.ui.components.pending_panel import PendingPanel
from exam_app.ui.components.results_panel import ResultsPanel
from exam_app.ui.dialog_helpers import ask_retry, confirm_submit, show_info
from exam_app.ui.submit_dispatcher import SubmitDispatcher

logger = logging.getLogger(__name__)


class StudentMainWindow(QMainWindow):
    """Main Qt window following the session controller's phase."""

    def __init__(self, service: TestService, controller: TestSessionController) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)

        self.controller = controller
        self.dispatcher = SubmitDispatcher(service, controller, self)
        self.clock_driver = QtClockDriver(controller, parent=self)

        self._shown_phase: SessionPhase | None = None
        self._attempt_bound = False
        self._failure_dialog_open = False

        self._build_ui()
        self.setStyleSheet(Styles.get_main_window_style())
        self.controller.add_listener(self._handle_controller_changed)

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)
        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        button_row = QHBoxLayout()
        button_row.addStretch()
        self.about_button = QPushButton(f"About {APP_NAME}", self)
        self.about_button.clicked.connect(self._handle_about)
        button_row.addWidget(self.about_button)
        self.help_button = QPushButton("Help", self)
        self.help_button.clicked.connect(self._handle_help)
        button_row.addWidget(self.help_button)
        root_layout.addLayout(button_row)

        self.phase_stack = QStackedWidget(self)
        self.loading_label = self._centered_label(LOADING_MESSAGE)
        self.not_found_label = self._centered_label(NOT_FOUND_MESSAGE)
        self.attempt_panel = AttemptPanel(on_submit=self._handle_submit_requested, parent=self)
        self.pending_panel = PendingPanel(self)
        self.results_panel = ResultsPanel(self)

        self._phase_pages = {
            SessionPhase.LOADING: self.loading_label,
            SessionPhase.NOT_FOUND: self.not_found_label,
            SessionPhase.IN_PROGRESS: self.attempt_panel,
            SessionPhase.PENDING: self.pending_panel,
            SessionPhase.GRADED: self.results_panel,
        }
        for page in self._phase_pages.values():
            self.phase_stack.addWidget(page)
        root_layout.addWidget(self.phase_stack)

    def _centered_label(self, text: str) -> QLabel:
        label = QLabel(text, self)
        label.setAlignment(Qt.AlignCenter)
        label.setWordWrap(True)
        label.setStyleSheet(Styles.get_large_label_style())
        return label

    # --- Lifecycle ---

    def start(self) -> bool:
        """Show the window and let the controller settle on its first phase.

        Returns False when the student gave up after the test failed to load.
        """
        self.show()
        while True:
            try:
                self.controller.enter()
            except TestServiceError as exc:
                logger.warning("Loading test failed: %s", exc)
                if ask_retry(self, LOAD_FAILED_TITLE, str(exc)):
                    continue
                return False
            break
        self._handle_controller_changed()
        return True

    def closeEvent(self, event: QCloseEvent) -> None:
        self.clock_driver.stop()
        self.controller.leave()
        super().closeEvent(event)

    # --- Controller events ---

    def _handle_controller_changed(self) -> None:
        phase = self.controller.phase
        if phase is SessionPhase.IN_PROGRESS and not self._attempt_bound:
            attempt = self.controller.attempt
            if attempt is not None:
                self.attempt_panel.bind(attempt)
                self._attempt_bound = True
                self.clock_driver.start()

        if phase is not self._shown_phase:
            self._show_phase(phase)
        if phase is SessionPhase.IN_PROGRESS:
            self.attempt_panel.refresh()

        if self.controller.submit_error is not None and not self.controller.is_submitting:
            self._handle_submit_failed()

    def _show_phase(self, phase: SessionPhase) -> None:
        previous = self._shown_phase
        self._shown_phase = phase
        if phase in (SessionPhase.PENDING, SessionPhase.GRADED):
            self.clock_driver.stop()
            status = self.controller.status
            if status is not None:
                panel = self.pending_panel if phase is SessionPhase.PENDING else self.results_panel
                panel.show_status(self.controller.test, status)
        self.phase_stack.setCurrentWidget(self._phase_pages[phase])

        attempt = self.controller.attempt
        if (
            previous is SessionPhase.IN_PROGRESS
            and attempt is not None
            and attempt.submit_reason is SubmitReason.TIMEOUT
        ):
            show_info(self, AUTO_SUBMIT_TITLE, AUTO_SUBMIT_MESSAGE)

    def _handle_submit_requested(self) -> None:
        attempt = self.controller.attempt
        if attempt is None:
            return
        if not attempt.is_open():
            self.controller.retry_submit()
            return
        if not confirm_submit(self, attempt.answered_count, attempt.question_count):
            return
        self.controller.submit()

    def _handle_submit_failed(self) -> None:
        if self._failure_dialog_open:
            return
        error = self.controller.submit_error
        self._failure_dialog_open = True
        try:
            retry = ask_retry(self, SUBMIT_FAILED_TITLE, str(error))
        finally:
            self._failure_dialog_open = False
        if retry:
            self.controller.retry_submit()
        elif self.controller.resume_attempt():
            self.clock_driver.start()
        else:
            self.attempt_panel.show_retry()

    # --- Menu actions ---

    def _handle_about(self) -> None:
        details = (
            f"{APP_NAME} v{APP_VERSION}\n"
            f"License: {APP_LICENSE}\n\n"
            f"{APP_ABOUT_TEXT}"
        )
        show_info(self, f"About {APP_NAME}", details)

    def _handle_help(self) -> None:
        show_info(self, f"{APP_NAME} Help", HELP_TEXT)
