"""Component showing the running attempt: timer, navigator, question and answer input."""

from __future__ import annotations

from typing import Callable

from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QButtonGroup,
    QHBoxLayout,
    QLabel,
    QPlainTextEdit,
    QProgressBar,
    QPushButton,
    QRadioButton,
    QVBoxLayout,
    QWidget,
)

from exam_app.constants.ui_constants import (
    NEXT_BUTTON,
    PREV_BUTTON,
    QUESTION_TYPE_HINTS,
    RETRY_BUTTON,
    SUBMIT_BUTTON,
    SUBMITTING_BUTTON,
    TEXT_ANSWER_PLACEHOLDER,
    TIME_REMAINING_LABEL,
)
from exam_app.core.attempt import AttemptStateMachine
from exam_app.styling.styles import Styles
from exam_app.ui.question_renderer import render_question


class AttemptPanel(QWidget):
    """UI component bound to one :class:`AttemptStateMachine`."""

    def __init__(
        self,
        on_submit: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.on_submit = on_submit

        self._attempt: AttemptStateMachine | None = None
        self._rendered_index: int | None = None
        self._updating: bool = False
        self._font_size: int = 14
        self._option_buttons: list[QRadioButton] = []
        self._navigator_buttons: list[QPushButton] = []

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        # Title and countdown
        header_row = QHBoxLayout()
        self.title_label = QLabel("", self)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        self.title_label.setWordWrap(True)
        header_row.addWidget(self.title_label, stretch=1)

        self.time_caption = QLabel(TIME_REMAINING_LABEL, self)
        self.time_caption.setStyleSheet(Styles.get_muted_label_style())
        header_row.addWidget(self.time_caption)
        self.timer_label = QLabel("00:00", self)
        self.timer_label.setStyleSheet(Styles.get_timer_style(urgent=False))
        header_row.addWidget(self.timer_label)
        layout.addLayout(header_row)

        # Progress
        progress_row = QHBoxLayout()
        self.progress_bar = QProgressBar(self)
        self.progress_bar.setTextVisible(False)
        progress_row.addWidget(self.progress_bar, stretch=1)
        self.answered_label = QLabel("", self)
        progress_row.addWidget(self.answered_label)
        layout.addLayout(progress_row)

        # Question navigator, filled in by bind()
        self.navigator_row = QHBoxLayout()
        layout.addLayout(self.navigator_row)

        # Question header
        question_header = QHBoxLayout()
        self.question_number_label = QLabel("", self)
        self.question_number_label.setStyleSheet("font-weight: bold;")
        question_header.addWidget(self.question_number_label)
        self.type_badge = QLabel("", self)
        self.type_badge.setStyleSheet(Styles.get_muted_label_style())
        question_header.addWidget(self.type_badge)
        question_header.addStretch()
        self.marks_label = QLabel("", self)
        question_header.addWidget(self.marks_label)
        layout.addLayout(question_header)

        self.preview_view = QWebEngineView(self)
        layout.addWidget(self.preview_view, stretch=1)

        # MCQ options
        self.options_container = QWidget(self)
        self.options_layout = QVBoxLayout()
        self.options_container.setLayout(self.options_layout)
        self.option_group = QButtonGroup(self)
        self.option_group.setExclusive(True)
        self.option_group.idClicked.connect(self._handle_option_selected)
        layout.addWidget(self.options_container)

        # Free-text answer
        self.text_container = QWidget(self)
        text_layout = QVBoxLayout()
        text_layout.setContentsMargins(0, 0, 0, 0)
        self.text_container.setLayout(text_layout)
        self.hint_label = QLabel("", self.text_container)
        self.hint_label.setStyleSheet(Styles.get_muted_label_style())
        text_layout.addWidget(self.hint_label)
        self.text_edit = QPlainTextEdit(self.text_container)
        self.text_edit.setPlaceholderText(TEXT_ANSWER_PLACEHOLDER)
        self.text_edit.textChanged.connect(self._handle_text_changed)
        text_layout.addWidget(self.text_edit)
        layout.addWidget(self.text_container)

        # Navigation and submit
        button_row = QHBoxLayout()
        self.prev_button = QPushButton(PREV_BUTTON, self)
        self.prev_button.clicked.connect(self._handle_previous)
        button_row.addWidget(self.prev_button)
        self.next_button = QPushButton(NEXT_BUTTON, self)
        self.next_button.clicked.connect(self._handle_next)
        button_row.addWidget(self.next_button)
        button_row.addStretch()
        self.submit_button = QPushButton(SUBMIT_BUTTON, self)
        self.submit_button.clicked.connect(self._handle_submit)
        button_row.addWidget(self.submit_button)
        layout.addLayout(button_row)

    # --- Binding ---

    def bind(self, attempt: AttemptStateMachine) -> None:
        self._attempt = attempt
        self._rendered_index = None
        self.title_label.setText(attempt.test.title)
        self.progress_bar.setRange(0, attempt.question_count)
        self._rebuild_navigator(attempt.question_count)
        attempt.add_listener(self.refresh)
        self.refresh()

    def refresh(self) -> None:
        attempt = self._attempt
        if attempt is None:
            return

        self.timer_label.setText(attempt.formatted_time)
        self.timer_label.setStyleSheet(Styles.get_timer_style(urgent=attempt.is_urgent))

        self.progress_bar.setValue(attempt.answered_count)
        self.answered_label.setText(f"{attempt.answered_count} / {attempt.question_count} answered")

        for idx, (button, question) in enumerate(zip(self._navigator_buttons, attempt.test.questions)):
            button.setChecked(idx == attempt.current_index)
            button.setStyleSheet(Styles.get_navigator_style(attempt.is_answered(question.id)))

        if attempt.current_index != self._rendered_index:
            self._show_question()

        is_open = attempt.is_open()
        self.prev_button.setEnabled(is_open and attempt.current_index > 0)
        self.next_button.setEnabled(is_open and attempt.current_index < attempt.question_count - 1)
        for button in self._navigator_buttons:
            button.setEnabled(is_open)
        self.options_container.setEnabled(is_open)
        self.text_edit.setReadOnly(not is_open)
        self.submit_button.setEnabled(is_open)
        self.submit_button.setText(SUBMIT_BUTTON if is_open else SUBMITTING_BUTTON)

    def show_retry(self) -> None:
        """Turn the submit button into a retry for the snapshot that failed to send."""
        self.submit_button.setText(RETRY_BUTTON)
        self.submit_button.setEnabled(True)

    # --- Rendering ---

    def _rebuild_navigator(self, count: int) -> None:
        while self.navigator_row.count():
            item = self.navigator_row.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()

        self._navigator_buttons = []
        for idx in range(count):
            button = QPushButton(str(idx + 1), self)
            button.setCheckable(True)
            button.clicked.connect(lambda _checked=False, index=idx: self._handle_jump(index))
            self.navigator_row.addWidget(button)
            self._navigator_buttons.append(button)
        self.navigator_row.addStretch()

    def _show_question(self) -> None:
        attempt = self._attempt
        if attempt is None:
            return
        question = attempt.current_question
        self._rendered_index = attempt.current_index
        self._updating = True
        try:
            self.question_number_label.setText(
                f"Question {attempt.current_index + 1} of {attempt.question_count}"
            )
            self.type_badge.setText(question.question_type.value)
            marks_text = f"{question.marks} mark{'s' if question.marks != 1 else ''}"
            if question.negative_marks:
                marks_text += f" (-{question.negative_marks} if wrong)"
            self.marks_label.setText(marks_text)
            self.preview_view.setHtml(render_question(question, self._font_size))

            self._clear_options()
            current = attempt.answer_for(question.id)
            if question.is_mcq:
                for idx, option in enumerate(question.options):
                    radio = QRadioButton(f"{chr(ord('A') + idx)}. {option}", self.options_container)
                    radio.setStyleSheet(f"font-size: {self._font_size}pt;")
                    radio.setChecked(current == idx)
                    self.option_group.addButton(radio, idx)
                    self.options_layout.addWidget(radio)
                    self._option_buttons.append(radio)
                self.options_container.setVisible(True)
                self.text_container.setVisible(False)
            else:
                self.hint_label.setText(QUESTION_TYPE_HINTS.get(question.question_type.value, ""))
                self.text_edit.setPlainText(current if isinstance(current, str) else "")
                self.options_container.setVisible(False)
                self.text_container.setVisible(True)
        finally:
            self._updating = False

    def _clear_options(self) -> None:
        for button in self._option_buttons:
            self.option_group.removeButton(button)
            self.options_layout.removeWidget(button)
            button.deleteLater()
        self._option_buttons = []

    # --- Handlers ---

    def _handle_option_selected(self, option_index: int) -> None:
        if self._updating or self._attempt is None:
            return
        self._attempt.answer(self._attempt.current_question.id, option_index)

    def _handle_text_changed(self) -> None:
        if self._updating or self._attempt is None:
            return
        question = self._attempt.current_question
        if question.is_mcq:
            return
        self._attempt.answer(question.id, self.text_edit.toPlainText())

    def _handle_jump(self, index: int) -> None:
        if self._attempt is not None:
            self._attempt.navigate(index)
            # Clicking the current chip toggles it off without a state change.
            self.refresh()

    def _handle_previous(self) -> None:
        if self._attempt is not None:
            self._attempt.previous_question()

    def _handle_next(self) -> None:
        if self._attempt is not None:
            self._attempt.next_question()

    def _handle_submit(self) -> None:
        self.on_submit()
