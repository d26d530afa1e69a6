"""Qt UI components for the student application."""

from .dialog_helpers import (
    ask_retry,
    confirm_submit,
    show_error,
    show_info,
)
from .question_renderer import render_question
from .student_main_window import StudentMainWindow

__all__ = [
    "StudentMainWindow",
    "ask_retry",
    "confirm_submit",
    "show_error",
    "show_info",
    "render_question",
]
