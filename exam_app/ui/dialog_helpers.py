"""Helper functions for common dialog patterns in the student UI."""

from __future__ import annotations

from PySide6.QtWidgets import QMessageBox, QWidget

from exam_app.constants.ui_constants import (
    RETRY_BUTTON,
    SUBMIT_CONFIRM_TEMPLATE,
    SUBMIT_CONFIRM_TITLE,
)


def confirm_submit(parent: QWidget, answered: int, total: int) -> bool:
    """Ask before the final submit.

    Args:
        parent: Parent widget for the dialog
        answered: Number of questions with an answer
        total: Number of questions in the test

    Returns:
        True if the student confirmed, False otherwise
    """
    reply = QMessageBox.question(
        parent,
        SUBMIT_CONFIRM_TITLE,
        SUBMIT_CONFIRM_TEMPLATE.format(answered=answered, total=total),
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No,
    )
    return reply == QMessageBox.Yes


def ask_retry(parent: QWidget, title: str, message: str) -> bool:
    """Blocking error dialog with a Retry button.

    Returns:
        True if the student chose to retry, False if the dialog was dismissed
    """
    box = QMessageBox(parent)
    box.setIcon(QMessageBox.Critical)
    box.setWindowTitle(title)
    box.setText(message)
    retry_button = box.addButton(RETRY_BUTTON, QMessageBox.AcceptRole)
    box.addButton(QMessageBox.Close)
    box.exec()
    return box.clickedButton() is retry_button


def show_error(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.critical(parent, title, message)


def show_info(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.information(parent, title, message)
