"""Runs submission calls off the Qt thread and reports back via signals."""

from __future__ import annotations

import logging
from threading import Thread

from PySide6.QtCore import QObject, Signal

from exam_app.core.errors import TestServiceError
from exam_app.core.models import Submission
from exam_app.core.services.test_service import TestService
from exam_app.core.session_controller import TestSessionController, submit_or_recover

logger = logging.getLogger(__name__)


class SubmitDispatcher(QObject):
    """Sends a submission on a worker thread.

    The outcome is emitted as a signal; Qt queues it onto the thread that owns
    this object, where it is handed to the controller as an event.
    """

    succeeded = Signal(object)
    failed = Signal(object)

    def __init__(
        self,
        service: TestService,
        controller: TestSessionController,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._service = service
        self._controller = controller
        self.succeeded.connect(controller.handle_submit_success)
        self.failed.connect(controller.handle_submit_failure)
        controller.set_dispatcher(self.dispatch)

    def dispatch(self, submission: Submission) -> None:
        worker = Thread(
            target=self._run,
            args=(submission,),
            name=f"Submit-{submission.test_id}-{submission.student_id}",
            daemon=True,
        )
        worker.start()

    def _run(self, submission: Submission) -> None:
        try:
            status = submit_or_recover(self._service, submission)
        except TestServiceError as exc:
            self.failed.emit(exc)
            return
        except Exception as exc:
            logger.exception("Unexpected error while submitting test=%s", submission.test_id)
            self.failed.emit(TestServiceError(str(exc)))
            return
        self.succeeded.emit(status)
