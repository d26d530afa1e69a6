"""Page-level coordinator deciding which phase of a test attempt to show.

On :meth:`TestSessionController.enter` the controller asks the test service
once for the test and the student's existing submission:

* test missing or unpublished -> ``NOT_FOUND`` (the attempt is never built)
* no submission -> an :class:`AttemptStateMachine` is built and started
* pending submission -> ``PENDING``
* graded submission -> ``GRADED``

The submission produced by the attempt (user submit or timeout) is handed to
a dispatcher. The default dispatcher calls the service inline; the Qt client
runs the call on a worker thread and feeds the outcome back through
:meth:`handle_submit_success` / :meth:`handle_submit_failure`. Both go through
:func:`submit_or_recover`, so a retry whose first send was stored but never
acknowledged settles on the stored status instead of a duplicate rejection.
"""

from __future__ import annotations

from enum import Enum
import logging
from typing import Callable

from exam_app.core.attempt import AttemptStateMachine, ClockFactory
from exam_app.core.clock import CountdownClock
from exam_app.core.errors import NotFoundError, SubmissionRejectedError, TestServiceError
from exam_app.core.models import Submission, SubmissionStatus, TestDefinition
from exam_app.core.services.test_service import TestService

logger = logging.getLogger(__name__)

SubmitDispatch = Callable[[Submission], None]


def submit_or_recover(service: TestService, submission: Submission) -> SubmissionStatus:
    """Submit, falling back to the stored status when the server already holds one.

    When the response to an accepted submission is lost, the retry is rejected as a
    duplicate. The submission the server kept is then the real outcome.
    """
    try:
        return service.submit_attempt(submission)
    except SubmissionRejectedError:
        existing = service.fetch_existing_submission(submission.test_id, submission.student_id)
        if existing is None:
            raise
        logger.info(
            "Submission for test=%s student=%s already stored; using its status",
            submission.test_id,
            submission.student_id,
        )
        return existing


class SessionPhase(str, Enum):
    LOADING = "loading"
    NOT_FOUND = "not_found"
    IN_PROGRESS = "in_progress"
    PENDING = "pending"
    GRADED = "graded"


class TestSessionController:
    """Routes one (test, student) pair to the right attempt lifecycle phase."""

    __test__ = False

    def __init__(
        self,
        service: TestService,
        test_id: str,
        student_id: str,
        *,
        clock_factory: ClockFactory = CountdownClock,
    ) -> None:
        self._service = service
        self._test_id = test_id
        self._student_id = student_id
        self._clock_factory = clock_factory
        self._dispatch: SubmitDispatch = self._dispatch_inline

        self._phase = SessionPhase.LOADING
        self._test: TestDefinition | None = None
        self._attempt: AttemptStateMachine | None = None
        self._status: SubmissionStatus | None = None
        self._submit_error: TestServiceError | None = None
        self._submit_in_flight: bool = False
        self._listeners: list[Callable[[], None]] = []

    def set_dispatcher(self, dispatch: SubmitDispatch) -> None:
        """Replace the inline service call, e.g. with a worker-thread dispatcher."""
        self._dispatch = dispatch

    def add_listener(self, callback: Callable[[], None]) -> None:
        """Called after every phase change or submission outcome."""
        self._listeners.append(callback)

    # --- Lifecycle ---

    def enter(self) -> SessionPhase:
        """Query the test service once and settle on the phase to display.

        A transport failure propagates as :class:`TestServiceError` and leaves the
        controller in ``LOADING`` so the call can be repeated.
        """
        if self._phase is not SessionPhase.LOADING:
            return self._phase
        try:
            self._test = self._service.fetch_attemptable_test(self._test_id, self._student_id)
        except NotFoundError:
            logger.info("Test '%s' not found for '%s'", self._test_id, self._student_id)
            self._set_phase(SessionPhase.NOT_FOUND)
            return self._phase

        existing = self._service.fetch_existing_submission(self._test_id, self._student_id)
        if existing is not None:
            self._status = existing
            self._set_phase(SessionPhase.GRADED if existing.is_graded else SessionPhase.PENDING)
            return self._phase

        self._attempt = AttemptStateMachine(
            self._test,
            self._student_id,
            on_submission=self._send,
            clock_factory=self._clock_factory,
        )
        self._set_phase(SessionPhase.IN_PROGRESS)
        self._attempt.start()
        return self._phase

    def leave(self) -> None:
        """Tear down: stop the attempt clock so no tick reaches a discarded view."""
        if self._attempt is not None:
            self._attempt.close()

    # --- Submission ---

    def submit(self) -> bool:
        """User pressed submit. False when the attempt is not open."""
        if self._attempt is None:
            return False
        return self._attempt.request_submit() is not None

    def retry_submit(self) -> bool:
        """Re-send the snapshot taken on the first submit after a failure."""
        if self._attempt is None or self._submit_in_flight:
            return False
        submission = self._attempt.pending_submission
        if submission is None or self._submit_error is None:
            return False
        logger.info("Retrying submission for test=%s student=%s", self._test_id, self._student_id)
        self._send(submission)
        return True

    def resume_attempt(self) -> bool:
        """Give up on a failed submission and reopen the attempt, if time remains."""
        if self._attempt is None or self._submit_in_flight or self._submit_error is None:
            return False
        if not self._attempt.resume():
            return False
        self._submit_error = None
        self._notify()
        return True

    def handle_submit_success(self, status: SubmissionStatus) -> None:
        self._submit_in_flight = False
        if self._attempt is None or not self._attempt.acknowledge():
            return
        self._submit_error = None
        self._status = status
        self._set_phase(SessionPhase.GRADED if status.is_graded else SessionPhase.PENDING)

    def handle_submit_failure(self, error: TestServiceError) -> None:
        self._submit_in_flight = False
        self._submit_error = error
        logger.warning(
            "Submission failed for test=%s student=%s: %s",
            self._test_id,
            self._student_id,
            error,
        )
        self._notify()

    # --- State ---

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def test(self) -> TestDefinition | None:
        return self._test

    @property
    def attempt(self) -> AttemptStateMachine | None:
        return self._attempt

    @property
    def status(self) -> SubmissionStatus | None:
        return self._status

    @property
    def submit_error(self) -> TestServiceError | None:
        return self._submit_error

    @property
    def is_submitting(self) -> bool:
        return self._submit_in_flight

    @property
    def student_id(self) -> str:
        return self._student_id

    # --- Internals ---

    def _send(self, submission: Submission) -> None:
        self._submit_in_flight = True
        self._submit_error = None
        self._notify()
        self._dispatch(submission)

    def _dispatch_inline(self, submission: Submission) -> None:
        try:
            status = submit_or_recover(self._service, submission)
        except TestServiceError as exc:
            self.handle_submit_failure(exc)
            return
        self.handle_submit_success(status)

    def _set_phase(self, phase: SessionPhase) -> None:
        if phase is not self._phase:
            logger.info("Session %s/%s -> %s", self._test_id, self._student_id, phase.value)
        self._phase = phase
        self._notify()

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback()
