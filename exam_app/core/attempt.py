"""State machine for a single timed test attempt.

States move strictly forward: ``IN_PROGRESS -> SUBMITTING -> SUBMITTED``.
Only ``IN_PROGRESS`` accepts navigation, answers and clock ticks. The user
submit path and the clock timeout path both funnel through
:meth:`AttemptStateMachine._begin_submit`, so whichever arrives first emits
the one and only :class:`Submission`; the other is rejected. A failed hand-off
leaves the machine in ``SUBMITTING`` holding the snapshot so a retry sends the
same answers. The caller may instead :meth:`resume` the attempt.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Callable

from exam_app.constants.exam_constants import URGENT_THRESHOLD_SECONDS
from exam_app.core.answer_ledger import AnswerLedger
from exam_app.core.clock import CountdownClock, ExpireCallback, TickCallback
from exam_app.core.models import Answer, Question, Submission, TestDefinition

logger = logging.getLogger(__name__)

SubmissionCallback = Callable[[Submission], None]
ClockFactory = Callable[[TickCallback, ExpireCallback], CountdownClock]


class AttemptState(str, Enum):
    IN_PROGRESS = "in_progress"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"


class SubmitReason(str, Enum):
    USER = "user"
    TIMEOUT = "timeout"


@dataclass(slots=True, frozen=True)
class AttemptTransition:
    """One entry of the attempt's transition log."""

    source: AttemptState
    target: AttemptState
    trigger: str
    seconds_remaining: int


def format_remaining(seconds: int) -> str:
    """Render remaining seconds as ``mm:ss``."""
    seconds = max(0, seconds)
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"


class AttemptStateMachine:
    """Drives navigation, answer capture, time expiry and submission for one attempt."""

    def __init__(
        self,
        test: TestDefinition,
        student_id: str,
        *,
        on_submission: SubmissionCallback | None = None,
        clock_factory: ClockFactory = CountdownClock,
    ) -> None:
        if not test.questions:
            raise ValueError("Test must contain at least one question.")
        if test.duration_minutes <= 0:
            raise ValueError("Test duration must be a positive number of minutes.")

        self._test = test
        self._student_id = student_id
        self._on_submission = on_submission
        self._listeners: list[Callable[[], None]] = []

        self._ledger = AnswerLedger()
        self._state = AttemptState.IN_PROGRESS
        self._current_index: int = 0
        self._total_seconds: int = test.duration_seconds
        self._seconds_remaining: int = self._total_seconds
        self._submit_reason: SubmitReason | None = None
        self._pending_submission: Submission | None = None
        self._transitions: list[AttemptTransition] = []

        self._clock = clock_factory(self.tick, self._handle_expire)

    # --- Lifecycle ---

    def start(self) -> None:
        """Start the countdown. Has no effect once the attempt left ``IN_PROGRESS``."""
        if self._state is not AttemptState.IN_PROGRESS or self._clock.is_active():
            return
        self._clock.start(self._seconds_remaining)
        logger.info(
            "Attempt started: test=%s student=%s seconds=%s",
            self._test.id,
            self._student_id,
            self._seconds_remaining,
        )

    def close(self) -> None:
        """Release the clock; required when the view holding the attempt goes away."""
        self._clock.stop()

    def add_listener(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    # --- Mutators (IN_PROGRESS only) ---

    def navigate(self, index: int) -> bool:
        if not self._accepts("navigate"):
            return False
        clamped = max(0, min(index, len(self._test.questions) - 1))
        if clamped != self._current_index:
            self._current_index = clamped
            self._notify()
        return True

    def next_question(self) -> bool:
        return self.navigate(self._current_index + 1)

    def previous_question(self) -> bool:
        return self.navigate(self._current_index - 1)

    def answer(self, question_id: str, value: Answer) -> bool:
        """Record ``value`` for ``question_id``, replacing any earlier answer."""
        if not self._accepts("answer"):
            return False
        question = self._test.question_by_id(question_id)
        if question is None:
            raise ValueError(f"Unknown question id: '{question_id}'.")
        if not question.accepts(value):
            if question.is_mcq:
                raise ValueError(f"Answer for '{question_id}' must be an option index.")
            raise ValueError(f"Answer for '{question_id}' must be text.")
        self._ledger.set(question_id, value)
        self._notify()
        return True

    def tick(self, remaining: int) -> bool:
        """Clock callback. ``remaining`` is authoritative; reaching 0 auto-submits."""
        if not self._accepts("tick"):
            return False
        self._seconds_remaining = min(self._seconds_remaining, max(0, int(remaining)))
        self._notify()
        if self._seconds_remaining == 0:
            self._begin_submit(SubmitReason.TIMEOUT)
        return True

    def request_submit(self) -> Submission | None:
        """User-initiated submit. Returns the Submission, or None when rejected."""
        return self._begin_submit(SubmitReason.USER)

    # --- Hand-off outcome (SUBMITTING only) ---

    def acknowledge(self) -> bool:
        """The collaborator accepted the submission; the attempt is finished."""
        if self._state is not AttemptState.SUBMITTING:
            logger.debug("Ignoring acknowledge in state %s", self._state.value)
            return False
        self._transition(AttemptState.SUBMITTED, "acknowledged")
        self._notify()
        return True

    def resume(self) -> bool:
        """Return a failed hand-off to ``IN_PROGRESS``; impossible once time ran out."""
        if self._state is not AttemptState.SUBMITTING or self._seconds_remaining == 0:
            logger.debug(
                "Cannot resume attempt in state %s with %s seconds left",
                self._state.value,
                self._seconds_remaining,
            )
            return False
        self._pending_submission = None
        self._submit_reason = None
        self._transition(AttemptState.IN_PROGRESS, "resumed")
        self._clock.start(self._seconds_remaining)
        self._notify()
        return True

    # --- Read-only projections ---

    @property
    def test(self) -> TestDefinition:
        return self._test

    @property
    def student_id(self) -> str:
        return self._student_id

    @property
    def state(self) -> AttemptState:
        return self._state

    @property
    def clock(self) -> CountdownClock:
        return self._clock

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current_question(self) -> Question:
        return self._test.questions[self._current_index]

    @property
    def question_count(self) -> int:
        return len(self._test.questions)

    @property
    def seconds_remaining(self) -> int:
        return self._seconds_remaining

    @property
    def total_seconds(self) -> int:
        return self._total_seconds

    @property
    def formatted_time(self) -> str:
        return format_remaining(self._seconds_remaining)

    @property
    def is_urgent(self) -> bool:
        return self._seconds_remaining < URGENT_THRESHOLD_SECONDS

    @property
    def answered_count(self) -> int:
        return self._ledger.answered_count()

    @property
    def progress(self) -> float:
        return self._ledger.answered_count() / len(self._test.questions)

    @property
    def all_answered(self) -> bool:
        return self._ledger.answered_count() == len(self._test.questions)

    @property
    def pending_submission(self) -> Submission | None:
        return self._pending_submission

    @property
    def submit_reason(self) -> SubmitReason | None:
        return self._submit_reason

    @property
    def transitions(self) -> tuple[AttemptTransition, ...]:
        return tuple(self._transitions)

    def answer_for(self, question_id: str) -> Answer | None:
        return self._ledger.get(question_id)

    def is_answered(self, question_id: str) -> bool:
        return self._ledger.has_answer(question_id)

    def is_open(self) -> bool:
        return self._state is AttemptState.IN_PROGRESS

    # --- Internals ---

    def _accepts(self, operation: str) -> bool:
        if self._state is AttemptState.IN_PROGRESS:
            return True
        logger.debug("Rejected %s in state %s", operation, self._state.value)
        return False

    def _begin_submit(self, reason: SubmitReason) -> Submission | None:
        if self._state is not AttemptState.IN_PROGRESS:
            logger.debug("Rejected %s submit in state %s", reason.value, self._state.value)
            return None
        self._clock.stop()
        submission = Submission(
            test_id=self._test.id,
            student_id=self._student_id,
            answers=self._ledger.snapshot(),
            time_taken_seconds=self._total_seconds - self._seconds_remaining,
        )
        self._pending_submission = submission
        self._submit_reason = reason
        self._transition(AttemptState.SUBMITTING, reason.value)
        logger.info(
            "Attempt submitting (%s): test=%s student=%s answered=%s/%s time_taken=%ss",
            reason.value,
            self._test.id,
            self._student_id,
            len(submission.answers),
            len(self._test.questions),
            submission.time_taken_seconds,
        )
        self._notify()
        if self._on_submission is not None:
            self._on_submission(submission)
        return submission

    def _handle_expire(self) -> None:
        # Same entry point as tick(0); whichever runs second is rejected.
        self._begin_submit(SubmitReason.TIMEOUT)

    def _transition(self, target: AttemptState, trigger: str) -> None:
        self._transitions.append(
            AttemptTransition(
                source=self._state,
                target=target,
                trigger=trigger,
                seconds_remaining=self._seconds_remaining,
            )
        )
        self._state = target

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback()
