"""Domain models for the exam application."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Union

from exam_app.constants.exam_constants import SECONDS_PER_MINUTE

Answer = Union[int, str]
"""An option index for MCQ questions, free text for every other type."""


class QuestionType(str, Enum):
    """Kinds of questions a test can contain."""

    MCQ = "MCQ"
    ESSAY = "Essay"
    SHORT_ANSWER = "Short Answer"
    VERY_SHORT_ANSWER = "Very Short Answer"

    @classmethod
    def parse(cls, raw: str) -> QuestionType:
        """Accept both the display spelling and the identifier spelling."""
        normalized = raw.strip().replace(" ", "").replace("_", "").lower()
        for member in cls:
            if member.value.replace(" ", "").lower() == normalized:
                return member
        raise ValueError(f"Unknown question type: '{raw}'.")

    @property
    def is_free_text(self) -> bool:
        return self is not QuestionType.MCQ


@dataclass(slots=True, frozen=True)
class Question:
    """A single question; options and the answer key exist only for MCQ."""

    id: str
    text: str
    question_type: QuestionType = QuestionType.MCQ
    options: tuple[str, ...] = ()
    correct_option_index: int | None = None
    marks: int = 1
    negative_marks: int | None = None
    chapter: str = "General"
    topic: str = "General"

    @property
    def is_mcq(self) -> bool:
        return self.question_type is QuestionType.MCQ

    def accepts(self, value: Answer) -> bool:
        """Return True when ``value`` has the right shape for this question."""
        if self.is_mcq:
            return isinstance(value, int) and not isinstance(value, bool) and 0 <= value < len(self.options)
        return isinstance(value, str)


@dataclass(slots=True, frozen=True)
class TestDefinition:
    """A test as authored by a teacher. Question order is the navigation order."""

    __test__ = False  # keep pytest from collecting this class

    id: str
    title: str
    duration_minutes: int
    questions: tuple[Question, ...]
    description: str | None = None
    is_published: bool = True

    @property
    def duration_seconds(self) -> int:
        return self.duration_minutes * SECONDS_PER_MINUTE

    @property
    def question_count(self) -> int:
        return len(self.questions)

    @property
    def total_marks(self) -> int:
        return sum(question.marks for question in self.questions)

    @property
    def has_free_text(self) -> bool:
        return any(question.question_type.is_free_text for question in self.questions)

    def question_by_id(self, question_id: str) -> Question | None:
        return next((q for q in self.questions if q.id == question_id), None)

    def redacted(self) -> TestDefinition:
        """Copy of the test with every answer key removed, safe to hand to a student."""
        return replace(
            self,
            questions=tuple(replace(q, correct_option_index=None) for q in self.questions),
        )


@dataclass(slots=True, frozen=True)
class Submission:
    """Finalized answers of one attempt, handed to the test service exactly once."""

    test_id: str
    student_id: str
    answers: Mapping[str, Answer]
    time_taken_seconds: int
    submitted_at: datetime | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.answers, MappingProxyType):
            object.__setattr__(self, "answers", MappingProxyType(dict(self.answers)))


class SubmissionState(str, Enum):
    PENDING = "pending"
    GRADED = "graded"


class QuestionOutcome(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    SKIPPED = "skipped"
    AWARDED = "awarded"


@dataclass(slots=True, frozen=True)
class QuestionResult:
    """Per-question grading outcome produced by the grading collaborator."""

    question_id: str
    outcome: QuestionOutcome
    awarded_marks: int
    max_marks: int
    selected: Answer | None = None
    correct_option_index: int | None = None


@dataclass(slots=True, frozen=True)
class SubmissionStatus:
    """What the test service knows about a student's submission."""

    state: SubmissionState
    time_taken_seconds: int
    submitted_at: datetime | None = None
    score: int | None = None
    total_marks: int | None = None
    percentage: int | None = None
    results: tuple[QuestionResult, ...] = field(default_factory=tuple)

    @property
    def is_graded(self) -> bool:
        return self.state is SubmissionState.GRADED

    @property
    def correct_count(self) -> int:
        return sum(1 for r in self.results if r.outcome is QuestionOutcome.CORRECT)

    @property
    def skipped_count(self) -> int:
        return sum(1 for r in self.results if r.outcome is QuestionOutcome.SKIPPED)


@dataclass(slots=True, frozen=True)
class SubmissionSummary:
    """Teacher-facing row describing one stored submission."""

    student_id: str
    state: SubmissionState
    total_marks: int
    time_taken_seconds: int
    submitted_at: datetime | None
    score: int | None = None
