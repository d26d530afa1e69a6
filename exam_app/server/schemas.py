"""Pydantic wire schemas shared by the API server and the HTTP client."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from exam_app.core.models import (
    Question,
    QuestionOutcome,
    QuestionResult,
    QuestionType,
    Submission,
    SubmissionState,
    SubmissionStatus,
    SubmissionSummary,
    TestDefinition,
)


class QuestionPayload(BaseModel):
    id: str
    text: str
    question_type: QuestionType = QuestionType.MCQ
    options: list[str] = Field(default_factory=list)
    correct_option_index: int | None = None
    marks: int = 1
    negative_marks: int | None = None
    chapter: str = "General"
    topic: str = "General"

    @classmethod
    def from_domain(cls, question: Question) -> QuestionPayload:
        return cls(
            id=question.id,
            text=question.text,
            question_type=question.question_type,
            options=list(question.options),
            correct_option_index=question.correct_option_index,
            marks=question.marks,
            negative_marks=question.negative_marks,
            chapter=question.chapter,
            topic=question.topic,
        )

    def to_domain(self) -> Question:
        return Question(
            id=self.id,
            text=self.text,
            question_type=self.question_type,
            options=tuple(self.options),
            correct_option_index=self.correct_option_index,
            marks=self.marks,
            negative_marks=self.negative_marks,
            chapter=self.chapter,
            topic=self.topic,
        )


class TestPayload(BaseModel):
    """A test as it travels over the wire; students only ever receive redacted copies."""

    __test__ = False

    id: str
    title: str
    description: str | None = None
    duration_minutes: int
    is_published: bool = True
    questions: list[QuestionPayload]

    @classmethod
    def from_domain(cls, test: TestDefinition) -> TestPayload:
        return cls(
            id=test.id,
            title=test.title,
            description=test.description,
            duration_minutes=test.duration_minutes,
            is_published=test.is_published,
            questions=[QuestionPayload.from_domain(q) for q in test.questions],
        )

    def to_domain(self) -> TestDefinition:
        return TestDefinition(
            id=self.id,
            title=self.title,
            description=self.description,
            duration_minutes=self.duration_minutes,
            is_published=self.is_published,
            questions=tuple(q.to_domain() for q in self.questions),
        )


class QuestionResultPayload(BaseModel):
    question_id: str
    outcome: QuestionOutcome
    awarded_marks: int
    max_marks: int
    selected: int | str | None = None
    correct_option_index: int | None = None


class SubmissionStatusPayload(BaseModel):
    state: SubmissionState
    time_taken_seconds: int
    submitted_at: datetime | None = None
    score: int | None = None
    total_marks: int | None = None
    percentage: int | None = None
    results: list[QuestionResultPayload] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, status: SubmissionStatus) -> SubmissionStatusPayload:
        return cls(
            state=status.state,
            time_taken_seconds=status.time_taken_seconds,
            submitted_at=status.submitted_at,
            score=status.score,
            total_marks=status.total_marks,
            percentage=status.percentage,
            results=[
                QuestionResultPayload(
                    question_id=r.question_id,
                    outcome=r.outcome,
                    awarded_marks=r.awarded_marks,
                    max_marks=r.max_marks,
                    selected=r.selected,
                    correct_option_index=r.correct_option_index,
                )
                for r in status.results
            ],
        )

    def to_domain(self) -> SubmissionStatus:
        return SubmissionStatus(
            state=self.state,
            time_taken_seconds=self.time_taken_seconds,
            submitted_at=self.submitted_at,
            score=self.score,
            total_marks=self.total_marks,
            percentage=self.percentage,
            results=tuple(
                QuestionResult(
                    question_id=r.question_id,
                    outcome=r.outcome,
                    awarded_marks=r.awarded_marks,
                    max_marks=r.max_marks,
                    selected=r.selected,
                    correct_option_index=r.correct_option_index,
                )
                for r in self.results
            ),
        )


class SubmissionPayload(BaseModel):
    """Body of ``POST /tests/{test_id}/submissions``."""

    student_id: str
    answers: dict[str, int | str] = Field(default_factory=dict)
    time_taken_seconds: int
    test_id: str | None = None

    @classmethod
    def from_domain(cls, submission: Submission) -> SubmissionPayload:
        return cls(
            test_id=submission.test_id,
            student_id=submission.student_id,
            answers=dict(submission.answers),
            time_taken_seconds=submission.time_taken_seconds,
        )

    def to_domain(self, test_id: str) -> Submission:
        return Submission(
            test_id=test_id,
            student_id=self.student_id,
            answers=self.answers,
            time_taken_seconds=self.time_taken_seconds,
        )


class GradePayload(BaseModel):
    """Teacher-awarded marks for free-text answers."""

    awarded: dict[str, int]


class StudentTestPayload(BaseModel):
    id: str
    title: str
    description: str | None = None
    duration_minutes: int
    question_count: int
    total_marks: int
    status: str


class SubmissionSummaryPayload(BaseModel):
    student_id: str
    state: SubmissionState
    score: int | None = None
    total_marks: int
    time_taken_seconds: int
    submitted_at: datetime | None = None

    @classmethod
    def from_domain(cls, row: SubmissionSummary) -> SubmissionSummaryPayload:
        return cls(
            student_id=row.student_id,
            state=row.state,
            score=row.score,
            total_marks=row.total_marks,
            time_taken_seconds=row.time_taken_seconds,
            submitted_at=row.submitted_at,
        )
