"""Grading of submitted attempts.

MCQ questions are scored automatically: the correct option earns the question's
marks, a wrong option costs its negative marks and a skipped question scores
zero. Free-text questions wait for a teacher to award marks; until then the
submission is pending.
"""

from __future__ import annotations

from typing import Mapping

from exam_app.core.models import (
    Question,
    QuestionOutcome,
    QuestionResult,
    Submission,
    SubmissionState,
    SubmissionStatus,
    TestDefinition,
)


def grade_mcq(question: Question, selected: object) -> QuestionResult:
    """Score a single MCQ answer; ``selected`` is None when skipped."""
    if not question.is_mcq:
        raise ValueError(f"Question '{question.id}' is not multiple choice.")
    if selected is None:
        outcome = QuestionOutcome.SKIPPED
        awarded = 0
    elif selected == question.correct_option_index:
        outcome = QuestionOutcome.CORRECT
        awarded = question.marks
    else:
        outcome = QuestionOutcome.INCORRECT
        awarded = -(question.negative_marks or 0)
    return QuestionResult(
        question_id=question.id,
        outcome=outcome,
        awarded_marks=awarded,
        max_marks=question.marks,
        selected=selected,
        correct_option_index=question.correct_option_index,
    )


def grade_submission(test: TestDefinition, submission: Submission) -> SubmissionStatus:
    """Grade on acceptance: graded for all-MCQ tests, pending otherwise."""
    if test.has_free_text:
        return SubmissionStatus(
            state=SubmissionState.PENDING,
            time_taken_seconds=submission.time_taken_seconds,
            submitted_at=submission.submitted_at,
        )
    results = [grade_mcq(q, submission.answers.get(q.id)) for q in test.questions]
    return _graded_status(test, submission, results)


def apply_manual_grades(
    test: TestDefinition,
    submission: Submission,
    awarded: Mapping[str, int],
) -> SubmissionStatus:
    """Combine teacher-awarded marks for free-text answers with automatic MCQ marks."""
    for question_id in awarded:
        question = test.question_by_id(question_id)
        if question is None:
            raise ValueError(f"Unknown question id: '{question_id}'.")
        if question.is_mcq:
            raise ValueError(f"Question '{question_id}' is graded automatically.")

    results: list[QuestionResult] = []
    for question in test.questions:
        selected = submission.answers.get(question.id)
        if question.is_mcq:
            results.append(grade_mcq(question, selected))
            continue
        if selected is None:
            results.append(
                QuestionResult(
                    question_id=question.id,
                    outcome=QuestionOutcome.SKIPPED,
                    awarded_marks=0,
                    max_marks=question.marks,
                )
            )
            continue
        if question.id not in awarded:
            raise ValueError(f"Marks missing for question '{question.id}'.")
        marks = awarded[question.id]
        if isinstance(marks, bool) or not isinstance(marks, int) or not 0 <= marks <= question.marks:
            raise ValueError(
                f"Marks for question '{question.id}' must be between 0 and {question.marks}."
            )
        results.append(
            QuestionResult(
                question_id=question.id,
                outcome=QuestionOutcome.AWARDED,
                awarded_marks=marks,
                max_marks=question.marks,
                selected=selected,
            )
        )
    return _graded_status(test, submission, results)


def _graded_status(
    test: TestDefinition,
    submission: Submission,
    results: list[QuestionResult],
) -> SubmissionStatus:
    score = sum(result.awarded_marks for result in results)
    total = test.total_marks
    percentage = round(score / total * 100) if total else 0
    return SubmissionStatus(
        state=SubmissionState.GRADED,
        time_taken_seconds=submission.time_taken_seconds,
        submitted_at=submission.submitted_at,
        score=score,
        total_marks=total,
        percentage=percentage,
        results=tuple(results),
    )
