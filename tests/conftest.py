import sys
from pathlib import Path

import pytest

# Add the project root to sys.path so exam_app imports without installation
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if PROJECT_ROOT.as_posix() not in sys.path:
    sys.path.insert(0, PROJECT_ROOT.as_posix())

from exam_app.core.clock import CountdownClock  # noqa: E402
from exam_app.core.models import Question, QuestionType, TestDefinition  # noqa: E402
from exam_app.core.services.test_service import InMemoryTestService  # noqa: E402


class FakeTime:
    """Manually advanced monotonic time source."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def mcq(question_id: str, correct: int | None = 1, marks: int = 1, negative: int | None = None) -> Question:
    return Question(
        id=question_id,
        text=f"Question {question_id}",
        options=("A option", "B option", "C option", "D option"),
        correct_option_index=correct,
        marks=marks,
        negative_marks=negative,
    )


def essay(question_id: str, marks: int = 5) -> Question:
    return Question(
        id=question_id,
        text=f"Explain {question_id}",
        question_type=QuestionType.ESSAY,
        marks=marks,
    )


def make_test(*questions: Question, test_id: str = "t1", duration_minutes: int = 10, published: bool = True) -> TestDefinition:
    return TestDefinition(
        id=test_id,
        title="Sample test",
        duration_minutes=duration_minutes,
        questions=tuple(questions) or (mcq("q1"), mcq("q2")),
        is_published=published,
    )


@pytest.fixture
def fake_time() -> FakeTime:
    return FakeTime()


@pytest.fixture
def clock_factory(fake_time):
    """Clock factory wired to the fake time source, remembering the clocks it built."""

    def factory(on_tick, on_expire):
        clock = CountdownClock(on_tick, on_expire, time_source=fake_time)
        factory.clocks.append(clock)
        return clock

    factory.clocks = []
    return factory


@pytest.fixture
def mcq_test() -> TestDefinition:
    return make_test(mcq("q1", correct=1, marks=2, negative=1), mcq("q2", correct=0, marks=1), mcq("q3", correct=2, marks=1))


@pytest.fixture
def mixed_test() -> TestDefinition:
    return make_test(mcq("q1", correct=1, marks=2), essay("q2", marks=5), test_id="mixed")


@pytest.fixture
def service(mcq_test, mixed_test) -> InMemoryTestService:
    svc = InMemoryTestService()
    svc.add_test(mcq_test)
    svc.add_test(mixed_test)
    return svc
