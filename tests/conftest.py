import os
import tempfile
from pathlib import Path

import pytest

_DB_DIR = Path(tempfile.mkdtemp(prefix="quiz-session-tests-"))
os.environ.setdefault("DB_DIR", str(_DB_DIR))
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_DB_DIR / 'test.db'}")
os.environ.setdefault("QUIZ_PENDING_PATH", str(_DB_DIR / "pending_submissions.json"))

from models import Quiz, QuizQuestion  # noqa: E402


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def make_quiz(count: int = 3, total_marks: float = 30, duration: int = 10) -> Quiz:
    letters = ["A", "B", "C", "D"]
    return Quiz(
        title="Sample quiz",
        duration=duration,
        total_marks=total_marks,
        questions=[
            QuizQuestion(
                question=f"Question {idx + 1}?",
                options=["first", "second", "third", "fourth"],
                correct_answer=letters[idx % 3],
                question_id=f"q{idx}",
            )
            for idx in range(count)
        ],
        category="Science",
        quiz_id="quiz-1",
    )


@pytest.fixture
def quiz() -> Quiz:
    return make_quiz()


@pytest.fixture
def quiz_factory():
    return make_quiz
