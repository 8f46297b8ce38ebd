import time

import pytest

from core.quiz_session import QuizSession, SubmissionState, performance_level, score_quiz
from models import NOT_ANSWERED


class RecordingSink:
    def __init__(self) -> None:
        self.signals = []

    def send_review_signal(self, quiz_id, question_index, quality, username=None, question_id=None):
        self.signals.append((quiz_id, question_index, quality, username, question_id))
        return True


def test_score_counts_matching_letters(quiz) -> None:
    result = score_quiz(quiz, {0: 0, 1: 1})
    assert result.correct_count == 2
    assert result.score == 20.0
    assert result.total == 30
    assert result.performance_level == "medium"
    assert result.questions[2].user_answer == NOT_ANSWERED
    assert result.questions[2].user_answer_text == NOT_ANSWERED
    assert result.questions[0].correct_answer_text == "first"


def test_score_without_answers_is_zero(quiz_factory) -> None:
    result = score_quiz(quiz_factory(count=4, total_marks=40), {})
    assert result.score == 0
    assert result.correct_count == 0
    assert result.performance_level == "low"
    assert len(result.questions) == 4


def test_score_rounds_to_two_decimals(quiz) -> None:
    quiz.total_marks = 10
    assert score_quiz(quiz, {0: 0}).score == 3.33


def test_performance_level_buckets() -> None:
    assert performance_level(7, 10) == "high"
    assert performance_level(4, 10) == "medium"
    assert performance_level(3.9, 10) == "low"


def test_time_accumulates_per_question(quiz, clock) -> None:
    session = QuizSession(quiz, "quiz-1", clock=clock)
    clock.advance(5)
    session.go_to_next()
    clock.advance(3)
    session.go_to_previous()
    clock.advance(2)
    session.go_to_next()

    assert session.answer_times[0] == pytest.approx(7)
    assert session.answer_times[1] == pytest.approx(3)
    assert session.total_time_spent() == pytest.approx(10)


def test_navigation_stays_in_bounds(quiz, clock) -> None:
    session = QuizSession(quiz, "quiz-1", clock=clock)
    assert not session.go_to_previous()
    assert session.current_question_index == 0
    session.go_to_question(2)
    assert not session.go_to_next()
    assert session.current_question_index == 2


def test_freeze_timing_stops_accumulation(quiz, clock) -> None:
    session = QuizSession(quiz, "quiz-1", clock=clock)
    clock.advance(4)
    session.freeze_timing()
    clock.advance(100)
    session.flush_question_time()
    assert session.total_time_spent() == pytest.approx(4)


def test_select_and_clear_answer(quiz, clock) -> None:
    session = QuizSession(quiz, "quiz-1", clock=clock)
    assert session.select_answer(0, 2)
    assert session.answers == {0: 2}
    session.select_answer(0, 0)
    assert session.answers == {0: 0}
    session.clear_answer(0)
    assert session.answers == {}


def test_select_answer_rejects_bad_indices(quiz, clock) -> None:
    session = QuizSession(quiz, "quiz-1", clock=clock)
    with pytest.raises(IndexError):
        session.select_answer(-1, 0)
    with pytest.raises(IndexError):
        session.select_answer(0, 4)


def test_select_answer_sends_review_quality(quiz, clock) -> None:
    sink = RecordingSink()
    session = QuizSession(quiz, "quiz-1", username="alice", sink=sink, clock=clock)

    session.select_answer(0, 0)
    session.select_answer(1, 3)

    deadline = time.monotonic() + 2
    while len(sink.signals) < 2 and time.monotonic() < deadline:
        time.sleep(0.01)
    assert sorted(sink.signals) == [
        ("quiz-1", 0, 5, "alice", "q0"),
        ("quiz-1", 1, 1, "alice", "q1"),
    ]


def test_answers_frozen_after_submission_starts(quiz, clock) -> None:
    session = QuizSession(quiz, "quiz-1", clock=clock)
    session.arm()
    session.select_answer(0, 0)
    assert session.try_begin_submission()

    assert not session.select_answer(1, 1)
    session.clear_answer(0)
    assert session.answers == {0: 0}


def test_state_transitions(quiz, clock) -> None:
    session = QuizSession(quiz, "quiz-1", clock=clock)
    assert session.state is SubmissionState.NOT_STARTED
    assert not session.try_begin_submission()

    assert session.arm()
    assert not session.arm()
    assert session.state is SubmissionState.IN_PROGRESS

    assert session.try_begin_submission()
    assert not session.try_begin_submission()
    session.finish_submission()
    assert session.state is SubmissionState.SUBMITTED


def test_difficulty_from_question_count(quiz_factory) -> None:
    assert QuizSession(quiz_factory(count=3), "q").difficulty() == "easy"
    assert QuizSession(quiz_factory(count=6), "q").difficulty() == "medium"
    assert QuizSession(quiz_factory(count=11), "q").difficulty() == "hard"
