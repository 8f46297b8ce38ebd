"""State of one quiz attempt: answers, per-question timing and scoring."""
from __future__ import annotations

import enum
import logging
import threading
import time
from typing import TYPE_CHECKING, Callable

from core.timer import QuizTimer
from models import NOT_ANSWERED, OPTION_LETTERS, QuestionResult, Quiz, QuizResult

if TYPE_CHECKING:
    from core.report_sink import ReportSink

log = logging.getLogger(__name__)


class SubmissionState(str, enum.Enum):
    """Submission status of an attempt.

    The interruption watcher reads the same value: NOT_STARTED is idle,
    IN_PROGRESS is armed, SUBMITTING is finalizing and SUBMITTED is done.
    """

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"


def performance_level(score: float, total_marks: float) -> str:
    """Bucket a score into high / medium / low."""
    if score >= total_marks * 0.7:
        return "high"
    if score >= total_marks * 0.4:
        return "medium"
    return "low"


def score_quiz(
    quiz: Quiz,
    answers: dict[int, int],
    answer_times: dict[int, float] | None = None,
) -> QuizResult:
    """
    Score the recorded answers against the quiz.

    Answers are option indices; they are compared as letters (A-D) with the
    question's correct letter. Unanswered questions count as incorrect.
    """
    answer_times = answer_times or {}
    correct_count = 0
    results: list[QuestionResult] = []

    for idx, question in enumerate(quiz.questions):
        chosen = answers.get(idx)
        if chosen is not None and 0 <= chosen < len(OPTION_LETTERS):
            user_answer = OPTION_LETTERS[chosen]
            user_answer_text = (
                question.options[chosen] if chosen < len(question.options) else ""
            )
        else:
            user_answer = NOT_ANSWERED
            user_answer_text = NOT_ANSWERED

        correct_idx = question.correct_index
        correct_text = (
            question.options[correct_idx]
            if 0 <= correct_idx < len(question.options)
            else ""
        )
        if user_answer == question.correct_answer:
            correct_count += 1

        results.append(
            QuestionResult(
                question_text=question.question,
                options=list(question.options),
                user_answer=user_answer,
                user_answer_text=user_answer_text,
                correct_answer=question.correct_answer,
                correct_answer_text=correct_text,
                answer_time=answer_times.get(idx, 0.0),
            )
        )

    total_marks = quiz.total_marks
    count = len(quiz.questions)
    score = round(correct_count / count * total_marks, 2) if count else 0.0

    return QuizResult(
        score=score,
        total=total_marks,
        correct_count=correct_count,
        performance_level=performance_level(score, total_marks),
        questions=results,
    )


class QuizSession:
    """One user's run through one quiz, from load to finalized submission."""

    def __init__(
        self,
        quiz: Quiz,
        quiz_id: str,
        username: str | None = None,
        sink: "ReportSink | None" = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.quiz = quiz
        self.quiz_id = quiz_id
        self.username = username
        self.sink = sink
        self.answers: dict[int, int] = {}
        self.answer_times: dict[int, float] = {}
        self.current_question_index = 0
        self.auto_submit_reason: str | None = None
        self.result: QuizResult | None = None
        self.timer = QuizTimer(quiz.duration * 60, clock=clock)

        self._clock = clock
        self._question_enter_time = clock()
        self._timing_frozen = False
        self._state = SubmissionState.NOT_STARTED
        self._state_lock = threading.Lock()

    @property
    def state(self) -> SubmissionState:
        return self._state

    @property
    def question_count(self) -> int:
        return len(self.quiz.questions)

    @property
    def submission_started(self) -> bool:
        return self._state in (SubmissionState.SUBMITTING, SubmissionState.SUBMITTED)

    # -- state transitions -------------------------------------------------

    def arm(self) -> bool:
        """Leave the initialization grace period."""
        with self._state_lock:
            if self._state is not SubmissionState.NOT_STARTED:
                return False
            self._state = SubmissionState.IN_PROGRESS
        log.debug("Quiz %s armed", self.quiz_id)
        return True

    def try_begin_submission(self) -> bool:
        """Atomically move IN_PROGRESS -> SUBMITTING. Only one caller wins."""
        with self._state_lock:
            if self._state is not SubmissionState.IN_PROGRESS:
                return False
            self._state = SubmissionState.SUBMITTING
            return True

    def finish_submission(self) -> None:
        with self._state_lock:
            if self._state is SubmissionState.SUBMITTING:
                self._state = SubmissionState.SUBMITTED

    # -- answers -----------------------------------------------------------

    def select_answer(self, question_index: int, option_index: int) -> bool:
        if self.submission_started:
            return False
        if not 0 <= question_index < self.question_count:
            raise IndexError(f"Question {question_index} out of range")
        question = self.quiz.questions[question_index]
        if not 0 <= option_index < len(question.options):
            raise IndexError(f"Option {option_index} out of range")
        self.answers[question_index] = option_index

        quality = 5 if option_index == question.correct_index else 1
        self._send_review_signal(question_index, quality)
        return True

    def clear_answer(self, question_index: int) -> None:
        if self.submission_started:
            return
        self.answers.pop(question_index, None)

    def _send_review_signal(self, question_index: int, quality: int) -> None:
        sink = self.sink
        if sink is None:
            return
        question_id = self.quiz.questions[question_index].question_id

        def _worker() -> None:
            sink.send_review_signal(
                self.quiz_id,
                question_index,
                quality,
                username=self.username,
                question_id=question_id,
            )

        threading.Thread(target=_worker, name="review_signal", daemon=True).start()

    # -- navigation and timing ---------------------------------------------

    def flush_question_time(self) -> None:
        """Add time spent on the current question and reset the enter marker."""
        if self._timing_frozen:
            return
        now = self._clock()
        elapsed = max(0.0, now - self._question_enter_time)
        index = self.current_question_index
        self.answer_times[index] = self.answer_times.get(index, 0.0) + elapsed
        self._question_enter_time = now

    def freeze_timing(self) -> None:
        """Flush once more and stop accumulating for good."""
        self.flush_question_time()
        self._timing_frozen = True

    def go_to_question(self, index: int) -> bool:
        self.flush_question_time()
        if not 0 <= index < self.question_count:
            return False
        self.current_question_index = index
        return True

    def go_to_next(self) -> bool:
        return self.go_to_question(self.current_question_index + 1)

    def go_to_previous(self) -> bool:
        return self.go_to_question(self.current_question_index - 1)

    def total_time_spent(self) -> float:
        return sum(self.answer_times.values())

    def difficulty(self) -> str:
        if self.question_count > 10:
            return "hard"
        if self.question_count > 5:
            return "medium"
        return "easy"

    def score(self) -> QuizResult:
        return score_quiz(self.quiz, self.answers, self.answer_times)
