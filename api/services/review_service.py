"""Spaced repetition (SM-2) scheduling for answered questions."""
import math
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session as DBSession

from api.config import REVIEW_DEFAULT_EASINESS, REVIEW_MIN_EASINESS
from api.models import ReviewUpdate
from api.models.db.review import ReviewSchedule
from api.utils import days_from_now, normalize_username


@dataclass
class ReviewStep:
    easiness_factor: float
    repetitions: int
    interval: int


def calculate_next_review(
    quality: int,
    easiness_factor: float,
    repetitions: int,
    interval: int,
) -> ReviewStep:
    """
    One SM-2 step.

    A poor answer (quality < 3) restarts the schedule at one day and keeps
    the easiness factor. Otherwise the factor is adjusted (never below 1.3)
    and the interval grows 1 -> 6 -> interval * factor days.
    """
    if quality < 3:
        return ReviewStep(easiness_factor, 0, 1)

    new_factor = easiness_factor + (
        0.1 - (5 - quality) * (0.08 + (5 - quality) * 0.02)
    )
    new_factor = max(REVIEW_MIN_EASINESS, new_factor)

    if repetitions == 0:
        return ReviewStep(new_factor, 1, 1)
    if repetitions == 1:
        return ReviewStep(new_factor, 2, 6)
    return ReviewStep(new_factor, repetitions + 1, math.ceil(interval * new_factor))


def update_review(db: DBSession, payload: ReviewUpdate) -> ReviewSchedule:
    """Apply a quality signal to the user's schedule for that question."""
    username = normalize_username(payload.username)
    schedule = db.execute(
        select(ReviewSchedule).where(
            ReviewSchedule.username == username,
            ReviewSchedule.quiz_id == payload.quizId,
            ReviewSchedule.question_index == payload.questionIndex,
        )
    ).scalar_one_or_none()

    if not schedule:
        schedule = ReviewSchedule(
            username=username,
            quiz_id=payload.quizId,
            question_index=payload.questionIndex,
            easiness_factor=REVIEW_DEFAULT_EASINESS,
            repetitions=0,
            interval=0,
        )
        db.add(schedule)

    step = calculate_next_review(
        payload.quality,
        schedule.easiness_factor,
        schedule.repetitions,
        schedule.interval,
    )
    schedule.question_id = payload.questionId or schedule.question_id
    schedule.easiness_factor = step.easiness_factor
    schedule.repetitions = step.repetitions
    schedule.interval = step.interval
    schedule.next_review_date = days_from_now(step.interval)
    schedule.last_quality = payload.quality

    db.commit()
    db.refresh(schedule)
    return schedule
