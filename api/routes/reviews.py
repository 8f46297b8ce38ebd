"""Spaced repetition endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session as DbSession

from api.database import get_db
from api.models import ReviewUpdate
from api.services import review_service

router = APIRouter(prefix="/api/reviews", tags=["reviews"])


@router.post("/update")
def update_review(
    payload: ReviewUpdate,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    """Apply a quality signal (0-5) to a question's review schedule."""
    schedule = review_service.update_review(db, payload)
    return {
        "quizId": schedule.quiz_id,
        "questionIndex": schedule.question_index,
        "easinessFactor": schedule.easiness_factor,
        "repetitions": schedule.repetitions,
        "interval": schedule.interval,
        "nextReviewDate": schedule.next_review_date.isoformat()
        if schedule.next_review_date
        else None,
    }
