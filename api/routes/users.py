"""Streak and preference endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session as DbSession

from api.database import get_db
from api.models import PreferenceUpdate, StreakActivity
from api.services import activity_service

router = APIRouter(prefix="/api", tags=["users"])


@router.post("/users/streak/activity")
def record_streak_activity(
    payload: StreakActivity,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    """Add a finished quiz to today's activity and return the streak."""
    activity = activity_service.record_daily_activity(
        db, payload.username, payload.timeSpentSeconds
    )
    return {
        "date": activity.activity_date.isoformat(),
        "timeSpentSeconds": activity.time_spent_seconds,
        "quizCount": activity.quiz_count,
        "currentStreak": activity_service.current_streak(
            db, payload.username, activity.activity_date
        ),
    }


@router.post("/intelligence/preferences")
def update_preferences(
    payload: PreferenceUpdate,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    """Update the user's per-category performance totals."""
    preference = activity_service.update_preferences(db, payload)
    return {
        "category": preference.category,
        "quizzesTaken": preference.quizzes_taken,
        "averageScore": preference.average_score,
        "lastDifficulty": preference.last_difficulty,
    }
