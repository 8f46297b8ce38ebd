"""Service layer for daily streaks and category preferences."""
from datetime import date, timedelta

from sqlalchemy import select
from sqlalchemy.orm import Session as DBSession

from api.models import PreferenceUpdate
from api.models.db.activity import DailyActivity, UserPreference
from api.utils import normalize_username, utc_today


def record_daily_activity(
    db: DBSession,
    username: str | None,
    time_spent_seconds: int,
    today: date | None = None,
) -> DailyActivity:
    """Add a finished quiz to today's activity row."""
    username = normalize_username(username)
    today = today or utc_today()
    activity = db.execute(
        select(DailyActivity).where(
            DailyActivity.username == username,
            DailyActivity.activity_date == today,
        )
    ).scalar_one_or_none()

    if not activity:
        activity = DailyActivity(
            username=username,
            activity_date=today,
            time_spent_seconds=0,
            quiz_count=0,
        )
        db.add(activity)

    activity.time_spent_seconds += max(1, time_spent_seconds)
    activity.quiz_count += 1

    db.commit()
    db.refresh(activity)
    return activity


def current_streak(db: DBSession, username: str | None, today: date | None = None) -> int:
    """Count consecutive active days ending today (or yesterday)."""
    username = normalize_username(username)
    today = today or utc_today()
    days = set(
        db.execute(
            select(DailyActivity.activity_date).where(
                DailyActivity.username == username
            )
        ).scalars().all()
    )

    day = today if today in days else today - timedelta(days=1)
    streak = 0
    while day in days:
        streak += 1
        day -= timedelta(days=1)
    return streak


def update_preferences(db: DBSession, payload: PreferenceUpdate) -> UserPreference:
    """Fold one finished quiz into the user's per-category totals."""
    username = normalize_username(payload.username)
    category = payload.category or "General"
    preference = db.execute(
        select(UserPreference).where(
            UserPreference.username == username,
            UserPreference.category == category,
        )
    ).scalar_one_or_none()

    if not preference:
        preference = UserPreference(
            username=username,
            category=category,
            quizzes_taken=0,
            total_score=0.0,
            total_questions=0,
            total_time_spent=0.0,
        )
        db.add(preference)

    preference.quizzes_taken += 1
    preference.total_score += payload.score
    preference.total_questions += payload.totalQuestions
    preference.total_time_spent += payload.timeSpent
    preference.last_difficulty = payload.difficulty

    db.commit()
    db.refresh(preference)
    return preference
