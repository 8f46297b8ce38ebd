"""
Per-user activity: daily streak rows and per-category preferences.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

import sqlalchemy as sa
from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from api.database import Base


class DailyActivity(Base):
    """Time spent on quizzes by one user on one (UTC) day."""

    __tablename__ = "daily_activity"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    username: Mapped[str] = mapped_column(String(100), index=True, nullable=False)
    activity_date: Mapped[date] = mapped_column(sa.Date, nullable=False)
    time_spent_seconds: Mapped[int] = mapped_column(default=0, nullable=False)
    quiz_count: Mapped[int] = mapped_column(default=0, nullable=False)

    __table_args__ = (
        UniqueConstraint("username", "activity_date", name="uq_activity_day"),
    )


class UserPreference(Base):
    """Running totals per user and quiz category."""

    __tablename__ = "user_preferences"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    username: Mapped[str] = mapped_column(String(100), index=True, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    quizzes_taken: Mapped[int] = mapped_column(default=0, nullable=False)
    total_score: Mapped[float] = mapped_column(default=0.0, nullable=False)
    total_questions: Mapped[int] = mapped_column(default=0, nullable=False)
    total_time_spent: Mapped[float] = mapped_column(default=0.0, nullable=False)
    last_difficulty: Mapped[str | None] = mapped_column(String(20), nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("username", "category", name="uq_preference_category"),
    )

    @property
    def average_score(self) -> float:
        if self.quizzes_taken == 0:
            return 0.0
        return self.total_score / self.quizzes_taken
