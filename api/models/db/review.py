"""
Spaced repetition schedule per user and question.
"""

from __future__ import annotations

from datetime import datetime, timezone

import sqlalchemy as sa
from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from api.config import REVIEW_DEFAULT_EASINESS
from api.database import Base


class ReviewSchedule(Base):
    """SM-2 state for one question of one quiz, for one user."""

    __tablename__ = "review_schedules"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    username: Mapped[str] = mapped_column(String(100), index=True, nullable=False)
    quiz_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    question_index: Mapped[int] = mapped_column(nullable=False)
    question_id: Mapped[str | None] = mapped_column(String(64), nullable=True)

    easiness_factor: Mapped[float] = mapped_column(
        default=REVIEW_DEFAULT_EASINESS, nullable=False
    )
    repetitions: Mapped[int] = mapped_column(default=0, nullable=False)
    interval: Mapped[int] = mapped_column(default=0, nullable=False)  # days
    next_review_date: Mapped[datetime | None] = mapped_column(
        sa.DateTime(timezone=True), nullable=True
    )
    last_quality: Mapped[int | None] = mapped_column(nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint(
            "username", "quiz_id", "question_index", name="uq_review_question"
        ),
    )
