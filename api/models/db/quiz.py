"""
Quiz database model: the question set and its running statistics.
"""

from __future__ import annotations

import json
import uuid
from datetime import datetime, timezone
from typing import Any

import sqlalchemy as sa
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from api.database import Base


class Quiz(Base):
    """
    A multiple-choice quiz.
    Questions are stored as a JSON snapshot in the client wire format.
    """

    __tablename__ = "quizzes"

    id: Mapped[str] = mapped_column(
        String(64), primary_key=True, index=True, default=lambda: uuid.uuid4().hex
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(100), default="General", nullable=False)
    duration: Mapped[int] = mapped_column(default=10, nullable=False)  # minutes
    total_marks: Mapped[float] = mapped_column(default=0.0, nullable=False)
    questions_json: Mapped[str] = mapped_column(Text, default="[]", nullable=False)

    # Running statistics
    attempt_count: Mapped[int] = mapped_column(default=0, nullable=False)
    average_score: Mapped[float] = mapped_column(default=0.0, nullable=False)
    average_time_spent: Mapped[float] = mapped_column(default=0.0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    @property
    def questions(self) -> list[dict[str, Any]]:
        """Parse questions from JSON."""
        try:
            data = json.loads(self.questions_json or "[]")
        except (json.JSONDecodeError, TypeError):
            return []
        return data if isinstance(data, list) else []

    @questions.setter
    def questions(self, value: list[dict[str, Any]] | None) -> None:
        """Serialize questions to JSON."""
        self.questions_json = json.dumps(value or [], ensure_ascii=False)

    def to_payload(self) -> dict[str, Any]:
        return {
            "_id": self.id,
            "title": self.title,
            "category": self.category,
            "duration": self.duration,
            "totalMarks": self.total_marks,
            "questions": self.questions,
            "attemptCount": self.attempt_count,
            "averageScore": self.average_score,
            "averageTimeSpent": self.average_time_spent,
        }
