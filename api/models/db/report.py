"""
Report database model: one finished quiz submission.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

import sqlalchemy as sa
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from api.database import Base


class Report(Base):
    """Scored submission with the per-question detail the client sent."""

    __tablename__ = "reports"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    username: Mapped[str] = mapped_column(String(100), index=True, nullable=False)
    quiz_name: Mapped[str] = mapped_column(String(255), nullable=False)
    score: Mapped[float] = mapped_column(default=0.0, nullable=False)
    total: Mapped[float] = mapped_column(default=0.0, nullable=False)
    questions_json: Mapped[str] = mapped_column(Text, default="[]", nullable=False)

    # Set when something other than the submit button finalized the attempt
    auto_submitted: Mapped[bool] = mapped_column(default=False, nullable=False)
    reason: Mapped[str | None] = mapped_column(String(100), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    @property
    def questions(self) -> list[dict[str, Any]]:
        """Parse question details from JSON."""
        try:
            data = json.loads(self.questions_json or "[]")
        except (json.JSONDecodeError, TypeError):
            return []
        return data if isinstance(data, list) else []

    @questions.setter
    def questions(self, value: list[dict[str, Any]] | None) -> None:
        self.questions_json = json.dumps(value or [], ensure_ascii=False)

    def to_payload(self) -> dict[str, Any]:
        return {
            "_id": self.id,
            "username": self.username,
            "quizName": self.quiz_name,
            "score": self.score,
            "total": self.total,
            "questions": self.questions,
            "autoSubmitted": self.auto_submitted,
            "reason": self.reason,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
