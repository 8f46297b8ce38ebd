"""Pydantic models for reviews, streaks and preferences."""
from pydantic import BaseModel, Field


class ReviewUpdate(BaseModel):
    """Spaced repetition quality signal for one answered question."""

    username: str | None = None
    quizId: str = Field(..., min_length=1)
    questionIndex: int = Field(..., ge=0)
    questionId: str | None = None
    quality: int = Field(..., ge=0, le=5)


class StreakActivity(BaseModel):
    """Time spent on a finished quiz, for the daily streak."""

    username: str | None = None
    timeSpentSeconds: int = Field(1, ge=1)


class PreferenceUpdate(BaseModel):
    """Per-category performance signal."""

    username: str = Field(..., min_length=1)
    quizId: str | None = None
    score: float = Field(..., ge=0)
    totalQuestions: int = Field(..., ge=0)
    timeSpent: float = Field(0, ge=0)
    category: str = "General"
    difficulty: str = "easy"
