"""Quiz-related Pydantic models."""
from pydantic import BaseModel, Field, field_validator


class QuestionPayload(BaseModel):
    """One multiple-choice question in wire format."""

    question: str = Field(..., min_length=1)
    options: list[str] = Field(..., min_length=2)
    correctAnswer: str = Field(..., pattern="^[A-D]$")

    @field_validator("options")
    @classmethod
    def validate_options_length(cls, v: list[str]) -> list[str]:
        if len(v) > 4:
            raise ValueError("At most 4 options (A-D) are supported")
        return v


class QuizCreate(BaseModel):
    """Model for creating a quiz."""

    title: str = Field(..., min_length=1)
    category: str = "General"
    duration: int = Field(..., ge=1)
    totalMarks: float = Field(..., gt=0)
    questions: list[QuestionPayload] = Field(..., min_length=1)


class QuizStatsUpdate(BaseModel):
    """Statistics posted after each finished attempt."""

    quizId: str | None = None
    score: float = Field(..., ge=0)
    totalQuestions: int = Field(..., ge=0)
    timeSpent: float = Field(0, ge=0)
