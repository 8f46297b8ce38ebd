"""Report-related Pydantic models."""
from pydantic import BaseModel


class ReportQuestion(BaseModel):
    """Per-question detail of a submission."""

    questionText: str
    options: list[str] = []
    userAnswer: str
    userAnswerText: str | None = None
    correctAnswer: str
    correctAnswerText: str | None = None
    answerTime: float = 0


class ReportCreate(BaseModel):
    """Model for saving a report.

    Required fields are checked by the route so a missing one answers 400
    like an empty question list does.
    """

    username: str | None = None
    quizName: str | None = None
    score: float = 0
    total: float = 0
    questions: list[ReportQuestion] = []
    autoSubmitted: bool = False
    reason: str | None = None
