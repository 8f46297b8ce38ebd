"""Pydantic models."""
from api.models.activity import PreferenceUpdate, ReviewUpdate, StreakActivity
from api.models.quizzes import QuestionPayload, QuizCreate, QuizStatsUpdate
from api.models.reports import ReportCreate, ReportQuestion

__all__ = [
    "PreferenceUpdate",
    "QuestionPayload",
    "QuizCreate",
    "QuizStatsUpdate",
    "ReportCreate",
    "ReportQuestion",
    "ReviewUpdate",
    "StreakActivity",
]
