"""Database models."""
from api.models.db.activity import DailyActivity, UserPreference
from api.models.db.quiz import Quiz
from api.models.db.report import Report
from api.models.db.review import ReviewSchedule

__all__ = [
    "DailyActivity",
    "UserPreference",
    "Quiz",
    "Report",
    "ReviewSchedule",
]
