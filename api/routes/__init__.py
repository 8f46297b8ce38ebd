"""API route modules."""
from api.routes import quizzes, reports, reviews, users

__all__ = ["quizzes", "reports", "reviews", "users"]
