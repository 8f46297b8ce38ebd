"""Service layer for quizzes and their running statistics."""
from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session as DBSession

from api.models import QuizCreate, QuizStatsUpdate
from api.models.db.quiz import Quiz


def create_quiz(db: DBSession, payload: QuizCreate) -> Quiz:
    """Store a new quiz."""
    quiz = Quiz(
        title=payload.title.strip(),
        category=payload.category or "General",
        duration=payload.duration,
        total_marks=payload.totalMarks,
    )
    quiz.questions = [question.model_dump() for question in payload.questions]
    db.add(quiz)
    db.commit()
    db.refresh(quiz)
    return quiz


def get_quiz(db: DBSession, quiz_id: str) -> Quiz:
    """Get quiz by ID or raise 404."""
    quiz = db.get(Quiz, quiz_id)
    if not quiz:
        raise HTTPException(status_code=404, detail="Quiz not found")
    return quiz


def list_quizzes(db: DBSession, category: str | None = None) -> list[Quiz]:
    """List quizzes, newest first."""
    query = select(Quiz)
    if category:
        query = query.where(Quiz.category == category)
    query = query.order_by(Quiz.created_at.desc())
    return list(db.execute(query).scalars().all())


def record_quiz_stats(db: DBSession, quiz_id: str, stats: QuizStatsUpdate) -> Quiz:
    """
    Fold one finished attempt into the quiz's running averages.

    Args:
        db: Database session
        quiz_id: Quiz the attempt belongs to
        stats: Score and time spent of the attempt
    """
    quiz = get_quiz(db, quiz_id)
    count = quiz.attempt_count
    quiz.average_score = (quiz.average_score * count + stats.score) / (count + 1)
    quiz.average_time_spent = (
        quiz.average_time_spent * count + stats.timeSpent
    ) / (count + 1)
    quiz.attempt_count = count + 1

    db.commit()
    db.refresh(quiz)
    return quiz
