"""Quiz endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session as DbSession

from api.database import get_db
from api.models import QuizCreate, QuizStatsUpdate
from api.services import quiz_service
from api.utils import validate_id

router = APIRouter(prefix="/api/quizzes", tags=["quizzes"])


@router.get("")
def list_quizzes(
    db: Annotated[DbSession, Depends(get_db)],
    category: str | None = Query(None),
) -> list[dict[str, object]]:
    """List quizzes without their questions."""
    results = []
    for quiz in quiz_service.list_quizzes(db, category):
        payload = quiz.to_payload()
        payload["questionCount"] = len(payload.pop("questions"))
        results.append(payload)
    return results


@router.post("")
def create_quiz(
    payload: QuizCreate,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    """Create a new quiz."""
    return quiz_service.create_quiz(db, payload).to_payload()


@router.get("/{quiz_id}")
def get_quiz(
    quiz_id: str,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    """Get a quiz with its questions."""
    quiz_id = validate_id("quizId", quiz_id)
    return quiz_service.get_quiz(db, quiz_id).to_payload()


@router.post("/{quiz_id}/stats")
def update_quiz_stats(
    quiz_id: str,
    payload: QuizStatsUpdate,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    """Record the outcome of a finished attempt."""
    quiz_id = validate_id("quizId", quiz_id)
    quiz = quiz_service.record_quiz_stats(db, quiz_id, payload)
    return {
        "quizId": quiz.id,
        "attemptCount": quiz.attempt_count,
        "averageScore": quiz.average_score,
        "averageTimeSpent": quiz.average_time_spent,
    }
