from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from api.app import app
from api.database import SessionLocal, drop_db, init_db
from api.services import activity_service, review_service

QUIZ = {
    "title": "Capitals",
    "category": "Geography",
    "duration": 5,
    "totalMarks": 10,
    "questions": [
        {"question": "Capital of France?", "options": ["Paris", "Rome"], "correctAnswer": "A"},
        {"question": "Capital of Italy?", "options": ["Paris", "Rome"], "correctAnswer": "B"},
    ],
}

REPORT = {
    "username": "alice",
    "quizName": "Capitals",
    "score": 5,
    "total": 10,
    "questions": [
        {
            "questionText": "Capital of France?",
            "options": ["Paris", "Rome"],
            "userAnswer": "A",
            "userAnswerText": "Paris",
            "correctAnswer": "A",
            "correctAnswerText": "Paris",
            "answerTime": 3.5,
        }
    ],
}


@pytest.fixture
def client():
    drop_db()
    init_db()
    with TestClient(app) as test_client:
        yield test_client


def test_health(client: TestClient) -> None:
    assert client.get("/api/health").json() == {"status": "ok"}


def test_create_and_get_quiz(client: TestClient) -> None:
    created = client.post("/api/quizzes", json=QUIZ)
    assert created.status_code == 200
    quiz_id = created.json()["_id"]

    fetched = client.get(f"/api/quizzes/{quiz_id}").json()
    assert fetched["title"] == "Capitals"
    assert fetched["totalMarks"] == 10
    assert fetched["questions"][1]["correctAnswer"] == "B"

    listing = client.get("/api/quizzes", params={"category": "Geography"}).json()
    assert listing[0]["questionCount"] == 2
    assert "questions" not in listing[0]


def test_quiz_validation(client: TestClient) -> None:
    bad = dict(QUIZ, questions=[{"question": "?", "options": ["x", "y"], "correctAnswer": "E"}])
    assert client.post("/api/quizzes", json=bad).status_code == 422
    assert client.post("/api/quizzes", json=dict(QUIZ, questions=[])).status_code == 422


def test_missing_quiz_is_404(client: TestClient) -> None:
    response = client.get("/api/quizzes/missing")
    assert response.status_code == 404
    assert client.post("/api/quizzes/missing/stats", json={"score": 1, "totalQuestions": 1}).status_code == 404


def test_quiz_stats_running_average(client: TestClient) -> None:
    quiz_id = client.post("/api/quizzes", json=QUIZ).json()["_id"]
    client.post(f"/api/quizzes/{quiz_id}/stats", json={"score": 10, "totalQuestions": 2, "timeSpent": 60})
    stats = client.post(
        f"/api/quizzes/{quiz_id}/stats", json={"score": 5, "totalQuestions": 2, "timeSpent": 30}
    ).json()
    assert stats["attemptCount"] == 2
    assert stats["averageScore"] == pytest.approx(7.5)
    assert stats["averageTimeSpent"] == pytest.approx(45)


def test_create_report(client: TestClient) -> None:
    response = client.post(
        "/api/reports", json=dict(REPORT, autoSubmitted=True, reason="Time expired")
    )
    assert response.status_code == 201
    report = response.json()
    assert report["autoSubmitted"] is True
    assert report["reason"] == "Time expired"
    assert report["questions"][0]["answerTime"] == 3.5

    fetched = client.get(f"/api/reports/{report['_id']}").json()
    assert fetched["quizName"] == "Capitals"


@pytest.mark.parametrize("field", ["username", "quizName", "questions"])
def test_report_missing_fields(client: TestClient, field: str) -> None:
    payload = dict(REPORT)
    payload.pop(field)
    response = client.post("/api/reports", json=payload)
    assert response.status_code == 400
    assert response.json()["detail"] == "Missing required fields"


def test_list_reports_newest_first(client: TestClient) -> None:
    client.post("/api/reports", json=REPORT)
    client.post("/api/reports", json=dict(REPORT, quizName="Rivers"))
    client.post("/api/reports", json=dict(REPORT, username="bob"))

    reports = client.get("/api/reports", params={"username": "alice"}).json()
    assert [r["quizName"] for r in reports] == ["Rivers", "Capitals"]
    assert len(client.get("/api/reports", params={"limit": 1}).json()) == 1
    assert client.get("/api/reports/999").status_code == 404


def test_calculate_next_review_intervals() -> None:
    first = review_service.calculate_next_review(5, 2.5, 0, 0)
    assert (first.repetitions, first.interval) == (1, 1)
    assert first.easiness_factor == pytest.approx(2.6)

    second = review_service.calculate_next_review(5, first.easiness_factor, 1, 1)
    assert (second.repetitions, second.interval) == (2, 6)

    third = review_service.calculate_next_review(5, second.easiness_factor, 2, 6)
    assert third.interval == 17

    failed = review_service.calculate_next_review(1, 2.2, 4, 30)
    assert (failed.easiness_factor, failed.repetitions, failed.interval) == (2.2, 0, 1)

    floor = review_service.calculate_next_review(3, 1.3, 0, 0)
    assert floor.easiness_factor == pytest.approx(1.3)


def test_review_update_endpoint(client: TestClient) -> None:
    payload = {"username": "alice", "quizId": "q1", "questionIndex": 0, "quality": 5}
    client.post("/api/reviews/update", json=payload)
    second = client.post("/api/reviews/update", json=payload).json()
    assert second["repetitions"] == 2
    assert second["interval"] == 6
    assert second["nextReviewDate"] is not None

    assert client.post("/api/reviews/update", json=dict(payload, quality=7)).status_code == 422


def test_streak_activity(client: TestClient) -> None:
    first = client.post(
        "/api/users/streak/activity", json={"username": "alice", "timeSpentSeconds": 40}
    ).json()
    second = client.post(
        "/api/users/streak/activity", json={"username": "alice", "timeSpentSeconds": 20}
    ).json()
    assert first["currentStreak"] == 1
    assert second["quizCount"] == 2
    assert second["timeSpentSeconds"] == 60


def test_current_streak_counts_consecutive_days(client: TestClient) -> None:
    today = date(2026, 3, 10)
    with SessionLocal() as db:
        for offset in (1, 2, 4):
            activity_service.record_daily_activity(db, "bob", 30, today - timedelta(days=offset))
        assert activity_service.current_streak(db, "bob", today) == 2
        activity_service.record_daily_activity(db, "bob", 30, today)
        assert activity_service.current_streak(db, "bob", today) == 3
        assert activity_service.current_streak(db, "bob", today + timedelta(days=2)) == 0


def test_preferences(client: TestClient) -> None:
    payload = {
        "username": "alice",
        "quizId": "q1",
        "score": 8,
        "totalQuestions": 10,
        "timeSpent": 120,
        "category": "Geography",
        "difficulty": "medium",
    }
    client.post("/api/intelligence/preferences", json=payload)
    result = client.post("/api/intelligence/preferences", json=dict(payload, score=4)).json()
    assert result["quizzesTaken"] == 2
    assert result["lastDifficulty"] == "medium"
    assert result["averageScore"] == pytest.approx(6)


def test_create_report_logs_saved_report(client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("INFO", logger="api.services.report_service"):
        report_id = client.post("/api/reports", json=REPORT).json()["_id"]
    assert f"Saved report {report_id} for alice (Capitals)" in caplog.messages
