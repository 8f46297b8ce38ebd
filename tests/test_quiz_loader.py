import pytest
import requests

from core import quiz_loader
from core.quiz_loader import QuizFetchError, fetch_quiz

QUIZ_PAYLOAD = {
    "_id": "abc",
    "title": "Capitals",
    "duration": 5,
    "totalMarks": 10,
    "category": "Geography",
    "questions": [
        {"question": "Capital of France?", "options": ["Paris", "Rome"], "correctAnswer": "A"},
    ],
}


class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None):
        self.status_code = status_code
        self._payload = payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    def __init__(self, responses):
        self.responses = list(responses)
        self.urls = []

    def get(self, url, timeout=None):
        self.urls.append(url)
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    delays: list[float] = []
    monkeypatch.setattr(quiz_loader.time, "sleep", delays.append)
    return delays


def test_fetch_quiz_parses_payload() -> None:
    http = FakeSession([FakeResponse(payload=QUIZ_PAYLOAD)])
    quiz = fetch_quiz("abc", base_url="http://quiz.test/", http=http)

    assert http.urls == ["http://quiz.test/api/quizzes/abc"]
    assert quiz.title == "Capitals"
    assert quiz.duration == 5
    assert quiz.total_marks == 10
    assert quiz.questions[0].correct_index == 0
    assert quiz.quiz_id == "abc"


def test_fetch_quiz_retries_network_errors(no_sleep) -> None:
    http = FakeSession(
        [
            requests.ConnectionError("down"),
            requests.Timeout("slow"),
            FakeResponse(payload=QUIZ_PAYLOAD),
        ]
    )
    quiz = fetch_quiz("abc", http=http, retries=3, retry_delay=2.0)
    assert quiz.title == "Capitals"
    assert no_sleep == [2.0, 2.0]


def test_fetch_quiz_gives_up_after_retries(no_sleep) -> None:
    http = FakeSession([requests.ConnectionError("down")] * 4)
    with pytest.raises(QuizFetchError) as excinfo:
        fetch_quiz("abc", http=http, retries=3)
    assert excinfo.value.retryable
    assert "Network error" in excinfo.value.message
    assert len(http.urls) == 4


@pytest.mark.parametrize(
    ("status", "message"),
    [
        (404, "Quiz not found. It may have been deleted or the link is invalid."),
        (500, "Server error. Please try again later."),
        (403, "Error fetching quiz. Please try again later."),
    ],
)
def test_fetch_quiz_http_errors(status: int, message: str, no_sleep) -> None:
    http = FakeSession([FakeResponse(status)])
    with pytest.raises(QuizFetchError) as excinfo:
        fetch_quiz("abc", http=http)
    assert excinfo.value.message == message
    assert not excinfo.value.retryable
    assert no_sleep == []


def test_fetch_quiz_rejects_incomplete_data() -> None:
    http = FakeSession([FakeResponse(payload={"title": "Empty", "questions": []})])
    with pytest.raises(QuizFetchError, match="incomplete"):
        fetch_quiz("abc", http=http)


def test_fetch_quiz_rejects_non_json() -> None:
    http = FakeSession([FakeResponse(payload=None)])
    with pytest.raises(QuizFetchError):
        fetch_quiz("abc", http=http)
