"""Fetching the quiz definition before an attempt starts."""
from __future__ import annotations

import logging
import time

import requests

from core.config import API_URL, FETCH_RETRIES, FETCH_RETRY_DELAY, REQUEST_TIMEOUT
from models import Quiz

log = logging.getLogger(__name__)


class QuizFetchError(Exception):
    """The quiz could not be loaded; shown to the user."""

    def __init__(self, message: str, retryable: bool = False) -> None:
        super().__init__(message)
        self.message = message
        self.retryable = retryable


def fetch_quiz(
    quiz_id: str,
    base_url: str = API_URL,
    http: requests.Session | None = None,
    retries: int = FETCH_RETRIES,
    retry_delay: float = FETCH_RETRY_DELAY,
) -> Quiz:
    """
    Load a quiz from ``GET /api/quizzes/{id}``.

    Connection failures are retried ``retries`` times, ``retry_delay`` seconds
    apart. Every other failure is translated to a QuizFetchError right away.
    """
    http = http or requests.Session()
    url = f"{base_url.rstrip('/')}/api/quizzes/{quiz_id}"
    attempt = 0

    while True:
        try:
            response = http.get(url, timeout=REQUEST_TIMEOUT)
            response.raise_for_status()
            payload = response.json()
            break
        except (requests.ConnectionError, requests.Timeout) as exc:
            if attempt < retries:
                attempt += 1
                log.warning(
                    "Network error fetching quiz %s. Retrying... (%d/%d)",
                    quiz_id,
                    attempt,
                    retries,
                )
                time.sleep(retry_delay)
                continue
            log.error("Error fetching quiz %s: %s", quiz_id, exc)
            raise QuizFetchError(
                "Network error. Please check your connection and try again.",
                retryable=True,
            ) from exc
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            log.error("Error fetching quiz %s: HTTP %s", quiz_id, status)
            if status == 404:
                raise QuizFetchError(
                    "Quiz not found. It may have been deleted or the link is invalid."
                ) from exc
            if status == 500:
                raise QuizFetchError("Server error. Please try again later.") from exc
            raise QuizFetchError("Error fetching quiz. Please try again later.") from exc
        except (requests.RequestException, ValueError) as exc:
            log.error("Error fetching quiz %s: %s", quiz_id, exc)
            raise QuizFetchError("Error fetching quiz. Please try again later.") from exc

    if not isinstance(payload, dict) or not payload.get("questions"):
        raise QuizFetchError("Quiz data is incomplete or invalid.")

    try:
        quiz = Quiz.from_payload(payload)
    except (TypeError, ValueError) as exc:
        raise QuizFetchError("Quiz data is incomplete or invalid.") from exc
    if quiz.quiz_id is None:
        quiz.quiz_id = quiz_id
    log.info("Loaded quiz %s (%d questions)", quiz_id, len(quiz.questions))
    return quiz
