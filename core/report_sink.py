"""Delivery of finished quiz submissions to the reports API."""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone

import requests

from core.config import API_URL, BEACON_TIMEOUT, PENDING_PATH, REQUEST_TIMEOUT
from core.pending_queue import PendingQueue
from models import Submission

log = logging.getLogger(__name__)


def is_retryable(exc: requests.RequestException) -> bool:
    """Connection problems, timeouts and 5xx may succeed later; 4xx never will."""
    if isinstance(exc, requests.HTTPError):
        response = exc.response
        return response is None or response.status_code >= 500
    return isinstance(exc, (requests.ConnectionError, requests.Timeout))


@dataclass
class DeliveryOutcome:
    report_saved: bool = False
    report_queued: bool = False
    report_rejected: bool = False
    stats_updated: bool = False
    streak_updated: bool = False
    preferences_updated: bool = False


class ReportSink:
    """
    Best-effort sender for reports and the statistics that go with them.

    Every call is independent: one failing never blocks or undoes the others.
    A report that failed for a transient reason is queued in
    ``pending_queue``; one the server rejected (4xx) is logged and dropped.
    """

    def __init__(
        self,
        base_url: str = API_URL,
        pending_queue: PendingQueue | None = None,
        http: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT,
        beacon_timeout: float = BEACON_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.pending_queue = (
            pending_queue if pending_queue is not None else PendingQueue(PENDING_PATH)
        )
        self.http = http or requests.Session()
        self.timeout = timeout
        self.beacon_timeout = beacon_timeout

    def _post(
        self, path: str, payload: dict[str, object], timeout: float | None = None
    ) -> requests.Response:
        response = self.http.post(
            f"{self.base_url}{path}",
            json=payload,
            timeout=timeout or self.timeout,
        )
        response.raise_for_status()
        return response

    def _queue(self, payload: dict[str, object], time_spent: float) -> bool:
        entry = dict(payload)
        entry["timestamp"] = datetime.now(timezone.utc).isoformat()
        entry["timeSpent"] = time_spent
        try:
            self.pending_queue.append(entry)
        except OSError as exc:
            log.error("Failed to save quiz data locally: %s", exc)
            return False
        return True

    def deliver(self, submission: Submission) -> DeliveryOutcome:
        """Save the report, then update stats, streak and preferences."""
        outcome = DeliveryOutcome()
        report = submission.report_payload()

        try:
            self._post("/api/reports", report)
            outcome.report_saved = True
        except requests.RequestException as exc:
            if is_retryable(exc):
                log.warning("Could not save report: %s", exc)
                outcome.report_queued = self._queue(report, submission.time_spent)
            else:
                log.error("Server rejected report for quiz %s: %s", submission.quiz_id, exc)
                outcome.report_rejected = True

        try:
            self._post(
                f"/api/quizzes/{submission.quiz_id}/stats",
                submission.stats_payload(),
            )
            outcome.stats_updated = True
        except requests.RequestException as exc:
            log.warning("Could not update quiz stats: %s", exc)

        try:
            self._post(
                "/api/users/streak/activity",
                {
                    "username": submission.username,
                    "timeSpentSeconds": max(1, int(round(submission.time_spent))),
                },
            )
            outcome.streak_updated = True
        except requests.RequestException as exc:
            log.warning("Could not update daily activity: %s", exc)

        if submission.username:
            try:
                self._post(
                    "/api/intelligence/preferences",
                    {
                        "username": submission.username,
                        "quizId": submission.quiz_id,
                        "score": submission.result.score,
                        "totalQuestions": len(submission.result.questions),
                        "timeSpent": submission.time_spent,
                        "category": submission.category,
                        "difficulty": submission.difficulty,
                    },
                )
                outcome.preferences_updated = True
            except requests.RequestException as exc:
                log.warning("Could not update user preferences: %s", exc)

        log.info(
            "Delivered submission for quiz %s (report saved: %s)",
            submission.quiz_id,
            outcome.report_saved,
        )
        return outcome

    def beacon(self, submission: Submission) -> threading.Thread:
        """Send the report without waiting for it; used while shutting down."""
        report = submission.report_payload()

        def _worker() -> None:
            try:
                self._post("/api/reports", report, timeout=self.beacon_timeout)
            except requests.RequestException as exc:
                if not is_retryable(exc):
                    log.error("Server rejected beacon report: %s", exc)
                    return
                log.warning("Beacon delivery failed: %s", exc)
                self._queue(report, submission.time_spent)

        thread = threading.Thread(target=_worker, name="report_beacon", daemon=True)
        thread.start()
        return thread

    def send_review_signal(
        self,
        quiz_id: str,
        question_index: int,
        quality: int,
        username: str | None = None,
        question_id: str | None = None,
    ) -> bool:
        """Post a spaced-repetition quality signal for one answer."""
        try:
            self._post(
                "/api/reviews/update",
                {
                    "username": username,
                    "quizId": quiz_id,
                    "questionIndex": question_index,
                    "questionId": question_id,
                    "quality": quality,
                },
            )
        except requests.RequestException as exc:
            log.warning("Error updating review schedule: %s", exc)
            return False
        return True

    def flush_pending(self) -> int:
        """
        Retry queued reports. Returns how many were accepted.

        Reports the server rejects are dropped from the queue; transient
        failures stay queued for the next run.
        """
        delivered: list[dict[str, object]] = []
        rejected: list[dict[str, object]] = []
        for payload in self.pending_queue.load():
            try:
                self._post("/api/reports", payload)
            except requests.RequestException as exc:
                if is_retryable(exc):
                    log.warning("Pending report still not accepted: %s", exc)
                else:
                    log.error("Dropping pending report the server rejected: %s", exc)
                    rejected.append(payload)
                continue
            delivered.append(payload)
        self.pending_queue.remove(delivered + rejected)
        if delivered:
            log.info("Delivered %d pending reports", len(delivered))
        return len(delivered)
