"""
Interruption channels of a quiz attempt and the single submission they share.

Every channel (submit button, time expiry, leaving fullscreen, navigating
away, closing the window) ends up in ``InterruptionWatcher.submit``. The
first caller to find the session armed finalizes it; every other caller,
concurrent or late, returns ``None`` without side effects.
"""
from __future__ import annotations

import enum
import logging
import math
import threading
import time
from typing import Callable

from core.config import FULLSCREEN_SUPPRESSION_SECONDS, INIT_GRACE_SECONDS
from core.quiz_session import QuizSession, SubmissionState
from core.report_sink import DeliveryOutcome, ReportSink
from models import QuizResult, Submission

log = logging.getLogger(__name__)


class SubmitTrigger(str, enum.Enum):
    USER_ACTION = "user_action"
    TIME_EXPIRED = "time_expired"
    FULLSCREEN_ESCAPE = "fullscreen_escape"
    ROUTE_CHANGE = "route_change"
    PAGE_UNLOAD = "page_unload"

    @property
    def reason(self) -> str | None:
        """Reason recorded on the report; None for an explicit submit."""
        return _TRIGGER_REASONS.get(self)


_TRIGGER_REASONS = {
    SubmitTrigger.TIME_EXPIRED: "Time expired",
    SubmitTrigger.FULLSCREEN_ESCAPE: "Escape key pressed",
    SubmitTrigger.ROUTE_CHANGE: "Route changed",
    SubmitTrigger.PAGE_UNLOAD: "Page unload",
}


class InterruptionWatcher:
    """Arbitrates the submission of one ``QuizSession``.

    Use as a context manager so listeners and threads are torn down with
    the attempt::

        with InterruptionWatcher(session, sink) as watcher:
            ...
    """

    def __init__(
        self,
        session: QuizSession,
        sink: ReportSink | None = None,
        grace_seconds: float = INIT_GRACE_SECONDS,
        suppression_seconds: float = FULLSCREEN_SUPPRESSION_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.session = session
        self.sink = sink if sink is not None else session.sink
        self.grace_seconds = grace_seconds
        self.suppression_seconds = suppression_seconds
        self.finalize_count = 0
        self.outcome: DeliveryOutcome | None = None
        self.delivery_thread: threading.Thread | None = None

        self._clock = clock
        self._lock = threading.Lock()
        self._suppress_until: float | None = None
        self._grace_timer: threading.Timer | None = None
        self._listeners: list[tuple[str, Callable[[], object]]] = []

        session.timer.on_expire = self.on_time_expired

    # -- lifetime ------------------------------------------------------------

    def __enter__(self) -> "InterruptionWatcher":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False

    def start(self) -> None:
        """Arm after the grace period and start the countdown."""
        if self._grace_timer is None:
            self._grace_timer = threading.Timer(self.grace_seconds, self.session.arm)
            self._grace_timer.daemon = True
            self._grace_timer.start()
        self.session.timer.start()

    def subscribe(self, name: str, detach: Callable[[], object]) -> None:
        """Register teardown for an event listener attached elsewhere."""
        self._listeners.append((name, detach))

    def close(self) -> None:
        if self._grace_timer is not None:
            self._grace_timer.cancel()
        self.session.timer.close()
        while self._listeners:
            name, detach = self._listeners.pop()
            try:
                detach()
            except Exception as exc:
                log.warning("Failed to detach %s listener: %s", name, exc)

    # -- arbitration -----------------------------------------------------------

    @property
    def is_done(self) -> bool:
        return self.session.state is SubmissionState.SUBMITTED

    def submit(self, trigger: SubmitTrigger) -> QuizResult | None:
        """Finalize the attempt if this is the first trigger to get here."""
        session = self.session
        if not session.try_begin_submission():
            log.debug(
                "Ignoring %s trigger; session is %s", trigger.value, session.state.value
            )
            return None

        self.finalize_count += 1
        session.timer.stop()
        session.freeze_timing()

        result = session.score()
        session.result = result
        if trigger is not SubmitTrigger.USER_ACTION:
            session.auto_submit_reason = trigger.reason

        submission = Submission(
            quiz_id=session.quiz_id,
            username=session.username,
            quiz_name=session.quiz.title,
            category=session.quiz.category,
            difficulty=session.difficulty(),
            result=result,
            time_spent=session.total_time_spent(),
            auto_submitted=trigger is not SubmitTrigger.USER_ACTION,
            reason=trigger.reason,
        )
        log.info(
            "Submitting quiz %s via %s: %s/%s",
            session.quiz_id,
            trigger.value,
            result.score,
            result.total,
        )

        if self.sink is None:
            session.finish_submission()
        elif trigger is SubmitTrigger.PAGE_UNLOAD:
            self.sink.beacon(submission)
            session.finish_submission()
        else:
            self.delivery_thread = threading.Thread(
                target=self._deliver,
                args=(submission,),
                name="report_delivery",
            )
            self.delivery_thread.start()
        return result

    def _deliver(self, submission: Submission) -> None:
        try:
            self.outcome = self.sink.deliver(submission)
        except Exception:
            log.exception("Unexpected error while delivering quiz %s", submission.quiz_id)
        finally:
            self.session.finish_submission()

    def wait(self, timeout: float | None = None) -> None:
        """Block until report delivery has finished."""
        if self.delivery_thread is not None:
            self.delivery_thread.join(timeout)

    # -- channels --------------------------------------------------------------

    def on_user_submit(self) -> QuizResult | None:
        return self.submit(SubmitTrigger.USER_ACTION)

    def on_time_expired(self) -> QuizResult | None:
        return self.submit(SubmitTrigger.TIME_EXPIRED)

    def on_escape_key(self, is_fullscreen: bool) -> QuizResult | None:
        if not is_fullscreen:
            return None
        return self.submit(SubmitTrigger.FULLSCREEN_ESCAPE)

    def on_fullscreen_change(
        self,
        is_fullscreen: bool,
        cleanup: Callable[[], object] | None = None,
    ) -> QuizResult | None:
        """Handle a fullscreen change; submits before ``cleanup`` runs."""
        if is_fullscreen:
            return None
        result = None
        if self._consume_suppression():
            log.debug("Fullscreen exit was programmatic; not submitting")
        else:
            result = self.submit(SubmitTrigger.FULLSCREEN_ESCAPE)
        if cleanup is not None:
            cleanup()
        return result

    def exit_fullscreen(self, exit_fn: Callable[[], object]) -> None:
        """Leave fullscreen from code without it counting as an escape."""
        with self._lock:
            self._suppress_until = math.inf
        try:
            exit_fn()
        finally:
            with self._lock:
                if self._suppress_until is not None:
                    self._suppress_until = self._clock() + self.suppression_seconds

    def _consume_suppression(self) -> bool:
        with self._lock:
            until = self._suppress_until
            self._suppress_until = None
        return until is not None and self._clock() <= until

    def on_route_change(self) -> QuizResult | None:
        # untouched attempts do not produce a report
        if self.session.state is not SubmissionState.IN_PROGRESS:
            return None
        if not self.session.answers:
            return None
        return self.submit(SubmitTrigger.ROUTE_CHANGE)

    def on_page_unload(self) -> QuizResult | None:
        return self.submit(SubmitTrigger.PAGE_UNLOAD)
