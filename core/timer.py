"""Countdown clock for a quiz attempt."""
from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from core.config import TICK_SECONDS

log = logging.getLogger(__name__)


class QuizTimer:
    """
    Counts down once per tick while running.

    Running means: not paused, not stopped and time left > 0. Reaching zero
    calls ``on_expire`` exactly once and stops the clock for good.
    """

    def __init__(
        self,
        time_left_seconds: int,
        on_expire: Callable[[], object] | None = None,
        clock: Callable[[], float] = time.time,
        tick_seconds: float = TICK_SECONDS,
    ) -> None:
        self.time_left = max(0, int(time_left_seconds))
        self.on_expire = on_expire
        self.paused = False
        self.paused_at: float | None = None
        self.stopped = False
        self.expired = False
        self.tick_seconds = tick_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._closed = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return not self.paused and not self.stopped and self.time_left > 0

    def tick(self) -> bool:
        """Advance the clock by one second. Returns True if it moved."""
        fire = False
        with self._lock:
            if self.paused or self.stopped:
                return False
            if self.time_left > 0:
                self.time_left -= 1
            if self.time_left <= 0 and not self.expired:
                self.expired = True
                self.stopped = True
                fire = True
        if fire:
            log.info("Quiz time expired")
            if self.on_expire is not None:
                self.on_expire()
        return True

    def pause(self) -> bool:
        with self._lock:
            if not self.is_running:
                return False
            self.paused = True
            self.paused_at = self._clock()
            return True

    def resume(self) -> bool:
        with self._lock:
            if not self.paused:
                return False
            self.paused = False
            self.paused_at = None
            return True

    def toggle(self) -> bool:
        if self.paused:
            return self.resume()
        return self.pause()

    def stop(self) -> None:
        """Stop ticking permanently (submission has started)."""
        with self._lock:
            self.stopped = True
        self._closed.set()

    def start(self) -> None:
        """Tick from a background thread until stopped."""
        if self._thread is not None:
            return

        def _worker() -> None:
            while not self._closed.wait(self.tick_seconds):
                self.tick()
                if self.stopped:
                    break

        self._thread = threading.Thread(
            target=_worker,
            name="quiz_timer",
            daemon=True,
        )
        self._thread.start()

    def close(self) -> None:
        self.stop()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=self.tick_seconds * 2)

    def format_time_left(self) -> str:
        minutes, seconds = divmod(self.time_left, 60)
        return f"{minutes}:{seconds:02d}"
