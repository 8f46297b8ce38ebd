import threading

from core.timer import QuizTimer


def test_tick_counts_down_and_expires_once(clock) -> None:
    fired = []
    timer = QuizTimer(2, on_expire=lambda: fired.append(True), clock=clock)

    assert timer.tick()
    assert timer.time_left == 1
    assert timer.tick()
    assert timer.time_left == 0
    assert timer.expired and timer.stopped

    assert not timer.tick()
    assert timer.time_left == 0
    assert fired == [True]


def test_pause_freezes_countdown(clock) -> None:
    timer = QuizTimer(60, clock=clock)
    assert timer.pause()
    assert timer.paused_at == clock.now

    assert not timer.tick()
    assert timer.time_left == 60

    assert timer.resume()
    assert timer.paused_at is None
    timer.tick()
    assert timer.time_left == 59


def test_pause_and_resume_are_idempotent(clock) -> None:
    timer = QuizTimer(60, clock=clock)
    assert timer.pause()
    clock.advance(5)
    assert not timer.pause()
    assert timer.paused_at == clock.now - 5

    assert timer.resume()
    assert not timer.resume()
    assert timer.is_running


def test_pause_is_ignored_when_stopped(clock) -> None:
    timer = QuizTimer(60, clock=clock)
    timer.stop()
    assert not timer.pause()
    assert not timer.tick()
    assert timer.time_left == 60


def test_toggle_switches_pause(clock) -> None:
    timer = QuizTimer(60, clock=clock)
    timer.toggle()
    assert timer.paused
    timer.toggle()
    assert not timer.paused


def test_background_thread_expires(clock) -> None:
    done = threading.Event()
    timer = QuizTimer(2, on_expire=done.set, clock=clock, tick_seconds=0.01)
    timer.start()
    assert done.wait(2)
    timer.close()
    assert timer.time_left == 0


def test_format_time_left() -> None:
    assert QuizTimer(600).format_time_left() == "10:00"
    assert QuizTimer(65).format_time_left() == "1:05"
    assert QuizTimer(-3).format_time_left() == "0:00"
