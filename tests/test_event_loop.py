from __future__ import annotations

import threading
import time

from tubetimes.data.event_loop import EventLoop


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_timers_run_when_due_in_order() -> None:
    clock = FakeClock()
    loop = EventLoop(clock=clock)
    calls: list[str] = []

    loop.call_later(2.0, calls.append, "late")
    loop.call_later(1.0, calls.append, "early")
    loop.call_soon(calls.append, "soon")

    assert loop.run_pending() == 1
    assert calls == ["soon"]

    clock.now += 5
    loop.run_pending()
    assert calls == ["soon", "early", "late"]


def test_cancelled_timer_does_not_run() -> None:
    clock = FakeClock()
    loop = EventLoop(clock=clock)
    calls: list[str] = []

    handle = loop.call_later(1.0, calls.append, "cancelled")
    handle.cancel()
    clock.now += 2

    assert loop.run_pending() == 0
    assert calls == []


def test_post_runs_before_timers() -> None:
    clock = FakeClock()
    loop = EventLoop(clock=clock)
    calls: list[str] = []

    loop.call_soon(calls.append, "timer")
    loop.post(calls.append, "posted")
    loop.run_pending()

    assert calls == ["posted", "timer"]


def test_callback_error_does_not_stop_loop() -> None:
    loop = EventLoop(clock=FakeClock())
    calls: list[str] = []

    def boom() -> None:
        raise RuntimeError("boom")

    loop.call_soon(boom)
    loop.call_soon(calls.append, "after")

    assert loop.run_pending() == 2
    assert calls == ["after"]


def test_run_forever_handles_posts_from_other_threads() -> None:
    loop = EventLoop()
    seen: list[str] = []
    ran_on: list[threading.Thread] = []

    def record(value: str) -> None:
        seen.append(value)
        ran_on.append(threading.current_thread())
        loop.stop()

    worker = threading.Thread(target=lambda: (time.sleep(0.05), loop.post(record, "hello")))
    worker.start()

    runner = threading.Thread(target=loop.run_forever)
    runner.start()
    runner.join(timeout=2)
    worker.join(timeout=2)

    assert not runner.is_alive()
    assert seen == ["hello"]
    assert ran_on == [runner]
