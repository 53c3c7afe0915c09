"""Single-threaded scheduler that hosts the widget.

Timers and inbound results run one at a time on the thread that calls
``run_forever``/``run_pending``. Only ``post`` and ``stop`` may be called from
other threads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import heapq
import itertools
import logging
import queue
import threading
import time
from typing import Any, Callable

logger = logging.getLogger(__name__)


@dataclass(order=True)
class TimerHandle:
    """A scheduled callback; ``cancel`` keeps it from running."""

    when: float
    sequence: int
    callback: Callable[..., Any] = field(compare=False)
    args: tuple[Any, ...] = field(compare=False, default=())
    cancelled: bool = field(compare=False, default=False)

    def cancel(self) -> None:
        self.cancelled = True


class EventLoop:
    """Cooperative timer loop with a thread-safe inbox."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._timers: list[TimerHandle] = []
        self._sequence = itertools.count()
        self._inbox: queue.Queue[tuple[Callable[..., Any], tuple[Any, ...]]] = queue.Queue()
        self._stop_event = threading.Event()

    def time(self) -> float:
        return self._clock()

    def call_later(self, delay_seconds: float, callback: Callable[..., Any], *args: Any) -> TimerHandle:
        """Schedule ``callback(*args)`` to run ``delay_seconds`` from now."""
        handle = TimerHandle(
            when=self._clock() + max(delay_seconds, 0.0),
            sequence=next(self._sequence),
            callback=callback,
            args=args,
        )
        heapq.heappush(self._timers, handle)
        return handle

    def call_soon(self, callback: Callable[..., Any], *args: Any) -> TimerHandle:
        return self.call_later(0.0, callback, *args)

    def post(self, callback: Callable[..., Any], *args: Any) -> None:
        """Hand a callback to the loop from any thread."""
        self._inbox.put((callback, args))

    def stop(self) -> None:
        self._stop_event.set()

    def run_pending(self) -> int:
        """Run inbox callbacks, then every timer that is due. Returns how many ran."""
        ran = 0
        while True:
            try:
                callback, args = self._inbox.get_nowait()
            except queue.Empty:
                break
            self._run(callback, args)
            ran += 1

        now = self._clock()
        while self._timers and self._timers[0].when <= now:
            handle = heapq.heappop(self._timers)
            if handle.cancelled:
                continue
            self._run(handle.callback, handle.args)
            ran += 1
        return ran

    def run_forever(self) -> None:
        """Run until ``stop`` is called."""
        self._stop_event.clear()
        while not self._stop_event.is_set():
            self.run_pending()
            timeout = self._next_timeout()
            try:
                callback, args = self._inbox.get(timeout=timeout)
            except queue.Empty:
                continue
            self._run(callback, args)

    def _next_timeout(self) -> float:
        while self._timers and self._timers[0].cancelled:
            heapq.heappop(self._timers)
        if not self._timers:
            return 0.5
        return min(max(self._timers[0].when - self._clock(), 0.0), 0.5)

    def _run(self, callback: Callable[..., Any], args: tuple[Any, ...]) -> None:
        try:
            callback(*args)
        except Exception:
            logger.exception("Unhandled error in loop callback %r", callback)


__all__ = ["EventLoop", "TimerHandle"]
