"""Fire-once delayed callbacks on a single event queue."""
from __future__ import annotations

import asyncio
import heapq
import itertools
import threading
from typing import Callable, List, Optional, Protocol, Tuple


class Handle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> Handle: ...


class _ThreadSafeHandle:
    """Handle for a timer that is created on the loop thread after the call returns."""

    def __init__(self, loop: asyncio.AbstractEventLoop):
        self._loop = loop
        self._lock = threading.Lock()
        self._timer: Optional[asyncio.TimerHandle] = None
        self._cancelled = False

    def _bind(self, timer: asyncio.TimerHandle) -> None:
        with self._lock:
            if self._cancelled:
                timer.cancel()
                return
            self._timer = timer

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            timer = self._timer
        if timer is not None:
            self._loop.call_soon_threadsafe(timer.cancel)


class AsyncioScheduler:
    """Schedules callbacks with ``loop.call_later``.

    Flet runs sync event handlers on worker threads, so calls coming from
    outside the loop thread are hopped onto the loop first.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop):
        self.loop = loop

    def _on_loop_thread(self) -> bool:
        try:
            return asyncio.get_running_loop() is self.loop
        except RuntimeError:
            return False

    def call_later(self, delay: float, callback: Callable[[], None]) -> Handle:
        if self._on_loop_thread():
            return self.loop.call_later(delay, callback)

        handle = _ThreadSafeHandle(self.loop)

        def _schedule():
            if handle.cancelled:
                return
            handle._bind(self.loop.call_later(delay, callback))

        self.loop.call_soon_threadsafe(_schedule)
        return handle


class ManualHandle:
    def __init__(self):
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Deterministic scheduler driven by ``advance``; used by tests and headless hosts."""

    def __init__(self):
        self.now = 0.0
        self._seq = itertools.count()
        self._queue: List[Tuple[float, int, ManualHandle, Callable[[], None]]] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle()
        heapq.heappush(self._queue, (self.now + max(delay, 0.0), next(self._seq), handle, callback))
        return handle

    def pending(self) -> int:
        return sum(1 for _, _, handle, _ in self._queue if not handle.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward and run every callback that became due."""
        target = self.now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            when, _, handle, callback = heapq.heappop(self._queue)
            self.now = when
            if handle.cancelled:
                continue
            callback()
            fired += 1
        self.now = target
        return fired


__all__ = ["AsyncioScheduler", "Handle", "ManualHandle", "ManualScheduler", "Scheduler"]
