"""
Timer contract for periodic work.

Anything with ``call_later(delay, callback, *args)`` returning a handle
that has ``cancel()`` can drive the overlay's periodic work. An asyncio
event loop satisfies the contract directly; ManualTimer satisfies it
deterministically for tests and scripted simulations.
"""

import heapq
import itertools
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Tuple


class TimerHandle(ABC):
    """Handle returned by Timer.call_later()."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from running. Idempotent."""
        pass

    @abstractmethod
    def cancelled(self) -> bool:
        """Return True if cancel() has been called."""
        pass


class Timer(ABC):
    """
    Abstract one-shot scheduler.

    Example:
        loop = asyncio.get_running_loop()
        handle = loop.call_later(3.0, on_tick)   # asyncio satisfies Timer
        handle.cancel()
    """

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle:
        """Schedule callback(*args) to run once after delay seconds."""
        pass


class ManualTimerHandle(TimerHandle):
    """Handle for a callback scheduled on a ManualTimer."""

    def __init__(self, when: float, callback: Callable[..., Any], args: Tuple[Any, ...]):
        self.when = when
        self._callback = callback
        self._args = args
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled

    def _run(self) -> None:
        self._callback(*self._args)


class ManualTimer(Timer):
    """
    Deterministic timer driven by explicit advance() calls.

    Callbacks run synchronously inside advance(), in due-time order
    (ties in scheduling order). A callback may schedule further
    callbacks; those run within the same advance() if they fall due.
    """

    def __init__(self) -> None:
        self._now = 0.0
        self._queue: List[Tuple[float, int, ManualTimerHandle]] = []
        self._counter = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> ManualTimerHandle:
        if delay < 0:
            delay = 0.0
        handle = ManualTimerHandle(self._now + delay, callback, args)
        heapq.heappush(self._queue, (handle.when, next(self._counter), handle))
        return handle

    def pending(self) -> int:
        """Number of scheduled, not-yet-cancelled callbacks."""
        return sum(1 for _, _, h in self._queue if not h.cancelled())

    def advance(self, seconds: float) -> int:
        """
        Move the clock forward, running every callback that falls due.

        Returns:
            Number of callbacks executed
        """
        target = self._now + max(seconds, 0.0)
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            when, _, handle = heapq.heappop(self._queue)
            self._now = when
            if handle.cancelled():
                continue
            handle._run()
            fired += 1
        self._now = target
        return fired
