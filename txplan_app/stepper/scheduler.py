"""
Cancellable one-shot timer scheduling for the stepper.

Delays are integer milliseconds. AsyncioScheduler runs timers on the caller's
event loop; ManualScheduler keeps a virtual clock that only moves when
advance() is called, which makes press-and-hold timing deterministic.
"""

import asyncio
import heapq
import itertools
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Optional, Protocol


class TimerHandle(Protocol):
    """Handle to a scheduled callback."""

    def cancel(self) -> None: ...


class Scheduler(ABC):
    """Schedules one-shot callbacks on a single logical thread."""

    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        """
        Run callback once after delay_ms.

        Args:
            delay_ms: Delay in milliseconds
            callback: Zero-argument callable

        Returns:
            Handle whose cancel() prevents the callback from running
        """
        pass


class AsyncioScheduler(Scheduler):
    """Scheduler backed by an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay_ms / 1000.0, callback)


class ManualTimer:
    """Timer owned by a ManualScheduler."""

    __slots__ = ("due_ms", "callback", "cancelled")

    def __init__(self, due_ms: int, callback: Callable[[], None]):
        self.due_ms = due_ms
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler(Scheduler):
    """Virtual-clock scheduler; timers fire only inside advance()."""

    def __init__(self, start_ms: int = 0):
        self.now_ms = start_ms
        self._queue: list[tuple[int, int, ManualTimer]] = []
        self._seq = itertools.count()

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ManualTimer:
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be non-negative, got {delay_ms}")
        timer = ManualTimer(self.now_ms + delay_ms, callback)
        heapq.heappush(self._queue, (timer.due_ms, next(self._seq), timer))
        return timer

    @property
    def pending_count(self) -> int:
        """Number of scheduled timers that have not fired or been cancelled."""
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)

    def advance(self, ms: int) -> int:
        """
        Move the clock forward, firing due timers in order.

        Callbacks may schedule further timers; those fire too if they fall
        due within the window.

        Returns:
            Number of callbacks that ran
        """
        if ms < 0:
            raise ValueError(f"Cannot move clock backwards by {ms}ms")

        target = self.now_ms + ms
        fired = 0

        while self._queue and self._queue[0][0] <= target:
            due_ms, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self.now_ms = due_ms
            timer.callback()
            fired += 1

        self.now_ms = target
        return fired
