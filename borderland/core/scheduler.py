"""Cancellable timed callbacks.

The session controller never sleeps or spawns threads. It asks a scheduler to
run callbacks later (once, or repeatedly) and cancels them when an attempt
ends. ``ManualScheduler`` runs on a virtual clock that only moves when
``advance`` is called; the Qt front end supplies a QTimer-backed scheduler.
"""

from __future__ import annotations

import heapq
import itertools
from typing import Callable, List, Optional, Protocol, Tuple

Callback = Callable[[], None]


class TaskHandle(Protocol):
    @property
    def active(self) -> bool: ...

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callback) -> TaskHandle: ...

    def call_every(self, interval: float, callback: Callback) -> TaskHandle: ...


class ManualTask:
    """Task registered with a ManualScheduler."""

    def __init__(self, callback: Callback, due: float, interval: Optional[float]) -> None:
        self.callback = callback
        self.due = due
        self.interval = interval
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        self._active = False


class ManualScheduler:
    """Virtual-clock scheduler. Time moves only through ``advance``."""

    def __init__(self) -> None:
        self._now = 0.0
        self._queue: List[Tuple[float, int, ManualTask]] = []
        self._counter = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        """Number of live tasks still waiting to fire."""
        return sum(1 for _, _, task in self._queue if task.active)

    def call_later(self, delay: float, callback: Callback) -> ManualTask:
        return self._push(ManualTask(callback, self._now + delay, None))

    def call_every(self, interval: float, callback: Callback) -> ManualTask:
        if interval <= 0:
            raise ValueError("interval must be positive")
        return self._push(ManualTask(callback, self._now + interval, interval))

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing due tasks in time order."""
        if seconds < 0:
            raise ValueError("cannot move the clock backwards")
        target = self._now + seconds
        while self._queue and self._queue[0][0] <= target:
            due, _, task = heapq.heappop(self._queue)
            if not task.active:
                continue
            self._now = due
            if task.interval is None:
                task.cancel()
            else:
                task.due = due + task.interval
                self._push(task)
            task.callback()
        self._now = target

    def _push(self, task: ManualTask) -> ManualTask:
        heapq.heappush(self._queue, (task.due, next(self._counter), task))
        return task
