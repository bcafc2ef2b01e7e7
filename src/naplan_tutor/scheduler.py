"""Cancellable delayed callbacks driven by an explicit clock.

Nothing runs on its own: the owner calls ``run_due()`` (or ``advance()`` on a
manual clock) from its event loop, so all callbacks fire on the caller's
thread in deadline order.
"""
import itertools
import time
from typing import Callable


class ManualClock:
    """A clock that only moves when told to."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScheduledTask:
    def __init__(self, deadline: float, callback: Callable[[], None], seq: int):
        self.deadline = deadline
        self.callback = callback
        self.seq = seq
        self.cancelled = False
        self.fired = False

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self) -> None:
        self.cancelled = True


class Scheduler:
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._tasks: list[ScheduledTask] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask(self.clock() + delay, callback, next(self._seq))
        self._tasks.append(task)
        return task

    def pending(self) -> list[ScheduledTask]:
        return [t for t in self._tasks if t.active]

    def run_due(self) -> int:
        """Fire every task whose deadline has passed. Returns how many fired."""
        fired = 0
        while True:
            now = self.clock()
            due = [t for t in self._tasks if t.active and t.deadline <= now]
            if not due:
                break
            task = min(due, key=lambda t: (t.deadline, t.seq))
            task.fired = True
            task.callback()
            fired += 1
        self._tasks = [t for t in self._tasks if t.active]
        return fired

    def advance(self, seconds: float) -> int:
        """Move a ManualClock forward one second at a time, firing due tasks."""
        fired = 0
        remaining = seconds
        while remaining > 0:
            step = min(1.0, remaining)
            self.clock.advance(step)
            remaining -= step
            fired += self.run_due()
        return fired
