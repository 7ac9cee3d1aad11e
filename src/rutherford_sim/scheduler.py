# MIT License (see LICENSE)
"""
Named periodic tasks driven by an external clock.

The controller runs two tasks while a simulation is running: an
unthrottled integration task (interval 0, due on every pass) and a 60 Hz
emission task. Each task runs to completion; nothing is interrupted
mid-callback. Starting and cancelling happen only between task runs, which
is what keeps commands atomic with respect to ticks.

The clock is passed in by the caller, so tests can drive time by hand:

    sched = Scheduler()
    sched.add("emit", 1 / 60, send_snapshot)
    sched.start_all(now=0.0)
    sched.run_pending(now=0.02)   # runs "emit" once
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable


@dataclass
class PeriodicTask:
    """
    A callback due every `interval` seconds while active.

    Attributes:
        name: Identifier used for lookup and logging.
        interval: Seconds between runs; 0 means every pass.
        callback: Work done on each run.
        next_due: Clock value at which the task is next due.
        active: Cleared by cancel(); a cancelled task never runs.
    """
    name: str
    interval: float
    callback: Callable[[], None]
    next_due: float = 0.0
    active: bool = False

    def start(self, now: float) -> None:
        """Activate; the first run is one interval from now."""
        if self.active:
            return
        self.active = True
        self.next_due = now + self.interval

    def cancel(self) -> None:
        self.active = False

    def due(self, now: float) -> bool:
        return self.active and now >= self.next_due

    def run(self, now: float) -> None:
        self.next_due = now + self.interval
        self.callback()


class Scheduler:
    """Ordered collection of PeriodicTasks."""

    def __init__(self) -> None:
        self._tasks: dict[str, PeriodicTask] = {}

    def add(self, name: str, interval: float, callback: Callable[[], None]) -> PeriodicTask:
        if name in self._tasks:
            raise ValueError(f"Task '{name}' already registered")
        task = PeriodicTask(name=name, interval=interval, callback=callback)
        self._tasks[name] = task
        return task

    def __getitem__(self, name: str) -> PeriodicTask:
        return self._tasks[name]

    @property
    def any_active(self) -> bool:
        return any(t.active for t in self._tasks.values())

    def start_all(self, now: float) -> None:
        for task in self._tasks.values():
            task.start(now)

    def cancel_all(self) -> None:
        for task in self._tasks.values():
            task.cancel()

    def run_pending(self, now: float) -> int:
        """
        Run every task that is due, in registration order.

        A callback may cancel tasks (including later ones in this pass);
        cancelled tasks are skipped.

        Returns:
            Number of task runs performed.
        """
        ran = 0
        for task in list(self._tasks.values()):
            if task.due(now):
                task.run(now)
                ran += 1
        return ran

    def time_until_next(self, now: float) -> float | None:
        """Seconds until the earliest active task is due, or None if idle."""
        waits = [max(0.0, t.next_due - now) for t in self._tasks.values() if t.active]
        return min(waits) if waits else None
