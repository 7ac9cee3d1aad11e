# MIT License (see LICENSE)
"""
Threaded host for a SimulationController.

The consumer talks to the engine only through two queues:
    inbox   command dicts, applied strictly between task runs
    outbox  event dicts, in the order the controller produced them

Every event payload is built fresh from engine state, so the consumer
never holds a reference into the particle arrays.

Example:
    with EngineWorker() as worker:
        worker.reset(SimulationSettings(energy=5, num_particles=50))
        worker.start()
        events = worker.wait_for("finished", timeout=60)
"""
from __future__ import annotations
import logging
import queue
import threading
import time
from typing import Any, Callable

from .constants import EMIT_RATE_HZ, TIME_STEP
from .controller import SimulationController
from .io.json_io import start_command, pause_command, reset_command
from .profiler import Profiler
from .types import SimulationSettings, Viewport

logger = logging.getLogger(__name__)

_STOP = object()


class EngineWorker:
    """
    Runs one controller on a background thread.

    Args:
        viewport: Display field for the engine.
        dt: Integration timestep in seconds.
        emit_interval: Seconds between update events while running.
        profiler: Optional Profiler (read it only after close()).
        clock: Monotonic time source.
    """

    def __init__(
        self,
        viewport: Viewport | None = None,
        dt: float = TIME_STEP,
        emit_interval: float = 1.0 / EMIT_RATE_HZ,
        profiler: Profiler | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._inbox: queue.Queue = queue.Queue()
        self._outbox: queue.Queue = queue.Queue()
        self._clock = clock
        self._error: BaseException | None = None
        self._closed = False
        self.controller = SimulationController(
            emit=self._outbox.put,
            viewport=viewport,
            dt=dt,
            emit_interval=emit_interval,
            profiler=profiler,
            clock=clock,
        )
        self._thread = threading.Thread(target=self._run, name="rutherford-engine", daemon=True)
        self._thread.start()

    # -------------------------------------------------------------------------
    # Consumer side
    # -------------------------------------------------------------------------

    def send(self, msg: dict[str, Any]) -> None:
        if self._closed:
            raise RuntimeError("Worker is closed")
        self._inbox.put(msg)

    def start(self) -> None:
        self.send(start_command())

    def pause(self) -> None:
        self.send(pause_command())

    def reset(self, settings: SimulationSettings) -> None:
        self.send(reset_command(settings))

    def get_event(self, timeout: float | None = None) -> dict[str, Any]:
        """
        Next event from the engine.

        Raises:
            queue.Empty: If nothing arrives within `timeout`.
        """
        return self._outbox.get(timeout=timeout)

    def events(self) -> list[dict[str, Any]]:
        """All events available right now, without waiting."""
        out = []
        while True:
            try:
                out.append(self._outbox.get_nowait())
            except queue.Empty:
                return out

    def wait_for(self, kind: str, timeout: float) -> list[dict[str, Any]]:
        """
        Collect events up to and including the first one of type `kind`.

        Raises:
            TimeoutError: If no such event arrives in time.
            RuntimeError: If the worker thread died.
        """
        deadline = time.monotonic() + timeout
        seen = []
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise TimeoutError(f"No '{kind}' event within {timeout}s")
            if self._error is not None:
                raise RuntimeError("Engine worker failed") from self._error
            try:
                event = self._outbox.get(timeout=min(remaining, 0.1))
            except queue.Empty:
                continue
            seen.append(event)
            if event.get("type") == kind:
                return seen

    def close(self, timeout: float = 5.0) -> None:
        """
        Stop the thread and wait for it.

        Raises:
            RuntimeError: Re-raised from any exception the thread hit.
        """
        if not self._closed:
            self._closed = True
            self._inbox.put(_STOP)
        self._thread.join(timeout)
        if self._error is not None:
            raise RuntimeError("Engine worker failed") from self._error

    def __enter__(self) -> "EngineWorker":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Engine side
    # -------------------------------------------------------------------------

    def _next_command(self) -> Any:
        """Block while idle, poll while tasks are pending."""
        wait = self.controller.scheduler.time_until_next(self._clock())
        try:
            if wait is None:
                return self._inbox.get()
            if wait > 0:
                return self._inbox.get(timeout=wait)
            return self._inbox.get_nowait()
        except queue.Empty:
            return None

    def _run(self) -> None:
        try:
            while True:
                msg = self._next_command()
                if msg is _STOP:
                    return
                if msg is not None:
                    self.controller.handle(msg)
                    continue
                self.controller.run_pending()
        except Exception as exc:
            logger.exception("Engine worker stopped")
            self._error = exc
