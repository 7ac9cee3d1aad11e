# MIT License (see LICENSE)
"""
Run-state machine and message endpoint of the engine.

States:
    IDLE     particle set built by the last reset, nothing stepping
    RUNNING  integration and emission tasks active
    PAUSED   stepping halted, state kept; also where a run lands when every
             particle finishes (distinguished by `completed`)

Transitions:
    start            IDLE | PAUSED -> RUNNING
    pause            RUNNING -> PAUSED
    reset(settings)  any -> IDLE, new particle set, emits resetComplete
    completion       RUNNING -> PAUSED, emits a final update then finished

The controller never blocks and owns no thread. Whoever hosts it calls
handle() for commands and run_pending() for the periodic tasks, always
from the same thread, so a command can only ever land between ticks.
See worker.EngineWorker for the threaded host.
"""
from __future__ import annotations
import logging
import time
from enum import Enum
from typing import Any, Callable

from .constants import EMIT_RATE_HZ, TIME_STEP
from .engine import Engine
from .io.json_io import (
    START,
    PAUSE,
    RESET,
    settings_from_json,
    update_event,
    finished_event,
    reset_complete_event,
)
from .profiler import Profiler, maybe_section
from .scheduler import Scheduler
from .types import ScatterRecord, SimulationSettings, Viewport

logger = logging.getLogger(__name__)

INTEGRATE_TASK = "integrate"
EMIT_TASK = "emit"


class SimulationStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


class SimulationController:
    """
    Owns the Engine for the current run and drives it.

    Args:
        emit: Called with each outgoing event dict, in order.
        viewport: Display field handed to every Engine.
        dt: Integration timestep in seconds.
        emit_interval: Seconds between update events while running.
        profiler: Optional Profiler shared with the Engine.
        clock: Monotonic time source for the scheduler.
    """

    def __init__(
        self,
        emit: Callable[[dict[str, Any]], None],
        viewport: Viewport | None = None,
        dt: float = TIME_STEP,
        emit_interval: float = 1.0 / EMIT_RATE_HZ,
        profiler: Profiler | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._emit = emit
        self.viewport = viewport or Viewport()
        self.dt = dt
        self.profiler = profiler
        self._clock = clock

        self.engine: Engine | None = None
        self.status = SimulationStatus.IDLE
        self.completed = False

        self.scheduler = Scheduler()
        self.scheduler.add(INTEGRATE_TASK, 0.0, self.integration_tick)
        self.scheduler.add(EMIT_TASK, emit_interval, self.emission_tick)

    @property
    def running(self) -> bool:
        return self.status is SimulationStatus.RUNNING

    @property
    def settings(self) -> SimulationSettings | None:
        return self.engine.settings if self.engine else None

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def handle(self, msg: dict[str, Any]) -> None:
        """
        Apply one command message.

        Raises:
            ValueError: Unknown command type or invalid reset settings.
        """
        kind = msg.get("type")
        if kind == START:
            self.start()
        elif kind == PAUSE:
            self.pause()
        elif kind == RESET:
            payload = msg.get("payload") or {}
            if "settings" not in payload:
                raise ValueError("reset command requires a 'settings' payload")
            settings = payload["settings"]
            if not isinstance(settings, SimulationSettings):
                settings = settings_from_json(settings)
            self.reset(settings)
        else:
            raise ValueError(f"Unknown command type: {kind!r}")

    def start(self) -> None:
        if self.engine is None:
            logger.debug("start ignored: no settings yet")
            return
        if self.running:
            return
        if self.completed:
            logger.debug("start ignored: run already complete, reset first")
            return

        self.status = SimulationStatus.RUNNING
        if self.engine.finished:
            # Nothing to integrate; an empty run ends as soon as it starts.
            self._complete()
            return
        self.scheduler.start_all(self._clock())
        logger.debug("Running (%d particles)", len(self.engine.particles))

    def pause(self) -> None:
        if not self.running:
            return
        self.scheduler.cancel_all()
        self.status = SimulationStatus.PAUSED
        logger.debug("Paused after %d ticks", self.engine.ticks)

    def reset(self, settings: SimulationSettings) -> None:
        """Discard the current run and build a new one from `settings`."""
        self.scheduler.cancel_all()
        self.engine = Engine(settings, viewport=self.viewport, dt=self.dt, profiler=self.profiler)
        self.status = SimulationStatus.IDLE
        self.completed = False
        logger.info(
            "Reset: %d particles, E=%g MeV, Z=%d, focus=%s",
            len(self.engine.particles), settings.energy, settings.target_z, settings.focus_mode,
        )
        self._emit(reset_complete_event(self.engine.particles, self.engine.initial_paths))

    # -------------------------------------------------------------------------
    # Periodic tasks
    # -------------------------------------------------------------------------

    def integration_tick(self) -> None:
        """One full pass over the particle set; completes the run if all are done."""
        if not self.running:
            return
        if self.engine.tick():
            self._complete()

    def emission_tick(self) -> None:
        """Send a position snapshot plus the path points gathered since the last one."""
        if not self.running:
            return
        self._send_update()

    def run_pending(self, now: float | None = None) -> int:
        """Run whichever periodic tasks are due. Returns the number run."""
        return self.scheduler.run_pending(self._clock() if now is None else now)

    def run_to_completion(self, max_ticks: int = 1_000_000, emit_every: int = 0) -> list[ScatterRecord]:
        """
        Drive the current run synchronously until every particle finishes.

        Args:
            max_ticks: Upper bound on integration ticks.
            emit_every: Send an update every this many ticks (0 disables
                intermediate updates; the final one is always sent).

        Returns:
            The scatter records of the finished run.

        Raises:
            RuntimeError: If no run exists or the bound is exceeded.
        """
        if self.engine is None:
            raise RuntimeError("No particle set; call reset() first")
        self.start()
        ticks = 0
        while self.running:
            if ticks >= max_ticks:
                self.pause()
                raise RuntimeError(f"Run did not finish within {max_ticks} ticks")
            self.integration_tick()
            ticks += 1
            if emit_every and ticks % emit_every == 0:
                self.emission_tick()
        return self.engine.scatter()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _send_update(self) -> None:
        with maybe_section(self.profiler, "emit"):
            event = update_event(self.engine.snapshot(), self.engine.flush_paths())
        self._emit(event)

    def _complete(self) -> None:
        self.scheduler.cancel_all()
        self.status = SimulationStatus.PAUSED
        self.completed = True
        self._send_update()
        records = self.engine.scatter()
        logger.info("Run finished after %d ticks (%d particles)", self.engine.ticks, len(records))
        self._emit(finished_event(records))
