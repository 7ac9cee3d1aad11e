# MIT License (see LICENSE)
"""
The simulation world for one run.

An Engine is built from SimulationSettings and owns the particle set and
the pending path buffers. Its tick() performs one full pass:
    1. Lifecycle checks and integration (core.integrators.advance).
    2. Path sampling of particles that hit the decimation cadence.

A new Engine is created on every reset; no particle identity carries over.
"""
from __future__ import annotations
from dataclasses import dataclass, field

from .constants import TIME_STEP
from .core.integrators import advance
from .factory import build_particles
from .paths import PathSampler
from .profiler import Profiler, maybe_section
from .types import ParticleSet, SimulationSettings, Viewport, ScatterRecord
from .analysis import scatter_records
from .util import to_display, point


@dataclass
class Engine:
    """
    Particle state plus the per-tick pass.

    Attributes:
        settings: Run parameters.
        viewport: Display field (escape bounds and display conversion).
        dt: Integration timestep in seconds.
        profiler: Optional Profiler for timing statistics.
    """
    settings: SimulationSettings
    viewport: Viewport = field(default_factory=Viewport)
    dt: float = TIME_STEP
    profiler: Profiler | None = None

    # Runtime state
    ticks: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.particles, self.initial_paths = build_particles(self.settings, self.viewport)
        self.sampler = PathSampler()

    @property
    def finished(self) -> bool:
        """True when every particle is done (immediately so for an empty set)."""
        return self.particles.all_finished

    def tick(self) -> bool:
        """
        Advance the run by one timestep.

        Returns:
            True if every particle is finished after this tick.
        """
        with maybe_section(self.profiler, "integrate"):
            sampled = advance(self.particles, self.dt, self.settings.target_z, self.viewport)
        if sampled.size:
            with maybe_section(self.profiler, "sample"):
                self.sampler.record(sampled, to_display(self.particles.positions[sampled], self.viewport))
        self.ticks += 1
        return self.finished

    def snapshot(self) -> list[dict]:
        """Position and color of every particle, physical meters."""
        return [
            {"id": i, "position": point(pos), "color": color}
            for i, (pos, color) in enumerate(zip(self.particles.positions, self.particles.colors))
        ]

    def flush_paths(self) -> dict[int, list[dict[str, float]]]:
        return self.sampler.flush()

    def scatter(self) -> list[ScatterRecord]:
        return scatter_records(self.particles)

    def state(self) -> ParticleSet:
        """A copy of the particle set, safe to hand to other threads."""
        return self.particles.copy()
