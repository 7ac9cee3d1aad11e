# MIT License (see LICENSE)
"""
Core type definitions for the scattering simulation.

Defines the fundamental data structures:
- Viewport: the host's display field and its meters-per-pixel scale.
- SimulationSettings: user-facing run parameters.
- ParticleSet: structure-of-arrays state for every projectile in a run.
- ParticleState: a per-particle copy taken out of a ParticleSet.
- ScatterRecord: one (impact parameter, scattering angle) result.

The projectiles obey Newtonian mechanics under a central repulsive force:
  dx/dt = v
  dv/dt = F(x)/m,   F = k·q·Q·r̂ / |r|²
"""
from __future__ import annotations
from dataclasses import dataclass, field

import numpy as np

from .constants import (
    CANVAS_WIDTH,
    CANVAS_HEIGHT,
    SCALE,
    TARGET_Z_RANGE,
)
from .util import f64


@dataclass(frozen=True)
class Viewport:
    """
    Display field owned by the host.

    Attributes:
        width: Field width in pixels.
        height: Field height in pixels.
        scale: Meters per pixel.
    """
    width: float = CANVAS_WIDTH
    height: float = CANVAS_HEIGHT
    scale: float = SCALE


@dataclass(frozen=True)
class SimulationSettings:
    """
    Parameters for one run.

    Attributes:
        energy: Kinetic energy of each projectile in MeV (> 0).
        num_particles: Number of evenly spread "standard" particles (>= 0).
        target_z: Atomic number of the target nucleus (>= 1).
        focus_mode: Add 150 ± pairs at 1 fm spacing close to the axis.

    The engine assumes these are valid; consumers call validate() at the
    boundary.
    """
    energy: float = 5.0
    num_particles: int = 50
    target_z: int = 79
    focus_mode: bool = False

    def validate(self) -> "SimulationSettings":
        """Raise ValueError for out-of-range values, else return self."""
        if not self.energy > 0:
            raise ValueError(f"Energy must be positive, got {self.energy}")
        if self.num_particles < 0:
            raise ValueError(f"Particle count must be non-negative, got {self.num_particles}")
        lo, hi = TARGET_Z_RANGE
        if not lo <= self.target_z <= hi:
            raise ValueError(f"Target Z must be in [{lo}, {hi}], got {self.target_z}")
        return self


@dataclass
class ParticleState:
    """
    Snapshot of a single projectile.

    Attributes:
        id: Dense 0-based index within the run.
        position: [x, y] in meters, nucleus at the origin.
        velocity: [vx, vy] in m/s.
        impact_parameter: Unsigned launch offset from the axis, meters.
        step_count: Integration ticks survived.
        finished: True once escaped or absorbed.
        color: Display hint, stable for the run.
    """
    id: int
    position: np.ndarray
    velocity: np.ndarray
    impact_parameter: float
    step_count: int = 0
    finished: bool = False
    color: str = ""

    def __post_init__(self) -> None:
        self.position = f64(self.position)
        self.velocity = f64(self.velocity)


@dataclass
class ParticleSet:
    """
    All projectiles of a run, stored column-wise.

    Row i holds particle id i. The integrator works on whole columns so a
    tick is a handful of numpy operations instead of a Python loop.

    Attributes:
        positions: (N, 2) meters.
        velocities: (N, 2) m/s.
        impact_parameters: (N,) meters, fixed at construction.
        step_counts: (N,) survived ticks.
        finished: (N,) terminal flags, only ever set.
        colors: N display hints.
    """
    positions: np.ndarray = field(default_factory=lambda: np.zeros((0, 2), dtype=np.float64))
    velocities: np.ndarray = field(default_factory=lambda: np.zeros((0, 2), dtype=np.float64))
    impact_parameters: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.float64))
    step_counts: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.int64))
    finished: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=bool))
    colors: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.positions = f64(self.positions).reshape(-1, 2)
        self.velocities = f64(self.velocities).reshape(-1, 2)
        self.impact_parameters = f64(self.impact_parameters).reshape(-1)
        self.step_counts = np.array(self.step_counts, dtype=np.int64).reshape(-1)
        self.finished = np.array(self.finished, dtype=bool).reshape(-1)
        n = len(self.positions)
        sizes = {len(self.velocities), len(self.impact_parameters),
                 len(self.step_counts), len(self.finished), len(self.colors)}
        if sizes != {n}:
            raise ValueError(f"ParticleSet columns have mismatched lengths: {sorted(sizes | {n})}")

    def __len__(self) -> int:
        return len(self.positions)

    def __getitem__(self, i: int) -> ParticleState:
        return ParticleState(
            id=int(i),
            position=self.positions[i].copy(),
            velocity=self.velocities[i].copy(),
            impact_parameter=float(self.impact_parameters[i]),
            step_count=int(self.step_counts[i]),
            finished=bool(self.finished[i]),
            color=self.colors[i],
        )

    def __iter__(self):
        for i in range(len(self)):
            yield self[i]

    @property
    def ids(self) -> np.ndarray:
        return np.arange(len(self), dtype=np.int64)

    @property
    def all_finished(self) -> bool:
        """True when every particle is done. Vacuously true for N = 0."""
        return bool(self.finished.all())

    @property
    def active(self) -> np.ndarray:
        """Boolean mask of particles still being integrated."""
        return ~self.finished

    def copy(self) -> "ParticleSet":
        return ParticleSet(
            positions=self.positions.copy(),
            velocities=self.velocities.copy(),
            impact_parameters=self.impact_parameters.copy(),
            step_counts=self.step_counts.copy(),
            finished=self.finished.copy(),
            colors=list(self.colors),
        )


@dataclass(frozen=True)
class ScatterRecord:
    """
    Final outcome of one projectile.

    Attributes:
        impact_parameter_fm: Unsigned impact parameter in femtometers.
        angle_deg: Scattering angle in degrees, within [0, 180].
    """
    impact_parameter_fm: float
    angle_deg: float
