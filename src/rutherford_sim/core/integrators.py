# MIT License (see LICENSE)
"""
Fixed-step integrator for the projectile set.

One tick advances every unfinished particle by dt using semi-implicit
(symplectic) Euler:

    v_{n+1} = v_n + a(x_n) · dt
    x_{n+1} = x_n + v_{n+1} · dt

The position update uses the already-updated velocity. Swapping in the old
velocity (explicit Euler) changes every trajectory, so the order is fixed.

Per particle and tick the order of work is:
    1. skip if finished
    2. finish if escaped from the viewing field
    3. finish if within the near-contact radius
    4. Coulomb acceleration, velocity update, position update
    5. step_count += 1

Reference:
    https://en.wikipedia.org/wiki/Semi-implicit_Euler_method
"""
from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

from .forces import coulomb_acceleration
from . import lifecycle
from ..constants import PATH_DECIMATION
from ..util import row_norms

if TYPE_CHECKING:
    from ..types import ParticleSet, Viewport


_NO_IDS = np.zeros(0, dtype=np.int64)


def semi_implicit_euler(
    positions: np.ndarray,
    velocities: np.ndarray,
    accelerations: np.ndarray,
    dt: float,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Advance positions and velocities by one step.

    Returns:
        (new_positions, new_velocities). Inputs are not modified.
    """
    new_velocities = velocities + accelerations * dt
    new_positions = positions + new_velocities * dt
    return new_positions, new_velocities


def advance(
    particles: "ParticleSet",
    dt: float,
    target_z: int,
    viewport: "Viewport",
) -> np.ndarray:
    """
    Run one tick over the set in place.

    Args:
        particles: Particle set to update.
        dt: Timestep in seconds.
        target_z: Atomic number of the nucleus.
        viewport: Display field for the escape test.

    Returns:
        Ids of particles whose survived-tick count just reached a multiple
        of PATH_DECIMATION; their new positions should be sampled.
    """
    idx = np.flatnonzero(particles.active)
    if idx.size == 0:
        return _NO_IDS

    pos = particles.positions[idx]
    r = row_norms(pos)
    escaped = lifecycle.escaped(pos, viewport)
    done = escaped | lifecycle.absorbed(r)
    if done.any():
        lifecycle.finish(particles, idx[done])

    keep = ~done
    live = idx[keep]
    if live.size == 0:
        return _NO_IDS

    acc = coulomb_acceleration(pos[keep], target_z, r[keep])
    new_pos, new_vel = semi_implicit_euler(pos[keep], particles.velocities[live], acc, dt)
    particles.positions[live] = new_pos
    particles.velocities[live] = new_vel
    particles.step_counts[live] += 1

    return live[particles.step_counts[live] % PATH_DECIMATION == 0]


def step(
    particles: "ParticleSet",
    dt: float,
    target_z: int,
    viewport: "Viewport",
) -> tuple["ParticleSet", np.ndarray]:
    """
    Pure version of advance(): returns (next_state, sampled_ids).

    The input set is left untouched, which makes this convenient for
    property checks that compare successive states.
    """
    nxt = particles.copy()
    sampled = advance(nxt, dt, target_z, viewport)
    return nxt, sampled
