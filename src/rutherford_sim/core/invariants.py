# MIT License (see LICENSE)
"""
Conserved quantities of the projectile set.

With a fixed nucleus and a central conservative force, each particle keeps
its total energy T + U and its angular momentum about the origin. The
integrator only approximates these, so they are useful for checking step
size and spotting regressions.
"""
from __future__ import annotations

import numpy as np

from .forces import coulomb_potential
from ..constants import ALPHA_PARTICLE_MASS
from ..types import ParticleSet


def kinetic_energy(particles: ParticleSet) -> np.ndarray:
    """
    Kinetic energy of each particle.

    T = 0.5 * m * v²

    Returns:
        (N,) energies in joules.
    """
    v = particles.velocities
    return 0.5 * ALPHA_PARTICLE_MASS * (v[:, 0] ** 2 + v[:, 1] ** 2)


def total_energy(particles: ParticleSet, target_z: int) -> np.ndarray:
    """T + U per particle, joules."""
    return kinetic_energy(particles) + coulomb_potential(particles.positions, target_z)


def angular_momentum(particles: ParticleSet) -> np.ndarray:
    """
    z-component of angular momentum about the nucleus.

    L = m * (x * vy - y * vx)

    Returns:
        (N,) values in kg·m²/s.
    """
    x, v = particles.positions, particles.velocities
    return ALPHA_PARTICLE_MASS * (x[:, 0] * v[:, 1] - x[:, 1] * v[:, 0])
