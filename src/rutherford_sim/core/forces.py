# MIT License (see LICENSE)
"""
Coulomb force between the projectiles and the fixed target nucleus.

The nucleus sits at the origin with charge Z·e; each alpha particle carries
2e. Both are positive so the force is pure repulsion along r̂:

    F = k · (2e) · (Z·e) / |r|²

Particles do not interact with one another, so the whole set is handled
with column operations and the cost is O(N) per tick.
"""
from __future__ import annotations

import numpy as np

from ..constants import (
    K_COULOMB,
    ELEMENTARY_CHARGE,
    ALPHA_PARTICLE_MASS,
    ALPHA_CHARGE_NUMBER,
)
from ..util import row_norms


def coupling(target_z: int) -> float:
    """k·q·Q for an alpha particle and a nucleus of atomic number Z, in J·m."""
    return K_COULOMB * (ALPHA_CHARGE_NUMBER * ELEMENTARY_CHARGE) * (target_z * ELEMENTARY_CHARGE)


def coulomb_force(
    positions: np.ndarray,
    target_z: int,
    r: np.ndarray | None = None,
) -> np.ndarray:
    """
    Force on each particle from the nucleus.

    Args:
        positions: (N, 2) positions in meters relative to the nucleus.
        target_z: Atomic number of the nucleus.
        r: Optional precomputed distances |positions|, shape (N,).

    Returns:
        (N, 2) forces in newtons.

    Note:
        No softening is applied; callers must exclude particles inside the
        near-contact radius before calling.
    """
    if r is None:
        r = row_norms(positions)
    magnitude = coupling(target_z) / (r ** 2)
    return magnitude[:, None] * (positions / r[:, None])


def coulomb_acceleration(
    positions: np.ndarray,
    target_z: int,
    r: np.ndarray | None = None,
) -> np.ndarray:
    """Acceleration a = F / m_alpha for each particle, (N, 2) in m/s²."""
    return coulomb_force(positions, target_z, r) / ALPHA_PARTICLE_MASS


def coulomb_potential(positions: np.ndarray, target_z: int) -> np.ndarray:
    """Potential energy U = k·q·Q / |r| of each particle, joules."""
    return coupling(target_z) / row_norms(positions)
