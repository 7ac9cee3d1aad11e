# MIT License (see LICENSE)
"""
Scattering-angle analytics.

Once every particle has finished, the final velocity direction of each one
gives its scattering angle relative to the +x launch direction:

    θ = |atan2(vy, vx)|   (degrees, always within [0, 180])

The analytic Rutherford result for a point nucleus is provided alongside so
simulated runs can be checked against theory:

    d = k·q·Q / E                 (head-on distance of closest approach)
    θ = 2 · atan(d / (2b))

Reference:
    https://en.wikipedia.org/wiki/Rutherford_scattering_experiments
"""
from __future__ import annotations
import math
from typing import Iterable

import numpy as np

from .constants import FEMTOMETER, JOULES_PER_MEV
from .core.forces import coupling
from .types import ParticleSet, ScatterRecord


def scattering_angles(velocities: np.ndarray) -> np.ndarray:
    """Unsigned angle of each velocity from +x, degrees."""
    return np.abs(np.degrees(np.arctan2(velocities[:, 1], velocities[:, 0])))


def scatter_records(particles: ParticleSet) -> list[ScatterRecord]:
    """One ScatterRecord per particle, in id order."""
    angles = scattering_angles(particles.velocities)
    b_fm = particles.impact_parameters / FEMTOMETER
    return [
        ScatterRecord(impact_parameter_fm=float(b), angle_deg=float(a))
        for b, a in zip(b_fm, angles)
    ]


def sorted_by_impact(records: Iterable[ScatterRecord]) -> list[ScatterRecord]:
    """Records ordered by impact parameter, for charting."""
    return sorted(records, key=lambda r: abs(r.impact_parameter_fm))


def closest_approach(energy_mev: float, target_z: int) -> float:
    """Head-on distance of closest approach in meters."""
    return coupling(target_z) / (energy_mev * JOULES_PER_MEV)


def rutherford_angle(impact_parameter: float, energy_mev: float, target_z: int) -> float:
    """
    Analytic scattering angle in degrees for a point nucleus.

    Args:
        impact_parameter: Unsigned impact parameter in meters. Zero gives 180.
        energy_mev: Projectile kinetic energy at infinity.
        target_z: Atomic number of the nucleus.
    """
    d = closest_approach(energy_mev, target_z)
    if impact_parameter == 0:
        return 180.0
    return math.degrees(2 * math.atan(d / (2 * impact_parameter)))
