# MIT License (see LICENSE)
"""
Core physics of the scattering engine.

This subpackage provides:
    - Force: Coulomb repulsion from the fixed nucleus.
    - Integration: semi-implicit Euler tick over the particle set.
    - Lifecycle: escape and near-contact termination rules.
    - Invariants: energy and angular momentum for diagnostics.

Typical usage:
    from rutherford_sim.core import step

    next_set, sampled = step(particles, dt=1e-22, target_z=79, viewport=Viewport())
"""
from .forces import coulomb_force, coulomb_acceleration, coulomb_potential
from .integrators import semi_implicit_euler, advance, step
from .lifecycle import escaped, absorbed, finish
from .invariants import kinetic_energy, total_energy, angular_momentum

__all__ = [
    # Forces
    "coulomb_force",
    "coulomb_acceleration",
    "coulomb_potential",
    # Integration
    "semi_implicit_euler",
    "advance",
    "step",
    # Lifecycle
    "escaped",
    "absorbed",
    "finish",
    # Invariants
    "kinetic_energy",
    "total_energy",
    "angular_momentum",
]
