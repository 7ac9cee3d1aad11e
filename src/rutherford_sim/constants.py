# MIT License (see LICENSE)
"""
Physical and display constants used throughout the simulation.

Physical values are SI. Display values are pixels of the host's viewing
field; SCALE converts between the two (meters per pixel).
"""
from __future__ import annotations

# Coulomb's constant, k = 1/(4πε₀), N·m²/C²
# Reference: https://physics.nist.gov/cgi-bin/cuu/Value?k
K_COULOMB: float = 8.9875517923e9

# Elementary charge, C (exact since the 2019 SI redefinition)
ELEMENTARY_CHARGE: float = 1.602176634e-19

# Alpha particle (He-4 nucleus) rest mass, kg
ALPHA_PARTICLE_MASS: float = 6.6446573357e-27

# Alpha particle charge in units of e
ALPHA_CHARGE_NUMBER: int = 2

JOULES_PER_MEV: float = 1.60218e-13
FEMTOMETER: float = 1e-15

# Nuclear radius R = R0 · A^(1/3); the display uses Z as a stand-in for A.
NUCLEUS_RADIUS_BASE: float = 1.25e-15

# -----------------------------------------------------------------------------
# Display geometry
# -----------------------------------------------------------------------------
CANVAS_WIDTH: int = 800
CANVAS_HEIGHT: int = 600
SCALE: float = 1e-14  # meters per pixel

# Particles this far (pixels) outside the visible field count as escaped.
ESCAPE_MARGIN: float = 50.0

# -----------------------------------------------------------------------------
# Integration
# -----------------------------------------------------------------------------
# Fixed step, tuned so a 5 MeV alpha moves ~0.15 px per tick.
TIME_STEP: float = 1e-22

# Closer than this to the nucleus and the force is treated as singular.
NEAR_CONTACT: float = 1e-15

# A path point is recorded every PATH_DECIMATION survived ticks.
PATH_DECIMATION: int = 5

# Snapshot emission rate of a running controller.
EMIT_RATE_HZ: float = 60.0

# -----------------------------------------------------------------------------
# Particle construction
# -----------------------------------------------------------------------------
# Focus mode adds ±i·FOCUS_SPACING for i = 1..FOCUS_PAIRS.
FOCUS_PAIRS: int = 150
FOCUS_SPACING: float = 1e-15  # meters

# Standard particles span this fraction of the half-height.
STANDARD_SPREAD: float = 0.8

# Impact offsets (pixels) are compared on a grid of this size.
DEDUP_QUANTUM: float = 1e-6

# -----------------------------------------------------------------------------
# Recommended UI ranges (validated by consumers, not by the engine)
# -----------------------------------------------------------------------------
ENERGY_RANGE_MEV: tuple[float, float] = (1.0, 15.0)
NUM_PARTICLES_RANGE: tuple[int, int] = (50, 300)
TARGET_Z_RANGE: tuple[int, int] = (1, 118)
