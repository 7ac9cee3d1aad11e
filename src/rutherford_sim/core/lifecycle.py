# MIT License (see LICENSE)
"""
Termination rules for projectiles.

A particle is finished when it leaves the viewing field by more than
ESCAPE_MARGIN pixels on either axis, or when it comes within NEAR_CONTACT
of the nucleus where the inverse-square force would blow up. Finishing is
terminal for the run: nothing in this package ever clears the flag.
"""
from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

from ..constants import ESCAPE_MARGIN, NEAR_CONTACT
from ..util import to_centered

if TYPE_CHECKING:
    from ..types import ParticleSet, Viewport


def escape_bounds(viewport: "Viewport") -> tuple[float, float]:
    """Half-extents (pixels, centered) beyond which a particle has escaped."""
    return viewport.width / 2 + ESCAPE_MARGIN, viewport.height / 2 + ESCAPE_MARGIN


def escaped(positions: np.ndarray, viewport: "Viewport") -> np.ndarray:
    """
    Mask of particles outside the escape bounds.

    Args:
        positions: (N, 2) physical positions in meters.
        viewport: Display field used for the bounds.
    """
    bx, by = escape_bounds(viewport)
    px = to_centered(positions, viewport)
    return (np.abs(px[:, 0]) > bx) | (np.abs(px[:, 1]) > by)


def absorbed(distances: np.ndarray, threshold: float = NEAR_CONTACT) -> np.ndarray:
    """Mask of particles closer to the nucleus than the near-contact radius."""
    return distances < threshold


def finish(particles: "ParticleSet", ids: np.ndarray) -> None:
    """Mark the given particles finished. Already-finished ids are unaffected."""
    particles.finished[ids] = True
