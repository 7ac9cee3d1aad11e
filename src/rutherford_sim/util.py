# MIT License (see LICENSE)
"""
Utility functions for vector math and coordinate conversion.

Vectors are numpy float64 arrays of shape (2,), or (N, 2) when a whole
particle set is processed at once. Physical positions are meters with the
nucleus at the origin; display positions are pixels with the origin at the
top-left corner of the viewing field.
"""
from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from .types import Viewport


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Lets callers pass tuples or lists for positions and velocities.
    """
    return np.array(x, dtype=np.float64)


def row_norms(vs: np.ndarray) -> np.ndarray:
    """Magnitudes of each row of an (N, 2) array."""
    return np.sqrt(vs[:, 0] ** 2 + vs[:, 1] ** 2)


def to_centered(positions: np.ndarray, viewport: "Viewport") -> np.ndarray:
    """
    Physical meters to display pixels measured from the field center.

    Used for boundary checks, where the field spans ±width/2 and ±height/2.
    """
    return positions / viewport.scale


def to_display(positions: np.ndarray, viewport: "Viewport") -> np.ndarray:
    """
    Physical meters to display pixels (top-left origin).

        x_px = x / scale + width / 2
        y_px = y / scale + height / 2
    """
    offset = np.array([viewport.width / 2, viewport.height / 2], dtype=np.float64)
    return positions / viewport.scale + offset


def point(v) -> dict[str, float]:
    """A 2-vector as the {x, y} mapping used on the wire."""
    return {"x": float(v[0]), "y": float(v[1])}
