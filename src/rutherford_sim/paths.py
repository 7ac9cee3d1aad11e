# MIT License (see LICENSE)
"""
Decimated trajectory recording.

The integrator reports which particles reached a sampling tick; the sampler
keeps only the points recorded since the last flush. Consumers append each
flush to the trajectories they already hold.
"""
from __future__ import annotations

import numpy as np


class PathSampler:
    """
    Pending path points per particle id.

    Usage:
        sampler = PathSampler()
        sampler.record(ids, display_points)
        deltas = sampler.flush()   # {id: [{"x": .., "y": ..}, ...]}
    """

    def __init__(self) -> None:
        self._pending: dict[int, list[dict[str, float]]] = {}

    def record(self, ids: np.ndarray, points: np.ndarray) -> None:
        """
        Append one display-space point per id.

        Args:
            ids: (K,) particle ids.
            points: (K, 2) display positions, row-aligned with ids.
        """
        for pid, (x, y) in zip(ids.tolist(), points.tolist()):
            self._pending.setdefault(pid, []).append({"x": x, "y": y})

    def flush(self) -> dict[int, list[dict[str, float]]]:
        """Return all pending points and start a fresh buffer."""
        out, self._pending = self._pending, {}
        return out

    @property
    def pending(self) -> int:
        """Number of buffered points across all particles."""
        return sum(len(pts) for pts in self._pending.values())
