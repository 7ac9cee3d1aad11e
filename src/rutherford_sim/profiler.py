# MIT License (see LICENSE)
"""
Lightweight timing of engine phases.

The engine records the integration pass and path sampling, the controller
records snapshot emission. Nothing is timed unless a Profiler is passed in.

Example:
    profiler = Profiler()
    controller = SimulationController(emit=events.append, profiler=profiler)
    ...
    print(profiler.stats.summary()["integrate"])
"""
from __future__ import annotations
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class ProfileStats:
    """Raw timing samples (seconds) keyed by section name."""
    samples: dict[str, list[float]] = field(default_factory=dict)

    def add(self, name: str, dt: float) -> None:
        self.samples.setdefault(name, []).append(dt)

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Per-section statistics.

        Returns:
            Dict mapping section name to:
            - 'n': sample count
            - 'mean_ms': average time in milliseconds
            - 'max_ms': worst time in milliseconds
            - 'total_ms': accumulated time in milliseconds
        """
        out = {}
        for name, times in self.samples.items():
            total = sum(times)
            out[name] = {
                "n": len(times),
                "mean_ms": 1e3 * total / len(times),
                "max_ms": 1e3 * max(times),
                "total_ms": 1e3 * total,
            }
        return out


class Profiler:
    """Context-manager based section timer."""

    def __init__(self) -> None:
        self.stats = ProfileStats()

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.stats.add(name, time.perf_counter() - t0)


@contextmanager
def maybe_section(profiler: Profiler | None, name: str) -> Iterator[None]:
    """Time the block with `profiler` if one is set, otherwise do nothing."""
    if profiler is None:
        yield
        return
    with profiler.section(name):
        yield
