# MIT License (see LICENSE)
"""
Consumer-side adapters for the engine's event stream.

The engine has no drawing dependency. A consumer feeds each event it
receives to a RendererAdapter, which splits it into reset/update/finished
callbacks. Path points arrive as deltas, so adapters that draw trajectories
must append them to what they already hold and start over on reset.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Iterable, TextIO
import sys

from ..constants import NUCLEUS_RADIUS_BASE
from ..io.json_io import UPDATE, FINISHED, RESET_COMPLETE
from ..types import Viewport

Point = dict[str, float]


def nucleus_display_radius(target_z: int, viewport: Viewport | None = None, minimum: float = 5.0) -> float:
    """
    Radius in pixels at which to draw the nucleus.

    Uses R = R0 · Z^(1/3), which is far below one pixel at the default
    scale, so the result is clamped to `minimum`.
    """
    viewport = viewport or Viewport()
    radius = NUCLEUS_RADIUS_BASE * target_z ** (1 / 3)
    return max(minimum, radius / viewport.scale)


def to_canvas(position: Point, viewport: Viewport) -> Point:
    """Physical position {x, y} in meters to display pixels."""
    return {
        "x": position["x"] / viewport.scale + viewport.width / 2,
        "y": position["y"] / viewport.scale + viewport.height / 2,
    }


class RendererAdapter(ABC):
    """
    Base class for event consumers.

    Usage:
        renderer = MyRenderer()
        for event in worker.events():
            renderer.handle_event(event)
    """

    @abstractmethod
    def on_reset(self, particles: list[dict], initial_paths: dict[int, list[Point]]) -> None:
        """A new particle set replaced the old one; drop all drawn paths."""
        ...

    @abstractmethod
    def on_update(self, particles: list[dict], new_paths: dict[int, list[Point]]) -> None:
        """Current positions plus path points added since the last update."""
        ...

    @abstractmethod
    def on_finished(self, scatter_data: list[Point]) -> None:
        """Final (impact parameter fm, angle deg) pairs of the run."""
        ...

    def handle_event(self, event: dict[str, Any]) -> None:
        kind = event.get("type")
        payload = event.get("payload") or {}
        if kind == RESET_COMPLETE:
            self.on_reset(payload["particles"], payload["initialPaths"])
        elif kind == UPDATE:
            self.on_update(payload["particles"], payload["newPaths"])
        elif kind == FINISHED:
            self.on_finished(payload["scatterData"])
        else:
            raise ValueError(f"Unknown event type: {kind!r}")

    def consume(self, events: Iterable[dict[str, Any]]) -> None:
        for event in events:
            self.handle_event(event)


class DebugRenderer(RendererAdapter):
    """
    Text renderer for development and headless runs.

    Output:
        === reset: 50 particles ===
        === update: 50 particles, 12 new path points ===
        [0] (412.31, 309.60) px hsl(0.0, 90%, 70%)
        === finished: 50 records ===
        b=   96.00 fm  θ=  26.51°
    """

    def __init__(self, output: TextIO | None = None, verbose: bool = False, viewport: Viewport | None = None):
        """
        Args:
            output: Output stream (defaults to sys.stdout).
            verbose: If True, list every particle on update and every record.
            viewport: Display field used to convert positions to pixels.
        """
        self.output = output or sys.stdout
        self.verbose = verbose
        self.viewport = viewport or Viewport()

    def on_reset(self, particles, initial_paths) -> None:
        self.output.write(f"=== reset: {len(particles)} particles ===\n")
        self.output.flush()

    def on_update(self, particles, new_paths) -> None:
        n_points = sum(len(pts) for pts in new_paths.values())
        self.output.write(f"=== update: {len(particles)} particles, {n_points} new path points ===\n")
        if self.verbose:
            for p in particles:
                c = to_canvas(p["position"], self.viewport)
                self.output.write(f"[{p['id']}] ({c['x']:.2f}, {c['y']:.2f}) px {p['color']}\n")
        self.output.flush()

    def on_finished(self, scatter_data) -> None:
        self.output.write(f"=== finished: {len(scatter_data)} records ===\n")
        if self.verbose:
            for rec in sorted(scatter_data, key=lambda d: d["x"]):
                self.output.write(f"b={rec['x']:8.2f} fm  θ={rec['y']:7.2f}°\n")
        self.output.flush()


class BufferedRenderer(RendererAdapter):
    """
    Keeps the full picture a drawing consumer would hold.

    Attributes:
        run_id: Incremented on every reset.
        colors: Particle id -> color of the current run.
        positions: Particle id -> latest physical position.
        paths: Particle id -> every path point received this run.
        scatter_data: Final dataset, empty until the run finishes.
        updates: Number of update events seen this run.
        finished: True once the finished event of this run arrived.
    """

    def __init__(self) -> None:
        self.run_id = 0
        self.colors: dict[int, str] = {}
        self.positions: dict[int, Point] = {}
        self.paths: dict[int, list[Point]] = {}
        self.scatter_data: list[Point] = []
        self.updates = 0
        self.finished = False

    def on_reset(self, particles, initial_paths) -> None:
        self.run_id += 1
        self.colors = {p["id"]: p["color"] for p in particles}
        self.positions = {p["id"]: dict(p["position"]) for p in particles}
        self.paths = {pid: list(pts) for pid, pts in initial_paths.items()}
        self.scatter_data = []
        self.updates = 0
        self.finished = False

    def on_update(self, particles, new_paths) -> None:
        self.updates += 1
        for p in particles:
            self.positions[p["id"]] = dict(p["position"])
        for pid, pts in new_paths.items():
            # Ids from an older run have no color and are not drawn.
            if pid not in self.colors:
                continue
            self.paths.setdefault(pid, []).extend(pts)

    def on_finished(self, scatter_data) -> None:
        self.scatter_data = list(scatter_data)
        self.finished = True

