# MIT License (see LICENSE)
"""
Consumer-side adapters for the engine's events.

    - RendererAdapter: Abstract base class splitting events into callbacks.
    - DebugRenderer: Text output for debugging and the CLI.
    - BufferedRenderer: Reassembles full trajectories from path deltas.

The engine has no rendering dependency; these adapters are optional.
"""
from .adapter import (
    RendererAdapter,
    DebugRenderer,
    BufferedRenderer,
    nucleus_display_radius,
)

__all__ = [
    "RendererAdapter",
    "DebugRenderer",
    "BufferedRenderer",
    "nucleus_display_radius",
]
