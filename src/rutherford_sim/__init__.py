# MIT License (see LICENSE)
"""
rutherford_sim - Classical Coulomb scattering of alpha particles.

A stream of alpha particles is launched at a fixed nucleus; each follows
the inverse-square repulsion until it escapes the viewing field or comes
too close to the nucleus. The final velocity directions give the
scattering-angle distribution.

Main entry points:
    - SimulationSettings: Energy, particle count, target Z, focus mode.
    - SimulationController: Run-state machine speaking the message protocol.
    - EngineWorker: Threaded host for a controller, queue based.
    - Engine: One run's particle set and tick pass.

Submodules:
    - core: Coulomb force, integrator, lifecycle rules, invariants.
    - io: Settings files and message encoding.
    - renderer: Optional consumer-side adapters.

Example:
    from rutherford_sim import SimulationController, SimulationSettings

    events = []
    controller = SimulationController(emit=events.append)
    controller.reset(SimulationSettings(energy=5.0, num_particles=50, target_z=79))
    records = controller.run_to_completion()
"""
from .types import (
    Viewport,
    SimulationSettings,
    ParticleState,
    ParticleSet,
    ScatterRecord,
)
from .factory import build_particles
from .engine import Engine
from .controller import SimulationController, SimulationStatus
from .worker import EngineWorker
from .analysis import scatter_records, rutherford_angle, closest_approach

__all__ = [
    # Data model
    "Viewport",
    "SimulationSettings",
    "ParticleState",
    "ParticleSet",
    "ScatterRecord",
    # Simulation
    "build_particles",
    "Engine",
    "SimulationController",
    "SimulationStatus",
    "EngineWorker",
    # Analysis
    "scatter_records",
    "rutherford_angle",
    "closest_approach",
]
