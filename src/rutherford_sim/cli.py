# MIT License (see LICENSE)
"""
Headless command-line runner.

Runs one simulation to completion and prints the scatter dataset:

    python -m rutherford_sim --energy 5 --particles 50 --target-z 79
    python -m rutherford_sim --settings gold.json --output scatter.json
"""
from __future__ import annotations
import argparse
import logging
import sys

from .analysis import rutherford_angle, sorted_by_impact
from .constants import ENERGY_RANGE_MEV, FEMTOMETER, NUM_PARTICLES_RANGE, TARGET_Z_RANGE
from .controller import SimulationController
from .io.json_io import load_settings, save_scatter_data
from .logging_config import setup_logging
from .profiler import Profiler
from .renderer.adapter import DebugRenderer
from .types import SimulationSettings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    defaults = SimulationSettings()
    parser = argparse.ArgumentParser(
        prog="rutherford-sim",
        description="Simulate alpha particles scattering off a nucleus.",
    )
    parser.add_argument("--settings", help="JSON settings file (overrides the flags below)")
    parser.add_argument("--energy", type=float, default=defaults.energy, help="Alpha energy in MeV (typically %g-%g)" % ENERGY_RANGE_MEV)
    parser.add_argument("--particles", type=int, default=defaults.num_particles, help="Standard particle count (typically %d-%d)" % NUM_PARTICLES_RANGE)
    parser.add_argument("--target-z", type=int, default=defaults.target_z, help="Atomic number of the target (%d-%d)" % TARGET_Z_RANGE)
    parser.add_argument("--focus", action="store_true", help="Add 150 near-axis pairs at 1 fm spacing")
    parser.add_argument("--output", help="Write the scatter dataset to this JSON file")
    parser.add_argument("--max-ticks", type=int, default=1_000_000)
    parser.add_argument("--compare", action="store_true", help="Print the analytic Rutherford angle alongside")
    parser.add_argument("--profile", action="store_true", help="Print timing statistics")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        if args.settings:
            settings = load_settings(args.settings)
        else:
            settings = SimulationSettings(
                energy=args.energy,
                num_particles=args.particles,
                target_z=args.target_z,
                focus_mode=args.focus,
            ).validate()
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    profiler = Profiler() if args.profile else None
    renderer = DebugRenderer()
    controller = SimulationController(emit=renderer.handle_event, profiler=profiler)
    controller.reset(settings)
    try:
        records = controller.run_to_completion(max_ticks=args.max_ticks)
    except RuntimeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for rec in sorted_by_impact(records):
        line = f"{rec.impact_parameter_fm:10.2f} fm  {rec.angle_deg:8.3f}°"
        if args.compare:
            theory = rutherford_angle(rec.impact_parameter_fm * FEMTOMETER, settings.energy, settings.target_z)
            line += f"  (theory {theory:8.3f}°)"
        print(line)

    if args.output:
        save_scatter_data(records, args.output)
        logger.info("Wrote %d records to %s", len(records), args.output)

    if profiler is not None:
        for name, stats in profiler.stats.summary().items():
            print(f"{name:10s} n={stats['n']:7d} mean={stats['mean_ms']:.4f} ms total={stats['total_ms']:.1f} ms")
    return 0
