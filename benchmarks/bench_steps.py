"""
Microbenchmark: time per tick vs number of particles.
Run:
  python benchmarks/bench_steps.py
"""
import time

from rutherford_sim.engine import Engine
from rutherford_sim.profiler import Profiler
from rutherford_sim.types import SimulationSettings


def run(n: int, steps: int = 2000, focus: bool = False):
    prof = Profiler()
    engine = Engine(SimulationSettings(energy=5.0, num_particles=n, target_z=79, focus_mode=focus), profiler=prof)

    # warmup
    for _ in range(30):
        engine.tick()

    t0 = time.perf_counter()
    for _ in range(steps):
        engine.tick()
    t1 = time.perf_counter()

    per_step = (t1 - t0) / steps
    return len(engine.particles), per_step, prof.stats.summary()


if __name__ == "__main__":
    for n, focus in [(50, False), (100, False), (300, False), (300, True)]:
        count, per_step, summary = run(n, focus=focus)
        print(f"N={count:4d}  tick={1e3*per_step:8.4f} ms  ticks/s={1/per_step:9.1f}")
        for k in ["integrate", "sample"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
