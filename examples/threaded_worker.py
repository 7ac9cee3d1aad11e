# examples/threaded_worker.py
from rutherford_sim import EngineWorker, SimulationSettings
from rutherford_sim.renderer import BufferedRenderer

renderer = BufferedRenderer()

with EngineWorker() as worker:
    worker.reset(SimulationSettings(energy=8.0, num_particles=20, target_z=79, focus_mode=True))
    worker.start()
    renderer.consume(worker.wait_for("finished", timeout=120))

print("updates received:", renderer.updates)
print("particles:", len(renderer.colors))
longest = max(renderer.paths.values(), key=len)
print("longest path:", len(longest), "points")
print("max angle:", max(d["y"] for d in renderer.scatter_data))
