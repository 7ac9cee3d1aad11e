# examples/head_on.py
import numpy as np

from rutherford_sim import Engine, SimulationSettings, closest_approach

# One particle, numParticles=1 puts it exactly on the axis.
engine = Engine(SimulationSettings(energy=5.0, num_particles=1, target_z=79))
nearest = np.inf
while not engine.tick():
    nearest = min(nearest, float(np.linalg.norm(engine.particles.positions[0])))

print("closest approach (sim):   ", nearest / 1e-15, "fm")
print("closest approach (theory):", closest_approach(5.0, 79) / 1e-15, "fm")
print("final velocity:", engine.particles.velocities[0])
