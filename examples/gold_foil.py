# examples/gold_foil.py
from rutherford_sim import SimulationController, SimulationSettings, rutherford_angle
from rutherford_sim.analysis import sorted_by_impact

events = []
controller = SimulationController(emit=events.append)
controller.reset(SimulationSettings(energy=5.0, num_particles=50, target_z=79))
records = controller.run_to_completion()

print("ticks:", controller.engine.ticks)
for r in sorted_by_impact(records)[::2]:
    theory = rutherford_angle(r.impact_parameter_fm * 1e-15, 5.0, 79)
    print(f"b={r.impact_parameter_fm:7.1f} fm  sim={r.angle_deg:7.2f}°  theory={theory:7.2f}°")
