import time

import pytest

from rutherford_sim.controller import SimulationStatus
from rutherford_sim.types import SimulationSettings
from rutherford_sim.worker import EngineWorker


def test_round_trip_to_finished():
    with EngineWorker() as worker:
        worker.start()  # ignored, nothing to run yet
        worker.reset(SimulationSettings(energy=12.0, num_particles=4, target_z=79))
        worker.start()
        events = worker.wait_for("finished", timeout=60)

    kinds = [e["type"] for e in events]
    print("events", len(kinds))
    assert kinds[0] == "resetComplete"
    assert kinds[-1] == "finished"
    assert kinds[-2] == "update"
    assert set(kinds[1:-1]) == {"update"}
    assert len(events[-1]["payload"]["scatterData"]) == 4


def test_pause_holds_the_run():
    worker = EngineWorker()
    try:
        worker.reset(SimulationSettings(energy=1.0, num_particles=50, target_z=118))
        worker.start()
        worker.pause()
        worker.wait_for("resetComplete", timeout=10)
        time.sleep(0.2)
        assert worker.controller.status is SimulationStatus.PAUSED
        ticks = worker.controller.engine.ticks
        time.sleep(0.1)
        assert worker.controller.engine.ticks == ticks
        assert all(e["type"] == "update" for e in worker.events())
    finally:
        worker.close()


def test_reset_while_running_starts_over():
    with EngineWorker() as worker:
        worker.reset(SimulationSettings(energy=1.0, num_particles=20, target_z=118))
        worker.start()
        time.sleep(0.05)
        worker.reset(SimulationSettings(energy=12.0, num_particles=2, target_z=79))
        events = worker.wait_for("resetComplete", timeout=10)
        events = worker.wait_for("resetComplete", timeout=10)
        assert len(events[-1]["payload"]["particles"]) == 2
        worker.start()
        events = worker.wait_for("finished", timeout=60)
        assert len(events[-1]["payload"]["scatterData"]) == 2


def test_bad_command_surfaces_on_close():
    worker = EngineWorker()
    worker.send({"type": "explode"})
    time.sleep(0.1)
    with pytest.raises(RuntimeError):
        worker.close()
    with pytest.raises(RuntimeError):
        worker.send({"type": "start"})
