import json

import pytest

from rutherford_sim.controller import SimulationController
from rutherford_sim.io import (
    decode_message,
    encode_message,
    load_settings,
    reset_command,
    save_scatter_data,
    save_settings,
    scatter_from_json,
    settings_from_json,
    settings_to_json,
)
from rutherford_sim.types import ScatterRecord, SimulationSettings


def test_settings_wire_names():
    s = SimulationSettings(energy=7.0, num_particles=120, target_z=47, focus_mode=True)
    d = settings_to_json(s)
    assert d == {"energy": 7.0, "numParticles": 120, "targetZ": 47, "isFocusModeEnabled": True}
    assert settings_from_json(d) == s


def test_settings_defaults_fill_missing_fields():
    assert settings_from_json({}) == SimulationSettings()
    assert settings_from_json({"numParticles": 80.0}).num_particles == 80


@pytest.mark.parametrize("bad", [
    {"energy": 0},
    {"energy": -1.5},
    {"energy": "lots"},
    {"numParticles": -1},
    {"numParticles": 2.5},
    {"numParticles": "50"},
    {"targetZ": 0},
    {"targetZ": 119},
    {"targetZ": True},
])
def test_settings_validation(bad):
    with pytest.raises(ValueError):
        settings_from_json(bad)


def test_settings_file_round_trip(tmp_path):
    path = tmp_path / "settings.json"
    s = SimulationSettings(energy=2.5, num_particles=64, target_z=13)
    save_settings(s, str(path))
    assert load_settings(str(path)) == s


def test_load_settings_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings(str(tmp_path / "nope.json"))


def test_message_keys_survive_encoding():
    events = []
    controller = SimulationController(emit=events.append)
    controller.reset(SimulationSettings(num_particles=4))
    controller.start()
    for _ in range(5):
        controller.integration_tick()
    controller.emission_tick()

    reset_event = decode_message(encode_message(events[0]))
    assert sorted(reset_event["payload"]["initialPaths"]) == [0, 1, 2, 3]

    update = decode_message(encode_message(events[1]))
    assert update["type"] == "update"
    assert sorted(update["payload"]["newPaths"]) == [0, 1, 2, 3]
    assert update["payload"]["particles"][2]["color"] == events[1]["payload"]["particles"][2]["color"]


def test_commands_encode():
    text = encode_message(reset_command(SimulationSettings(num_particles=9)))
    msg = decode_message(text)
    assert msg["type"] == "reset"
    assert settings_from_json(msg["payload"]["settings"]).num_particles == 9


def test_decode_rejects_non_messages():
    with pytest.raises(ValueError):
        decode_message("[1, 2, 3]")


def test_scatter_data_file(tmp_path):
    records = [ScatterRecord(96.0, 26.5), ScatterRecord(192.0, 13.4)]
    path = tmp_path / "scatter.json"
    save_scatter_data(records, str(path))
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data == [{"x": 96.0, "y": 26.5}, {"x": 192.0, "y": 13.4}]
    assert scatter_from_json(data) == records
