# MIT License (see LICENSE)
"""
JSON encoding of settings and of the engine's message protocol.

Messages are plain dicts of the form {"type": str, "payload": dict | None}
so they can cross a thread or process boundary without sharing state.

Commands (consumer → engine):
-----------------------------
{"type": "start"}
{"type": "pause"}
{"type": "reset", "payload": {"settings": {
    "energy": float,               # MeV, > 0
    "numParticles": int,           # >= 0
    "targetZ": int,                # 1..118
    "isFocusModeEnabled": bool
}}}

Events (engine → consumer):
---------------------------
{"type": "update", "payload": {
    "particles": [{"id": int, "position": {"x", "y"}, "color": str}],
    "newPaths": {id: [{"x", "y"}, ...]}      # display pixels, since last update
}}
{"type": "finished", "payload": {
    "scatterData": [{"x": impact_fm, "y": angle_deg}, ...]
}}
{"type": "resetComplete", "payload": {
    "particles": [{"id", "position", "velocity", "color",
                   "impactParameter", "stepCount", "finished"}],
    "initialPaths": {id: [{"x", "y"}]}
}}

Positions in "particles" are physical meters; path points are pixels.
JSON turns the integer path keys into strings; decode_message() restores
them.
"""
from __future__ import annotations
import json
from typing import Any, Iterable

from ..types import ParticleSet, ParticleState, ScatterRecord, SimulationSettings
from ..util import point


# Command types
START = "start"
PAUSE = "pause"
RESET = "reset"

# Event types
UPDATE = "update"
FINISHED = "finished"
RESET_COMPLETE = "resetComplete"

_PATH_FIELDS = {UPDATE: "newPaths", RESET_COMPLETE: "initialPaths"}


# =============================================================================
# Settings
# =============================================================================

def settings_from_json(d: dict[str, Any]) -> SimulationSettings:
    """
    Parse and validate settings from their wire form.

    Missing fields take the SimulationSettings defaults.

    Raises:
        ValueError: If a value is out of range or has the wrong kind.
    """
    defaults = SimulationSettings()
    try:
        energy = float(d.get("energy", defaults.energy))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"energy must be a number, got {d.get('energy')!r}") from exc

    settings = SimulationSettings(
        energy=energy,
        num_particles=_as_int("numParticles", d.get("numParticles", defaults.num_particles)),
        target_z=_as_int("targetZ", d.get("targetZ", defaults.target_z)),
        focus_mode=bool(d.get("isFocusModeEnabled", defaults.focus_mode)),
    )
    return settings.validate()


def _as_int(name: str, value: Any) -> int:
    """Accept ints and integral floats (JSON has no int type of its own)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{name} must be an integer, got {value!r}")
    return int(value)


def settings_to_json(settings: SimulationSettings) -> dict[str, Any]:
    return {
        "energy": settings.energy,
        "numParticles": settings.num_particles,
        "targetZ": settings.target_z,
        "isFocusModeEnabled": settings.focus_mode,
    }


def load_settings(path: str) -> SimulationSettings:
    """
    Load settings from a JSON file.

    Raises:
        FileNotFoundError: If the file cannot be found.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If a setting is out of range.
    """
    with open(path, "r", encoding="utf-8") as f:
        return settings_from_json(json.load(f))


def save_settings(settings: SimulationSettings, path: str, indent: int = 2) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(settings_to_json(settings), f, indent=indent)


# =============================================================================
# Particles and results
# =============================================================================

def particle_to_json(p: ParticleState) -> dict[str, Any]:
    """Full display-relevant state of one particle."""
    return {
        "id": p.id,
        "position": point(p.position),
        "velocity": point(p.velocity),
        "color": p.color,
        "impactParameter": p.impact_parameter,
        "stepCount": p.step_count,
        "finished": p.finished,
    }


def particles_to_json(particles: ParticleSet) -> list[dict[str, Any]]:
    return [particle_to_json(p) for p in particles]


def scatter_to_json(records: Iterable[ScatterRecord]) -> list[dict[str, float]]:
    """Records as chart points: x = impact parameter (fm), y = angle (deg)."""
    return [{"x": r.impact_parameter_fm, "y": r.angle_deg} for r in records]


def scatter_from_json(data: Iterable[dict[str, float]]) -> list[ScatterRecord]:
    return [ScatterRecord(impact_parameter_fm=float(d["x"]), angle_deg=float(d["y"])) for d in data]


def save_scatter_data(records: Iterable[ScatterRecord], path: str, indent: int = 2) -> None:
    """Write the final scatter dataset as a JSON list of {x, y}."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(scatter_to_json(records), f, indent=indent)


# =============================================================================
# Messages
# =============================================================================

def message(kind: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
    msg: dict[str, Any] = {"type": kind}
    if payload is not None:
        msg["payload"] = payload
    return msg


def start_command() -> dict[str, Any]:
    return message(START)


def pause_command() -> dict[str, Any]:
    return message(PAUSE)


def reset_command(settings: SimulationSettings) -> dict[str, Any]:
    return message(RESET, {"settings": settings_to_json(settings)})


def update_event(particles: list[dict], new_paths: dict[int, list[dict]]) -> dict[str, Any]:
    return message(UPDATE, {"particles": particles, "newPaths": new_paths})


def finished_event(records: Iterable[ScatterRecord]) -> dict[str, Any]:
    return message(FINISHED, {"scatterData": scatter_to_json(records)})


def reset_complete_event(particles: ParticleSet, initial_paths: dict[int, list[dict]]) -> dict[str, Any]:
    return message(RESET_COMPLETE, {
        "particles": particles_to_json(particles),
        "initialPaths": {pid: [dict(pt) for pt in pts] for pid, pts in initial_paths.items()},
    })


def encode_message(msg: dict[str, Any]) -> str:
    """Serialize a message to JSON text."""
    return json.dumps(msg)


def decode_message(text: str) -> dict[str, Any]:
    """
    Parse JSON text into a message dict.

    Path mappings get their integer particle ids back.

    Raises:
        ValueError: If the text is not a message object.
    """
    msg = json.loads(text)
    if not isinstance(msg, dict) or "type" not in msg:
        raise ValueError("Message must be an object with a 'type' field")
    field_name = _PATH_FIELDS.get(msg["type"])
    payload = msg.get("payload")
    if field_name and isinstance(payload, dict) and field_name in payload:
        payload[field_name] = {int(k): v for k, v in payload[field_name].items()}
    return msg
