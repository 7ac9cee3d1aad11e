# MIT License (see LICENSE)
"""
Input/Output for the scattering engine.

This subpackage provides:
    - Settings files: load and save SimulationSettings as JSON.
    - Protocol: builders for command/event messages and JSON encoding.
    - Results: write the final scatter dataset.

Typical usage:
    from rutherford_sim.io import load_settings, reset_command

    settings = load_settings("gold_foil.json")
    worker.send(reset_command(settings))
"""
from .json_io import (
    START,
    PAUSE,
    RESET,
    UPDATE,
    FINISHED,
    RESET_COMPLETE,
    settings_from_json,
    settings_to_json,
    load_settings,
    save_settings,
    particle_to_json,
    particles_to_json,
    scatter_to_json,
    scatter_from_json,
    save_scatter_data,
    start_command,
    pause_command,
    reset_command,
    update_event,
    finished_event,
    reset_complete_event,
    encode_message,
    decode_message,
)

__all__ = [
    # Message types
    "START",
    "PAUSE",
    "RESET",
    "UPDATE",
    "FINISHED",
    "RESET_COMPLETE",
    # Settings
    "settings_from_json",
    "settings_to_json",
    "load_settings",
    "save_settings",
    # Particles and results
    "particle_to_json",
    "particles_to_json",
    "scatter_to_json",
    "scatter_from_json",
    "save_scatter_data",
    # Messages
    "start_command",
    "pause_command",
    "reset_command",
    "update_event",
    "finished_event",
    "reset_complete_event",
    "encode_message",
    "decode_message",
]
