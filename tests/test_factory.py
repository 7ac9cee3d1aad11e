import numpy as np
import pytest

from rutherford_sim.factory import build_particles, initial_speed, make_particles, dedup_key
from rutherford_sim.types import SimulationSettings, Viewport


def test_default_settings_layout():
    """
    energy=5, n=50: 25 ± pairs spaced s = 0.8 * 300 / 25 = 9.6 px apart.
    """
    particles, paths = build_particles(SimulationSettings(energy=5, num_particles=50, target_z=79))

    assert len(particles) == 50
    assert list(particles.ids) == list(range(50))

    offsets_px = particles.positions[:, 1] / 1e-14
    assert np.allclose(offsets_px[0::2], 9.6 * np.arange(1, 26))
    assert np.allclose(offsets_px[1::2], -9.6 * np.arange(1, 26))
    # unique and symmetric about zero
    assert len(set(np.round(offsets_px, 6))) == 50
    assert np.allclose(np.sort(offsets_px), -np.sort(offsets_px)[::-1])

    assert sorted(paths) == list(range(50))
    assert paths[0] == [{"x": 0.0, "y": pytest.approx(300 + 9.6)}]
    assert paths[1] == [{"x": 0.0, "y": pytest.approx(300 - 9.6)}]


def test_launch_state():
    """
    v0 = sqrt(2E/m); 5 MeV alpha ≈ 1.553e7 m/s, launched from x = -400 px.
    """
    particles, _ = build_particles(SimulationSettings(energy=5, num_particles=4))
    v0 = initial_speed(5)
    print("v0", v0)

    assert v0 == pytest.approx(1.5528e7, rel=1e-3)
    assert np.all(particles.velocities[:, 0] == v0)
    assert np.all(particles.velocities[:, 1] == 0.0)
    assert np.allclose(particles.positions[:, 0], -400 * 1e-14)
    assert np.allclose(particles.impact_parameters, np.abs(particles.positions[:, 1]))
    assert np.all(particles.step_counts == 0)
    assert not particles.finished.any()


def test_empty_run():
    particles, paths = build_particles(SimulationSettings(num_particles=0, focus_mode=False))
    assert len(particles) == 0
    assert paths == {}
    assert particles.all_finished


def test_focus_mode_only():
    """150 pairs at ±1..150 fm, + before - for each step."""
    particles, paths = build_particles(SimulationSettings(num_particles=0, focus_mode=True))

    assert len(particles) == 300
    assert list(particles.ids) == list(range(300))
    assert len(paths) == 300
    assert particles.positions[0, 1] == pytest.approx(1e-15)
    assert particles.positions[1, 1] == pytest.approx(-1e-15)
    assert particles.positions[299, 1] == pytest.approx(-150e-15)
    assert particles.impact_parameters[298] == pytest.approx(150e-15)


def test_duplicates_dropped_and_ids_dense():
    """
    With focus on and n=50 the standard ±9.6 px particles land on the
    focus-mode ±96 fm ones (9.6 px at 1e-14 m/px) and are dropped.
    """
    particles, paths = build_particles(SimulationSettings(num_particles=50, focus_mode=True))

    assert len(particles) == 348
    assert list(particles.ids) == list(range(348))
    assert sorted(paths) == list(range(348))
    keys = [dedup_key(y / 1e-14) for y in particles.positions[:, 1]]
    assert len(set(keys)) == len(keys)


@pytest.mark.parametrize("n, expected_px", [
    (1, [0.0]),
    (2, [240.0, -240.0]),
    (3, [240.0, -240.0, 480.0]),
])
def test_small_counts(n, expected_px):
    particles, _ = build_particles(SimulationSettings(num_particles=n))
    assert np.allclose(particles.positions[:, 1] / 1e-14, expected_px)


def test_single_particle_on_axis():
    particles, _ = build_particles(SimulationSettings(num_particles=1))
    assert len(particles) == 1
    assert particles.impact_parameters[0] == 0.0


def test_colors_cycle_over_hue():
    particles, _ = build_particles(SimulationSettings(num_particles=4))
    assert particles.colors == [
        "hsl(0.0, 90%, 70%)",
        "hsl(90.0, 90%, 70%)",
        "hsl(180.0, 90%, 70%)",
        "hsl(270.0, 90%, 70%)",
    ]


def test_construction_is_deterministic():
    s = SimulationSettings(energy=7.5, num_particles=120, target_z=47, focus_mode=True)
    a, pa = build_particles(s)
    b, pb = build_particles(s)
    assert np.array_equal(a.positions, b.positions)
    assert np.array_equal(a.velocities, b.velocities)
    assert a.colors == b.colors
    assert pa == pb


def test_custom_viewport():
    vp = Viewport(width=400, height=200)
    particles, paths = build_particles(SimulationSettings(num_particles=2), vp)
    # step = 0.8 * 100 / 1 = 80 px
    assert np.allclose(particles.positions[:, 1] / vp.scale, [80.0, -80.0])
    assert np.allclose(particles.positions[:, 0], -200 * vp.scale)
    assert paths[0][0]["y"] == pytest.approx(180.0)


def test_make_particles_keeps_order():
    particles = make_particles([5.0, -5.0, 5.0], energy_mev=3.0)
    assert len(particles) == 3
    assert particles.positions[2, 1] == particles.positions[0, 1]
