import logging

import pytest
import numpy as np

import pendulumsim as ps

# --- Fixtures ---


@pytest.fixture
def default_constants():
    return ps.PhysicalConstants(mass1=1.0, mass2=1.0, length1=0.5, length2=0.5)


@pytest.fixture
def chaotic_initial():
    """Both rods released from high angles."""
    return ps.AngularState(theta1=ps.deg_to_rad(120.0), theta2=ps.deg_to_rad(170.0))


@pytest.fixture
def small_angle_initial():
    return ps.AngularState(theta1=ps.deg_to_rad(5.0), theta2=ps.deg_to_rad(5.0))


# --- 1. Step Count & Layout ---


@pytest.mark.parametrize(
    "duration, dt, expected",
    [(60.0, 0.01, 6000), (2.0, 0.01, 200), (1.0, 0.3, 3), (5.0, 2.0, 3)],
)
def test_step_count(duration, dt, expected):
    assert ps.step_count(duration, dt) == expected


def test_full_run_length(default_constants, chaotic_initial):
    traj = ps.generate(chaotic_initial, default_constants, 60.0, 0.01)
    assert len(traj) == 6000
    assert len(traj.positions) == 6000
    assert traj.positions.shape == (6000, 2, 2)
    assert traj.angles.shape == (6000, 2)


def test_first_entry_is_seed(default_constants, chaotic_initial):
    traj = ps.generate(chaotic_initial, default_constants, 1.0, 0.01)
    assert traj.angles[0, 0] == chaotic_initial.theta1
    assert traj.angles[0, 1] == chaotic_initial.theta2
    assert traj.state_at(0) == chaotic_initial
    assert traj.times[0] == 0.0


def test_entries_follow_integrator(default_constants, chaotic_initial):
    """Entry i is exactly i applications of rk4_step."""
    dt = 0.01
    traj = ps.generate(chaotic_initial, default_constants, 0.1, dt)

    state = chaotic_initial
    for i in range(1, len(traj)):
        state = ps.rk4_step(state, default_constants, dt)
        assert traj.state_at(i) == state


def test_times_accumulate_dt(default_constants, chaotic_initial):
    dt = 0.01
    traj = ps.generate(chaotic_initial, default_constants, 60.0, dt)

    t = 0.0
    for i in range(1, 50):
        t += dt
        assert traj.times[i] == t

    # Repeated addition drifts from i * dt only by rounding error
    drift = np.abs(traj.times - np.arange(len(traj)) * dt)
    assert np.max(drift) < 1e-9


def test_zero_duration_is_empty(default_constants, chaotic_initial):
    traj = ps.generate(chaotic_initial, default_constants, 0.0, 0.01)
    assert len(traj) == 0
    assert traj.positions.shape == (0, 2, 2)


# --- 2. Positions ---


def test_coordinate_chaining_at_rest():
    constants = ps.PhysicalConstants(1.0, 1.0, 1.0, 1.0)
    traj = ps.generate(ps.AngularState(0.0, 0.0), constants, 0.05, 0.01, scale=1.0)

    p1, p2 = traj.points_at(0)
    assert p1 == (0.0, 1.0)
    assert p2 == (0.0, 2.0)


def test_second_mass_hangs_from_first(default_constants, chaotic_initial):
    traj = ps.generate(chaotic_initial, default_constants, 2.0, 0.01)
    scale = ps.SCALE

    # Rod 1 length from pivot, rod 2 length from mass 1
    r1 = np.hypot(traj.x1, traj.y1)
    r2 = np.hypot(traj.x2 - traj.x1, traj.y2 - traj.y1)
    np.testing.assert_allclose(r1, scale * default_constants.length1)
    np.testing.assert_allclose(r2, scale * default_constants.length2)


def test_to_positions_rescales(default_constants, chaotic_initial):
    traj = ps.generate(chaotic_initial, default_constants, 1.0, 0.01, scale=100.0)
    p1, p2 = ps.to_positions(traj.theta1, traj.theta2, default_constants, scale=50.0)
    np.testing.assert_allclose(p1.x, traj.x1 / 2)
    np.testing.assert_allclose(p2.y, traj.y2 / 2)


def test_positions_layout(default_constants, chaotic_initial):
    traj = ps.generate(chaotic_initial, default_constants, 0.5, 0.01)
    i = 17
    p1, p2 = traj.points_at(i)
    np.testing.assert_array_equal(traj.positions[i], [[p1.x, p1.y], [p2.x, p2.y]])


# --- 3. Dynamics ---


def test_determinism(default_constants, chaotic_initial):
    a = ps.generate(chaotic_initial, default_constants, 10.0, 0.01)
    b = ps.generate(chaotic_initial, default_constants, 10.0, 0.01)
    np.testing.assert_array_equal(a.states, b.states)
    np.testing.assert_array_equal(a.positions, b.positions)


def test_equilibrium_stays_at_rest(default_constants):
    traj = ps.generate(ps.AngularState(0.0, 0.0, 0.0, 0.0), default_constants, 5.0, 0.01)
    assert np.all(traj.states == 0.0)
    assert np.all(traj.x1 == 0.0)
    assert np.all(traj.x2 == 0.0)


def test_energy_conservation_small_angles(default_constants, small_angle_initial):
    """RK4 with a small step shows no gross energy drift over a short run."""
    traj = ps.generate(small_angle_initial, default_constants, 2.0, 0.01)
    E = ps.total_energy(
        traj.theta1, traj.theta2, traj.omega1, traj.omega2, default_constants
    )
    assert E[0] > 0
    assert np.max(np.abs(E - E[0])) / E[0] < 0.01


def test_energy_conservation_chaotic(default_constants, chaotic_initial):
    """Even in the chaotic regime the drift stays small over a few seconds."""
    traj = ps.generate(chaotic_initial, default_constants, 5.0, 0.001)
    E = ps.total_energy(
        traj.theta1, traj.theta2, traj.omega1, traj.omega2, default_constants
    )
    assert np.max(np.abs(E - E[0])) / E[0] < 1e-3


def test_small_angle_co_oscillation(default_constants, small_angle_initial):
    """Equal links released together swing mostly in phase and stay small."""
    traj = ps.generate(small_angle_initial, default_constants, 2.0, 0.01)
    theta0 = small_angle_initial.theta1

    assert np.max(np.abs(traj.theta1)) < 2 * theta0
    assert np.max(np.abs(traj.theta2)) < 2 * theta0
    assert np.corrcoef(traj.theta1, traj.theta2)[0, 1] > 0.5


def test_chaotic_sensitivity(default_constants, chaotic_initial):
    """A tiny perturbation grows by orders of magnitude."""
    perturbed = ps.AngularState(
        theta1=chaotic_initial.theta1 + 1e-9, theta2=chaotic_initial.theta2
    )
    a = ps.generate(chaotic_initial, default_constants, 10.0, 0.01)
    b = ps.generate(perturbed, default_constants, 10.0, 0.01)

    dist = np.linalg.norm(a.states - b.states, axis=1)
    assert dist[-1] > 1e3 * dist[1]


def test_degenerate_mass_propagates_non_finite(caplog):
    """With a massless first bob the coupling matrix is singular at th1 = th2."""
    constants = ps.PhysicalConstants(mass1=0.0, mass2=1.0, length1=0.5, length2=0.5)
    initial = ps.AngularState(theta1=0.3, theta2=0.3)

    with np.errstate(divide="ignore", invalid="ignore"):
        with caplog.at_level(logging.WARNING, logger="pendulumsim.trajectory"):
            traj = ps.generate(initial, constants, 0.05, 0.01)

    assert len(traj) == 5
    assert np.all(np.isfinite(traj.states[0]))
    assert not np.any(np.isfinite(traj.states[1:]))
    assert not np.any(np.isfinite(traj.positions[1:]))
    assert "non-finite" in caplog.text
