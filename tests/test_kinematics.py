import math

import pytest

from confetti.core.kinematics import (
    MAX_DURATION,
    MotionChannel,
    compute_bound_crossing_time,
    compute_time_to_reach_target,
    displacement,
)


# =============================================================================
# Target time
# =============================================================================

def test_no_target_velocity_never_reaches_cap():
    assert compute_time_to_reach_target(None, 1.0, 0.5) is None
    assert compute_time_to_reach_target(None, 0.0, 0.0) is None


@pytest.mark.parametrize("target, initial, accel", [
    (1.0, 0.0, 0.01),
    (0.3, 0.05, 0.0005),
    (-2.0, 1.0, -0.25),
    (5.0, -5.0, 0.3),
])
def test_target_time_reaches_target_velocity(target, initial, accel):
    t = compute_time_to_reach_target(target, initial, accel)
    assert t > 0
    assert initial + accel * t == pytest.approx(target)


def test_target_time_clamped_when_cap_already_exceeded():
    # Accelerating away from a cap that is already behind us
    assert compute_time_to_reach_target(1.0, 2.0, 0.5) == 0.0
    assert compute_time_to_reach_target(-1.0, -2.0, -0.5) == 0.0


def test_zero_acceleration_above_cap_is_immediate():
    assert compute_time_to_reach_target(1.0, 2.0, 0.0) == 0.0


def test_zero_acceleration_below_or_at_cap_never_reaches():
    assert compute_time_to_reach_target(3.0, 2.0, 0.0) is None
    assert compute_time_to_reach_target(2.0, 2.0, 0.0) is None


# =============================================================================
# Bound crossing
# =============================================================================

def test_decelerating_particle_exits_through_min_bound():
    # Rises to 50 at t=10, then falls back to 0 at t=20
    t = compute_bound_crossing_time(0, 10, -1, None, None, 0, 50)
    assert t == pytest.approx(20.0)


def test_constant_velocity_crossing_is_linear():
    assert compute_bound_crossing_time(0, 5, 0, None, None, 0, 100) == pytest.approx(20.0)


def test_constant_velocity_toward_min_bound():
    assert compute_bound_crossing_time(50, -1, 0, None, None, 0, 100) == pytest.approx(50.0)


def test_constant_velocity_already_outside_never_crosses():
    assert compute_bound_crossing_time(-10, -1, 0, None, None, 0, 100) == MAX_DURATION


def test_zero_velocity_never_crosses():
    assert compute_bound_crossing_time(50, 0, 0, None, None, 0, 100) == MAX_DURATION


def test_quadratic_without_real_root_never_crosses():
    # Starts past max and accelerates further away from it
    assert compute_bound_crossing_time(200, 0, 1, None, None, 0, 100) == MAX_DURATION


def test_quadratic_picks_smallest_positive_root():
    t = compute_bound_crossing_time(0, 0, 2, None, None, -100, 100)
    assert t == pytest.approx(10.0)
    assert 0 + 0.5 * 2 * t * t == pytest.approx(100)


def test_crossing_during_cruise_phase():
    # Cap reached at t=100 after covering 50px, then 1px/ms to 1000
    target_time = compute_time_to_reach_target(1.0, 0.0, 0.01)
    t = compute_bound_crossing_time(0, 0, 0.01, target_time, 1.0, 0, 1000)
    assert t == pytest.approx(1050.0)
    assert displacement(t, 0, 0, 0.01, target_time, 1.0) == pytest.approx(1000.0)


def test_cruise_phase_uses_direction_of_target_velocity():
    target_time = compute_time_to_reach_target(-1.0, 0.0, -0.01)
    t = compute_bound_crossing_time(500, 0, -0.01, target_time, -1.0, 0, 1000)
    assert t == pytest.approx(550.0)


def test_cruise_at_zero_velocity_never_crosses():
    target_time = compute_time_to_reach_target(0.0, 1.0, -0.01)
    assert compute_bound_crossing_time(0, 1.0, -0.01, target_time, 0.0, -500, 500) == MAX_DURATION


def test_zero_acceleration_already_past_cap_uses_cap_velocity():
    target_time = compute_time_to_reach_target(1.0, 2.0, 0.0)
    assert target_time == 0.0
    assert compute_bound_crossing_time(0, 2.0, 0.0, target_time, 1.0, 0, 100) == pytest.approx(100.0)


def test_crossing_time_decreases_with_velocity():
    times = [compute_bound_crossing_time(0, v, 0.001, None, None, 0, 500)
             for v in (0.1, 0.2, 0.5, 1.0)]
    assert times == sorted(times, reverse=True)
    assert len(set(times)) == len(times)


def test_crossing_time_decreases_with_acceleration():
    times = [compute_bound_crossing_time(0, 0.1, a, None, None, 0, 500)
             for a in (0.0, 0.0005, 0.001, 0.01)]
    assert all(later < earlier for earlier, later in zip(times, times[1:]))


# =============================================================================
# Displacement
# =============================================================================

def test_displacement_before_cap_is_kinematic():
    assert displacement(10, 5, 2, 0.5, None, None) == pytest.approx(5 + 20 + 25)


def test_displacement_is_continuous_at_cap():
    tm = compute_time_to_reach_target(0.8, 0.1, 0.002)
    before = displacement(math.nextafter(tm, 0), 3, 0.1, 0.002, tm, 0.8)
    at = displacement(tm, 3, 0.1, 0.002, tm, 0.8)
    assert before == pytest.approx(at)


def test_displacement_after_cap_is_linear():
    tm = 100.0
    p1 = displacement(200, 0, 0, 0.01, tm, 1.0)
    p2 = displacement(300, 0, 0, 0.01, tm, 1.0)
    assert p2 - p1 == pytest.approx(100.0)


# =============================================================================
# Motion channel
# =============================================================================

def test_channel_prepare_and_velocity():
    channel = MotionChannel(initial=10, initial_velocity=0.0, acceleration=0.01, target_velocity=1.0)
    assert channel.time_to_reach_target is None

    assert channel.prepare() == pytest.approx(100.0)
    assert channel.velocity_at(50) == pytest.approx(0.5)
    assert channel.velocity_at(150) == pytest.approx(1.0)
    assert channel.position_at(100) == pytest.approx(60.0)


def test_channel_bound_crossing_matches_solver():
    channel = MotionChannel(initial=0, initial_velocity=10, acceleration=-1)
    channel.prepare()
    assert channel.bound_crossing_time(0, 50) == pytest.approx(20.0)


def test_channel_reset():
    channel = MotionChannel(initial=1, initial_velocity=2, acceleration=3, target_velocity=4)
    channel.prepare()
    channel.reset()
    assert channel == MotionChannel()
    assert channel.time_to_reach_target is None


def test_accelerating_past_exceeded_cap_cruises_from_start():
    # Already faster than the cap, so the cap velocity applies from t=0
    target_time = compute_time_to_reach_target(1.0, 2.0, 0.5)
    assert target_time == 0.0
    assert compute_bound_crossing_time(0, 2.0, 0.5, target_time, 1.0, 0, 100) == pytest.approx(100.0)


def test_cruise_bound_follows_target_velocity_not_acceleration():
    # Pushed toward +x but capped at -1px/ms: exits through the min bound
    target_time = compute_time_to_reach_target(-1.0, -2.0, 0.5)
    assert target_time == pytest.approx(2.0)
    t = compute_bound_crossing_time(50, -2.0, 0.5, target_time, -1.0, 0, 100)
    assert t == pytest.approx(49.0)
    assert displacement(t, 50, -2.0, 0.5, target_time, -1.0) == pytest.approx(0.0)
