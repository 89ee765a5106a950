"""
Closed-form Kinematics for Confetti

Every channel (x, y, rotation) moves under constant acceleration until it
reaches an optional target velocity, then cruises at that velocity forever:

    phase 1 (t < tm):   d = x + v * t + 1/2 * a * t^2
    phase 2 (t >= tm):  d = x + v * tm + 1/2 * a * tm^2 + vt * (t - tm)

Nothing here is integrated frame by frame. Position is a pure function of
elapsed time, so the same time always yields the same state.

All values use milliseconds and pixels (velocity in px/ms, acceleration in
px/ms^2). Rotation uses degrees in place of pixels.
"""

import math
from dataclasses import dataclass, field
from typing import Optional


# =============================================================================
# Constants
# =============================================================================

# Returned when a bound is never crossed going forward in time
MAX_DURATION = math.inf


# =============================================================================
# Solvers
# =============================================================================

def compute_time_to_reach_target(
    target_velocity: Optional[float],
    initial_velocity: float,
    acceleration: float
) -> Optional[float]:
    """
    Time (ms) until the velocity reaches the target velocity.

    Args:
        target_velocity: Velocity cap, None for unbounded motion
        initial_velocity: Velocity at t=0
        acceleration: Constant acceleration

    Returns:
        0.0 if the cap is already met, None if it is never reached
    """
    if target_velocity is None:
        return None

    if acceleration != 0:
        time = (target_velocity - initial_velocity) / acceleration
        return time if time > 0 else 0.0

    # Velocity is constant, so the cap is either met already or never
    if target_velocity < initial_velocity:
        return 0.0
    return None


def _solve_quadratic_crossing(
    initial_pos: float,
    velocity: float,
    acceleration: float,
    bound: float
) -> float:
    """Smallest positive t for bound = x + v*t + 0.5*a*t^2 (a != 0)"""
    discriminant = 2 * acceleration * (bound - initial_pos) + velocity * velocity
    if discriminant < 0:
        return MAX_DURATION

    root = math.sqrt(discriminant)
    first_time = (-root - velocity) / acceleration
    second_time = (root - velocity) / acceleration

    for time in sorted((first_time, second_time)):
        if time > 0:
            return time
    return MAX_DURATION


def compute_bound_crossing_time(
    initial_pos: float,
    velocity: float,
    acceleration: float,
    target_time: Optional[float],
    target_velocity: Optional[float],
    min_bound: float,
    max_bound: float
) -> float:
    """
    Earliest time (ms) at which the position leaves [min_bound, max_bound].

    Only the bound in the direction of travel is checked. When a target
    velocity is reached, the accelerating phase is assumed not to cross that
    bound before the cap kicks in, so only the cruising phase is solved.

    Args:
        initial_pos: Position at t=0
        velocity: Initial velocity
        acceleration: Constant acceleration
        target_time: Time the velocity cap is reached (from
            compute_time_to_reach_target), None if never
        target_velocity: Velocity cap
        min_bound: Lower edge of the region
        max_bound: Upper edge of the region

    Returns:
        Crossing time, or MAX_DURATION if the bound is never reached
    """
    if acceleration != 0:
        if target_time is None or target_time < 0:
            bound = max_bound if acceleration > 0 else min_bound
            return _solve_quadratic_crossing(initial_pos, velocity, acceleration, bound)

        # d = x + v*tm + 0.5*a*tm^2 + vt*(t - tm), solved for t
        if not target_velocity:
            return MAX_DURATION
        bound = max_bound if target_velocity > 0 else min_bound
        cruise_start = (initial_pos + velocity * target_time
                        + 0.5 * acceleration * target_time * target_time)
        time = target_time + (bound - cruise_start) / target_velocity
        return time if time > 0 else MAX_DURATION

    if target_time is not None and target_velocity is not None:
        actual_velocity = target_velocity
    else:
        actual_velocity = velocity

    if actual_velocity == 0:
        return MAX_DURATION

    bound = max_bound if actual_velocity > 0 else min_bound
    time = (bound - initial_pos) / actual_velocity
    return time if time > 0 else MAX_DURATION


def displacement(
    t: float,
    xi: float,
    vi: float,
    a: float,
    target_time: Optional[float],
    v_target: Optional[float]
) -> float:
    """
    Position at time t for two-phase motion.

    Continuous at t == target_time: both branches agree there.
    """
    if target_time is None or t < target_time:
        return xi + vi * t + 0.5 * a * t * t

    return (xi + vi * target_time + 0.5 * a * target_time * target_time
            + (t - target_time) * v_target)


# =============================================================================
# Motion Channel
# =============================================================================

@dataclass
class MotionChannel:
    """
    One independently evolving scalar (x position, y position or rotation).

    time_to_reach_target is derived by prepare() and stays fixed until
    reset() is called.
    """
    initial: float = 0.0
    initial_velocity: float = 0.0
    acceleration: float = 0.0
    target_velocity: Optional[float] = None
    time_to_reach_target: Optional[float] = field(default=None, init=False)

    def prepare(self) -> Optional[float]:
        """Compute and store the time at which the velocity cap is reached"""
        self.time_to_reach_target = compute_time_to_reach_target(
            self.target_velocity, self.initial_velocity, self.acceleration
        )
        return self.time_to_reach_target

    def position_at(self, t: float) -> float:
        return displacement(
            t, self.initial, self.initial_velocity, self.acceleration,
            self.time_to_reach_target, self.target_velocity
        )

    def velocity_at(self, t: float) -> float:
        """Instantaneous velocity at time t"""
        if self.time_to_reach_target is None or t < self.time_to_reach_target:
            return self.initial_velocity + self.acceleration * t
        return self.target_velocity

    def bound_crossing_time(self, min_bound: float, max_bound: float) -> float:
        return compute_bound_crossing_time(
            self.initial, self.initial_velocity, self.acceleration,
            self.time_to_reach_target, self.target_velocity,
            min_bound, max_bound
        )

    def reset(self):
        self.initial = 0.0
        self.initial_velocity = 0.0
        self.acceleration = 0.0
        self.target_velocity = None
        self.time_to_reach_target = None
