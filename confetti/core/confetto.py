"""
Confetto - A single piece of confetti on the screen

Holds the configured motion of one confetto and evaluates its draw state
(position, rotation, opacity) as a pure function of time since the animation
began.

Lifecycle:
    1. Configure: set channel parameters, delay, TTL and fade curve
    2. prepare(bound): derive velocity-cap times and the lifetime, exactly once
    3. apply_update(elapsed): repeatedly, with increasing elapsed time, until
       it returns True
    4. reset(): optional, so a caller-owned pool can reuse the object

apply_update() before prepare() is a caller error and is not checked; the
update runs every frame for every confetto on screen.

Time is in milliseconds, positions in pixels, rotation in degrees.
"""

import logging
import math
import numpy as np
from dataclasses import dataclass

from .kinematics import MotionChannel, MAX_DURATION
from .shapes import ConfettoShape, Paint, MAX_ALPHA

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bound:
    """Rectangular region confetti may occupy. Leaving it terminates the confetto."""
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @classmethod
    def from_size(cls, width: float, height: float) -> 'Bound':
        return cls(0, 0, width, height)


# Flat parameter names accepted by Confetto.configure()
_CHANNEL_PARAMS = {
    'initial_x': ('x', 'initial'),
    'initial_y': ('y', 'initial'),
    'initial_velocity_x': ('x', 'initial_velocity'),
    'initial_velocity_y': ('y', 'initial_velocity'),
    'acceleration_x': ('x', 'acceleration'),
    'acceleration_y': ('y', 'acceleration'),
    'target_velocity_x': ('x', 'target_velocity'),
    'target_velocity_y': ('y', 'target_velocity'),
    'initial_rotation': ('rotation', 'initial'),
    'initial_rotational_velocity': ('rotation', 'initial_velocity'),
    'rotational_acceleration': ('rotation', 'acceleration'),
    'target_rotational_velocity': ('rotation', 'target_velocity'),
}
_PLAIN_PARAMS = ('initial_delay', 'ttl', 'fade_out')


class Confetto:
    """
    Internal animation state for one confetto.

    Attributes:
        x, y, rotation: Motion channels
        initial_delay: Time before the confetto appears
        ttl: Time to live, None or negative for no limit
        fade_out: Maps lifetime progress (0-1) to opacity fraction (0-1)
        lifetime: Derived by prepare(); earliest of TTL and leaving the bound
    """

    def __init__(self, shape: ConfettoShape):
        self.shape = shape
        self.paint = Paint()
        self.matrix = np.identity(3)

        self.x = MotionChannel()
        self.y = MotionChannel()
        self.rotation = MotionChannel()
        self.reset()

    @property
    def channels(self):
        return (self.x, self.y, self.rotation)

    def configure(self, **params) -> 'Confetto':
        """
        Set any number of parameters by flat name, e.g.
        configure(initial_x=10, initial_velocity_y=0.3, ttl=2000).

        Raises:
            ValueError: For unknown parameter names
        """
        for name, value in params.items():
            if name in _CHANNEL_PARAMS:
                channel, attr = _CHANNEL_PARAMS[name]
                setattr(getattr(self, channel), attr, value)
            elif name in _PLAIN_PARAMS:
                setattr(self, name, value)
            else:
                available = ', '.join(sorted(list(_CHANNEL_PARAMS) + list(_PLAIN_PARAMS)))
                raise ValueError(f"Unknown confetto parameter '{name}'. Available: {available}")
        return self

    def prepare(self, bound: Bound) -> float:
        """
        Derive velocity-cap times and the lifetime.

        Call after all parameters are configured and before the first
        apply_update().

        Args:
            bound: The space in which the confetto can display

        Returns:
            The computed lifetime
        """
        for channel in self.channels:
            channel.prepare()

        lifetime = self.ttl if self.ttl is not None and self.ttl >= 0 else MAX_DURATION
        lifetime = min(lifetime, self.x.bound_crossing_time(bound.left, bound.right))
        lifetime = min(lifetime, self.y.bound_crossing_time(bound.top, bound.bottom))
        self.lifetime = lifetime
        self.prepared = True

        self.shape.configure_paint(self.paint)

        logger.debug("Prepared confetto: lifetime=%s ms, delay=%s ms", lifetime, self.initial_delay)
        return lifetime

    def reset(self):
        """Reset all internal state so the confetto can be reused"""
        for channel in self.channels:
            channel.reset()

        self.initial_delay = 0.0
        self.ttl = None
        self.fade_out = None

        self.lifetime = 0.0
        self.prepared = False

        self.current_x = 0.0
        self.current_y = 0.0
        self.current_rotation = 0.0
        self.alpha = MAX_ALPHA
        self.started = False
        self.terminated = False

    def progress(self, animated_time: float) -> float:
        """Fraction of the lifetime elapsed at animated_time"""
        if self.lifetime <= 0:
            return 1.0
        return animated_time / self.lifetime

    def apply_update(self, elapsed: float) -> bool:
        """
        Update the draw state for the given time.

        Args:
            elapsed: Time since the beginning of the whole animation

        Returns:
            Whether this confetto has terminated
        """
        animated_time = elapsed - self.initial_delay
        self.started = animated_time >= 0

        if self.started and not self.terminated:
            self.current_x = self.x.position_at(animated_time)
            self.current_y = self.y.position_at(animated_time)
            self.current_rotation = self.rotation.position_at(animated_time)

            if self.fade_out is not None:
                fraction = self.fade_out(self.progress(animated_time))
                if math.isnan(fraction):
                    fraction = 0.0
                self.alpha = int(min(max(fraction, 0.0), 1.0) * MAX_ALPHA + 0.5)
            else:
                self.alpha = MAX_ALPHA

            self.terminated = animated_time >= self.lifetime

        return self.terminated

    @property
    def active(self) -> bool:
        return self.started and not self.terminated

    def draw(self, canvas: np.ndarray) -> None:
        """
        Render this confetto on the canvas. Nothing is drawn before the
        initial delay has passed or after termination.
        """
        if self.active:
            self.matrix = np.identity(3)
            self.paint.alpha = self.alpha
            self.shape.draw(canvas, self.matrix, self.paint,
                            self.current_x, self.current_y, self.current_rotation)

    def __repr__(self):
        return (f"Confetto(x={self.current_x:.1f}, y={self.current_y:.1f}, "
                f"rotation={self.current_rotation:.1f}, alpha={self.alpha}, "
                f"started={self.started}, terminated={self.terminated})")
