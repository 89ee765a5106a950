"""
Fade Curves & Easing

A fade curve maps normalized lifetime progress (0 = just started,
1 = about to terminate) to an opacity fraction (0 = invisible, 1 = opaque).

Plain easing curves rise from 0 to 1, which reads as a fade *in*.
Wrap them with inverted() or fade_out_after() to fade confetti out
as it approaches the end of its life.

Curve families:
- Linear: Constant rate
- Quad/Cubic: Polynomial curves
- Sine: Gentle, natural
- Expo: Dramatic
- Bezier: CSS-style cubic-bezier(x1, y1, x2, y2), for hand-tuned fade
  shapes such as "hold, then drop off sharply" (wrap with inverted())
"""

import numpy as np
from dataclasses import dataclass
from typing import Callable, Union

FadeCurve = Callable[[float], float]


# =============================================================================
# Core Easing Functions
# =============================================================================

def linear(t: float) -> float:
    """Constant rate"""
    return t


def ease_in_quad(t: float) -> float:
    """Quadratic ease in - slow start"""
    return t * t


def ease_out_quad(t: float) -> float:
    """Quadratic ease out - slow end"""
    return t * (2 - t)


def ease_in_out_quad(t: float) -> float:
    if t < 0.5:
        return 2 * t * t
    return -1 + (4 - 2 * t) * t


def ease_in_cubic(t: float) -> float:
    return t * t * t


def ease_out_cubic(t: float) -> float:
    t1 = t - 1
    return t1 * t1 * t1 + 1


def ease_in_sine(t: float) -> float:
    return float(1 - np.cos(t * np.pi / 2))


def ease_out_sine(t: float) -> float:
    return float(np.sin(t * np.pi / 2))


def ease_in_out_sine(t: float) -> float:
    """Very smooth, good for long-lived confetti"""
    return float(0.5 * (1 - np.cos(np.pi * t)))


def ease_in_expo(t: float) -> float:
    """Stays near zero for most of the range, then shoots up"""
    if t <= 0:
        return 0.0
    return 2 ** (10 * (t - 1))


def ease_out_expo(t: float) -> float:
    if t >= 1:
        return 1.0
    return 1 - 2 ** (-10 * t)


# =============================================================================
# Bezier Curves
# =============================================================================

@dataclass(frozen=True)
class BezierCurve:
    """
    Cubic Bezier curve, same as CSS cubic-bezier(), used to shape how a
    confetto fades. Progress outside [0, 1] is clamped before solving.

    Control points: P0=(0,0), P1=(x1,y1), P2=(x2,y2), P3=(1,1)
    """
    x1: float
    y1: float
    x2: float
    y2: float

    def __call__(self, t: float) -> float:
        progress = min(max(t, 0.0), 1.0)
        return _bezier(self.y1, self.y2, self._param_for(progress))

    def _param_for(self, progress: float, epsilon: float = 1e-7) -> float:
        """Curve parameter whose x equals progress"""
        s = progress
        for _ in range(8):
            error = _bezier(self.x1, self.x2, s) - progress
            if abs(error) < epsilon:
                return s
            slope = _bezier_slope(self.x1, self.x2, s)
            if abs(slope) < epsilon:
                break
            s = min(max(s - error / slope, 0.0), 1.0)

        # x(s) is monotonic for x1, x2 in [0, 1], so bisection always converges
        lo, hi = 0.0, 1.0
        s = progress
        for _ in range(64):
            error = _bezier(self.x1, self.x2, s) - progress
            if abs(error) < epsilon:
                break
            if error < 0:
                lo = s
            else:
                hi = s
            s = (lo + hi) / 2
        return s


def _bezier(p1: float, p2: float, s: float) -> float:
    """One coordinate of a cubic bezier from 0 to 1 with inner points p1, p2"""
    inv = 1 - s
    return 3 * inv * inv * s * p1 + 3 * inv * s * s * p2 + s * s * s


def _bezier_slope(p1: float, p2: float, s: float) -> float:
    inv = 1 - s
    return 3 * inv * inv * p1 + 6 * inv * s * (p2 - p1) + 3 * s * s * (1 - p2)


def custom_bezier(x1: float, y1: float, x2: float, y2: float) -> FadeCurve:
    """
    Create a cubic bezier curve.

    Example:
        # Material "decelerate", then flipped to fade out
        fade = inverted(custom_bezier(0.0, 0.0, 0.2, 1.0))
    """
    return BezierCurve(x1, y1, x2, y2)


# =============================================================================
# Fade-out Builders
# =============================================================================

def clamped(curve: FadeCurve) -> FadeCurve:
    """Clamp progress into [0, 1] before evaluating the curve"""
    def _clamped(t: float) -> float:
        return curve(min(max(t, 0.0), 1.0))
    return _clamped


def inverted(curve: Union[str, FadeCurve]) -> FadeCurve:
    """
    Flip a rising curve into a fade-out: 1 at progress 0, 0 at progress 1.
    """
    if isinstance(curve, str):
        curve = get_easing(curve)

    def _inverted(t: float) -> float:
        return 1.0 - curve(t)
    return _inverted


def fade_out_after(start: float, curve: Union[str, FadeCurve] = 'linear') -> FadeCurve:
    """
    Fully opaque until progress reaches start, then fade to 0 at progress 1.

    Args:
        start: Progress (0-1) at which fading begins
        curve: Easing used for the fading part
    """
    if isinstance(curve, str):
        curve = get_easing(curve)
    span = 1.0 - start

    def _fade(t: float) -> float:
        if t <= start:
            return 1.0
        if span <= 0 or t >= 1:
            return 0.0
        return 1.0 - curve((t - start) / span)
    return _fade


# Common fade-outs
fade_linear = inverted(linear)
fade_late = fade_out_after(0.7, linear)
fade_quick = inverted(ease_out_quad)


# =============================================================================
# Registry & Utilities
# =============================================================================

EASING_FUNCTIONS = {
    'linear': linear,

    'ease_in_quad': ease_in_quad,
    'ease_out_quad': ease_out_quad,
    'ease_in_out_quad': ease_in_out_quad,
    'ease_in_cubic': ease_in_cubic,
    'ease_out_cubic': ease_out_cubic,

    'ease_in_sine': ease_in_sine,
    'ease_out_sine': ease_out_sine,
    'ease_in_out_sine': ease_in_out_sine,

    'ease_in_expo': ease_in_expo,
    'ease_out_expo': ease_out_expo,

    # Fade-outs
    'fade_linear': fade_linear,
    'fade_late': fade_late,
    'fade_quick': fade_quick,
}


def get_easing(name: str) -> FadeCurve:
    """
    Get a curve by name.

    Raises:
        ValueError: If the name is not registered
    """
    if name not in EASING_FUNCTIONS:
        available = ', '.join(sorted(EASING_FUNCTIONS.keys()))
        raise ValueError(f"Unknown easing '{name}'. Available: {available}")
    return EASING_FUNCTIONS[name]


def generate_easing_curve(curve: Union[str, FadeCurve], samples: int = 100) -> np.ndarray:
    """
    Sample a curve over [0, 1] for plotting or lookup tables.

    Returns:
        Array of shape (samples,)
    """
    if isinstance(curve, str):
        curve = get_easing(curve)

    t_values = np.linspace(0, 1, samples)
    return np.array([curve(t) for t in t_values])
