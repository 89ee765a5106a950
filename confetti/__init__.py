"""
Confetti - Deterministic per-particle kinematics for confetti animations
"""

from .core import (
    MAX_DURATION, MotionChannel,
    compute_time_to_reach_target, compute_bound_crossing_time, displacement,
    Bound, Confetto,
    Paint, ConfettoShape, CircleShape, SquareShape, BitmapShape, blank_canvas,
    get_easing, inverted, fade_out_after,
    MotionPreset, PresetManager, apply_preset,
)

__version__ = "0.1.0"
__all__ = [
    'MAX_DURATION',
    'MotionChannel',
    'compute_time_to_reach_target',
    'compute_bound_crossing_time',
    'displacement',
    'Bound',
    'Confetto',
    'Paint',
    'ConfettoShape',
    'CircleShape',
    'SquareShape',
    'BitmapShape',
    'blank_canvas',
    'get_easing',
    'inverted',
    'fade_out_after',
    'MotionPreset',
    'PresetManager',
    'apply_preset',
]
