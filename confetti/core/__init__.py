"""
Confetti - Core kinematics, shapes, fade curves and presets
"""

from .kinematics import (
    # Solvers
    MAX_DURATION,
    compute_time_to_reach_target, compute_bound_crossing_time, displacement,
    # Channel
    MotionChannel,
)
from .shapes import (
    Paint, ConfettoShape,
    CircleShape, SquareShape, BitmapShape,
    blank_canvas, composite,
)
from .confetto import Bound, Confetto
from .easing import (
    linear,
    ease_in_quad, ease_out_quad, ease_in_out_quad,
    ease_in_cubic, ease_out_cubic,
    ease_in_sine, ease_out_sine, ease_in_out_sine,
    ease_in_expo, ease_out_expo,
    BezierCurve, custom_bezier,
    clamped, inverted, fade_out_after,
    fade_linear, fade_late, fade_quick,
    EASING_FUNCTIONS, get_easing, generate_easing_curve,
)
from .presets import (
    MotionPreset, BUILTIN_PRESETS, PresetManager,
    get_preset_manager, get_preset, list_presets, apply_preset,
)

__all__ = [
    # Kinematics
    'MAX_DURATION',
    'compute_time_to_reach_target', 'compute_bound_crossing_time', 'displacement',
    'MotionChannel',
    # Shapes
    'Paint', 'ConfettoShape',
    'CircleShape', 'SquareShape', 'BitmapShape',
    'blank_canvas', 'composite',
    # Confetto
    'Bound', 'Confetto',
    # Easing
    'linear',
    'ease_in_quad', 'ease_out_quad', 'ease_in_out_quad',
    'ease_in_cubic', 'ease_out_cubic',
    'ease_in_sine', 'ease_out_sine', 'ease_in_out_sine',
    'ease_in_expo', 'ease_out_expo',
    'BezierCurve', 'custom_bezier',
    'clamped', 'inverted', 'fade_out_after',
    'fade_linear', 'fade_late', 'fade_quick',
    'EASING_FUNCTIONS', 'get_easing', 'generate_easing_curve',
    # Presets
    'MotionPreset', 'BUILTIN_PRESETS', 'PresetManager',
    'get_preset_manager', 'get_preset', 'list_presets', 'apply_preset',
]
