import pytest

from confetti.core.easing import (
    EASING_FUNCTIONS,
    clamped,
    custom_bezier,
    ease_in_expo,
    fade_late,
    fade_out_after,
    generate_easing_curve,
    get_easing,
    inverted,
    linear,
)


@pytest.mark.parametrize("name", sorted(EASING_FUNCTIONS))
def test_rising_curves_hit_endpoints(name):
    curve = get_easing(name)
    start, end = curve(0.0), curve(1.0)
    if name.startswith('fade_'):
        assert (start, end) == pytest.approx((1.0, 0.0), abs=1e-3)
    else:
        assert (start, end) == pytest.approx((0.0, 1.0), abs=1e-3)


def test_unknown_easing_lists_available_names():
    with pytest.raises(ValueError, match="fade_linear"):
        get_easing("wobble")


def test_inverted_accepts_names_and_callables():
    assert inverted('linear')(0.25) == pytest.approx(0.75)
    assert inverted(linear)(1.0) == pytest.approx(0.0)


def test_fade_out_after_holds_then_fades():
    fade = fade_out_after(0.5)
    assert fade(0.25) == 1.0
    assert fade(0.5) == 1.0
    assert fade(0.75) == pytest.approx(0.5)
    assert fade(1.0) == 0.0
    assert fade(1.5) == 0.0


def test_fade_out_after_full_hold():
    fade = fade_out_after(1.0)
    assert fade(0.99) == 1.0
    assert fade(1.0) == 1.0
    assert fade(1.01) == 0.0


def test_fade_late_starts_at_seventy_percent():
    assert fade_late(0.7) == 1.0
    assert fade_late(0.85) == pytest.approx(0.5)


def test_clamped_limits_progress():
    curve = clamped(linear)
    assert curve(-1.0) == 0.0
    assert curve(2.0) == 1.0
    assert ease_in_expo(-1.0) == 0.0


def test_bezier_identity_curve():
    curve = custom_bezier(0.0, 0.0, 1.0, 1.0)
    for t in (0.0, 0.2, 0.5, 0.9, 1.0):
        assert curve(t) == pytest.approx(t, abs=1e-4)


def test_bezier_ease_out_is_ahead_of_linear():
    curve = custom_bezier(0.0, 0.0, 0.58, 1.0)
    assert curve(0.5) > 0.5


def test_generate_easing_curve():
    samples = generate_easing_curve('ease_in_quad', samples=5)
    assert samples.shape == (5,)
    assert list(samples) == pytest.approx([0.0, 0.0625, 0.25, 0.5625, 1.0])


def test_bezier_clamps_progress():
    curve = custom_bezier(0.42, 0.0, 0.58, 1.0)
    assert curve(-0.5) == pytest.approx(0.0)
    assert curve(1.5) == pytest.approx(1.0)
    assert curve(0.5) == pytest.approx(0.5, abs=1e-4)
