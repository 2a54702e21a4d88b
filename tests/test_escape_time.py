import pytest

from fractals.base import ComplexPoint, MAX_ITERATION
from fractals.escape_time import evaluate
from fractals.validation import InvalidParameter


def test_origin_never_escapes():
    assert evaluate(ComplexPoint(0.0, 0.0)) == (MAX_ITERATION, False)
    assert MAX_ITERATION == 64


def test_far_point_escapes_on_first_check():
    result = evaluate(ComplexPoint(2.0, 2.0))
    assert result.escaped
    assert result.iterations == 2


def test_top_left_corner_of_default_view_escapes():
    assert evaluate(ComplexPoint(-2.0, -1.0)) == (2, True)


def test_point_in_main_cardioid_is_bounded():
    assert evaluate(ComplexPoint(-0.5, 0.0)) == (MAX_ITERATION, False)


def test_julia_uses_seed_and_constant_separately():
    # z0 = 0 is kept for one iteration before z = c is tested
    assert evaluate(ComplexPoint(0.0, 0.0), ComplexPoint(2.0, 2.0)) == (3, True)


def test_custom_iteration_cap():
    assert evaluate(ComplexPoint(0.0, 0.0), max_iter=10) == (10, False)


def test_counts_stay_in_range_and_are_deterministic():
    points = [ComplexPoint(x / 7.0, y / 5.0) for x in range(-14, 8) for y in range(-5, 6)]
    first = [evaluate(p) for p in points]
    second = [evaluate(p) for p in points]
    assert first == second
    for n, escaped in first:
        assert 1 <= n <= MAX_ITERATION
        if not escaped:
            assert n == MAX_ITERATION


def test_smallest_cap_is_honored():
    assert evaluate(ComplexPoint(0.0, 0.0), max_iter=2) == (2, False)


@pytest.mark.parametrize("max_iter", [0, 1])
def test_caps_below_two_are_rejected(max_iter):
    with pytest.raises(InvalidParameter):
        evaluate(ComplexPoint(0.0, 0.0), max_iter=max_iter)
