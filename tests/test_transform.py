import math

import pytest

from delaunay.svg.transform import (
    Transform,
    curve_bounds,
    eval_bezier,
    parse_transform,
)


def approx_transform(t):
    return pytest.approx(tuple(t))


def test_identity_leaves_points_alone():
    assert Transform.identity().apply(3.5, -2.0) == (3.5, -2.0)


def test_translation_moves_points():
    assert Transform.translation(10.0, 20.0).apply(1.0, 2.0) == (11.0, 22.0)


def test_apply_vector_ignores_translation():
    t = Transform.translation(5.0, 7.0).multiply(Transform.scaling(2.0, 3.0))
    assert t.apply_vector(1.0, 1.0) == (2.0, 3.0)


def test_multiply_applies_self_first():
    t = Transform.translation(1.0, 0.0).multiply(Transform.scaling(2.0, 2.0))
    x, y = t.apply(1.0, 1.0)
    sx, sy = Transform.scaling(2.0, 2.0).apply(*Transform.translation(1.0, 0.0).apply(1.0, 1.0))
    assert (x, y) == (sx, sy)


def test_premultiply_applies_other_first():
    a = Transform.translation(1.0, 2.0)
    b = Transform.rotation(0.3)
    assert tuple(a.premultiply(b)) == tuple(b.multiply(a))


def test_inverse_round_trip():
    t = Transform(2.0, 0.5, -1.0, 3.0, 4.0, -6.0)
    x, y = t.apply(1.25, -0.75)
    assert t.inverse().apply(x, y) == pytest.approx((1.25, -0.75))


def test_inverse_of_singular_is_identity():
    assert Transform.scaling(0.0, 1.0).inverse() == Transform.identity()


def test_average_scale_of_uniform_scaling():
    assert Transform.scaling(3.0, 3.0).average_scale() == pytest.approx(3.0)


def test_rotation_preserves_length():
    x, y = Transform.rotation(1.1).apply(3.0, 4.0)
    assert math.hypot(x, y) == pytest.approx(5.0)


def test_parse_translate():
    assert parse_transform("translate(10,20)") == Transform.translation(10.0, 20.0)


def test_parse_translate_single_argument():
    assert parse_transform("translate(7)") == Transform.translation(7.0, 0.0)


def test_parse_scale_single_argument_is_uniform():
    assert parse_transform("scale(2)") == Transform.scaling(2.0, 2.0)


def test_parse_rotate_degrees():
    assert approx_transform(parse_transform("rotate(90)")) == tuple(
        Transform.rotation(math.pi / 2)
    )


def test_parse_rotate_about_centre_keeps_centre_fixed():
    t = parse_transform("rotate(45 3 4)")
    assert t.apply(3.0, 4.0) == pytest.approx((3.0, 4.0))


def test_parse_matrix():
    assert parse_transform("matrix(1 2 3 4 5 6)") == Transform(1, 2, 3, 4, 5, 6)


def test_parse_matrix_with_wrong_count_is_ignored():
    assert parse_transform("matrix(1 2 3)") == Transform.identity()


def test_parse_too_many_arguments_is_ignored():
    assert parse_transform("translate(1 2 3)") == Transform.identity()


def test_parse_skew():
    assert approx_transform(parse_transform("skewX(30)")) == tuple(
        Transform.skew_x(math.pi / 6)
    )
    assert approx_transform(parse_transform("skewY(30)")) == tuple(
        Transform.skew_y(math.pi / 6)
    )


def test_parse_list_applies_rightmost_first():
    t = parse_transform("translate(10 0) scale(2)")
    expected = Transform.scaling(2.0, 2.0).multiply(Transform.translation(10.0, 0.0))
    assert t == expected


def test_parse_garbage_is_identity():
    assert parse_transform("nonsense") == Transform.identity()


def test_eval_bezier_endpoints():
    assert eval_bezier(0.0, 1.0, 5.0, 9.0, 2.0) == 1.0
    assert eval_bezier(1.0, 1.0, 5.0, 9.0, 2.0) == 2.0


def test_curve_bounds_of_straight_segment():
    curve = [0.0, 0.0, 1.0, 1.0, 2.0, 2.0, 3.0, 3.0]
    assert curve_bounds(curve) == (0.0, 0.0, 3.0, 3.0)


def test_curve_bounds_contains_sampled_points():
    curve = [0.0, 0.0, 1.0, 5.0, 3.0, -4.0, 4.0, 0.0]
    minx, miny, maxx, maxy = curve_bounds(curve)
    for k in range(101):
        t = k / 100
        x = eval_bezier(t, curve[0], curve[2], curve[4], curve[6])
        y = eval_bezier(t, curve[1], curve[3], curve[5], curve[7])
        assert minx - 1e-9 <= x <= maxx + 1e-9
        assert miny - 1e-9 <= y <= maxy + 1e-9
    assert maxy > 0.0
    assert miny < 0.0


def test_curve_bounds_requires_eight_values():
    with pytest.raises(ValueError):
        curve_bounds([0.0, 1.0, 2.0])