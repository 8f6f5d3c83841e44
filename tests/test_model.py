from delaunay.svg.model import Gradient, GradientStop, Image, Paint, Path, Shape
from delaunay.svg.transform import Transform
from delaunay.svg.values import FillRule, LineCap, LineJoin, PaintType, SpreadType


def _two_segment_path():
    points = [(0.0, 0.0), (1.0, 0.0), (2.0, 0.0), (3.0, 0.0), (3.0, 1.0), (3.0, 2.0), (3.0, 3.0)]
    return Path(points, closed=True, bounds=(0.0, 0.0, 3.0, 3.0))


def test_path_copy_is_equal_and_independent():
    original = _two_segment_path()
    duplicate = original.copy()
    assert duplicate == original
    duplicate.points.append((9.0, 9.0))
    assert len(original.points) == 7
    assert duplicate.closed is True
    assert duplicate.bounds == original.bounds


def test_path_curves_split_into_segments():
    curves = list(_two_segment_path().curves())
    assert len(curves) == 2
    assert curves[0] == (0.0, 0.0, 1.0, 0.0, 2.0, 0.0, 3.0, 0.0)
    assert curves[1][:2] == curves[0][6:]
    assert all(len(curve) == 8 for curve in curves)


def test_empty_path_has_no_curves():
    assert list(Path().curves()) == []


def test_paint_defaults_to_none():
    paint = Paint()
    assert paint.type is PaintType.NONE
    assert paint.gradient is None


def test_shape_defaults_match_svg_initial_style():
    shape = Shape()
    assert shape.miter_limit == 4.0
    assert shape.stroke_line_join is LineJoin.MITER
    assert shape.stroke_line_cap is LineCap.BUTT
    assert shape.fill_rule is FillRule.NONZERO
    assert shape.visible is True
    assert shape.paths == []


def test_shapes_do_not_share_lists():
    first, second = Shape(), Shape()
    first.paths.append(Path())
    assert second.paths == []


def test_image_holds_shapes():
    shape = Shape(id="outline", paths=[_two_segment_path()])
    image = Image(width=10.0, height=20.0, shapes=[shape])
    assert image.shapes[0].id == "outline"
    assert image.width == 10.0
    assert Image().shapes == []


def test_gradient_with_stops():
    stops = [GradientStop(0xFF0000FF, 0.0), GradientStop(0xFFFF0000, 1.0)]
    gradient = Gradient(Transform.identity(), SpreadType.REFLECT, 0.0, 0.0, stops)
    paint = Paint(PaintType.LINEAR_GRADIENT, gradient=gradient)
    assert paint.gradient.stops[1].offset == 1.0
    assert paint.gradient.spread is SpreadType.REFLECT
    assert Gradient().xform == Transform.identity()