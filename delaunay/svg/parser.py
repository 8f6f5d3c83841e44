"""Reading SVG documents into images made of cubic Bézier paths."""

from __future__ import annotations

import enum
import math
import os
from collections.abc import Sequence
from dataclasses import dataclass, field
from functools import reduce

from delaunay.svg.model import Gradient, GradientStop, Image, Paint, Path, Shape
from delaunay.svg.pathdata import PathBuilder, next_path_item, parse_path_data
from delaunay.svg.styles import Attributes, StyleContext
from delaunay.svg.transform import Transform, curve_bounds, parse_transform
from delaunay.svg.values import (
    Coordinate,
    PaintType,
    SpreadType,
    Units,
    atof,
    parse_coordinate_raw,
    parse_number,
    parse_units,
)
from delaunay.svg.xml import EventKind, iter_xml

Bounds = tuple[float, float, float, float]
Point = tuple[float, float]

_KAPPA90 = 0.5522847493
_MASK = 0xFFFFFFFF
_SPACE = " \t\n\v\f\r"
_MAX_ID = 63
_MAX_REF = 62
_MAX_REF_HOPS = 32
_ZERO_BOUNDS: Bounds = (0.0, 0.0, 0.0, 0.0)

# Linear and radial gradients share one set of five coordinate slots.
_GRADIENT_SLOTS = {
    "x1": 0, "cx": 0,
    "y1": 1, "cy": 1,
    "x2": 2, "r": 2,
    "y2": 3, "fx": 3,
    "fy": 4,
}


class _Align(enum.IntEnum):
    MIN = 0
    MID = 1
    MAX = 2


class _AlignType(enum.IntEnum):
    NONE = 0
    MEET = 1
    SLICE = 2


def _percent(value: float) -> Coordinate:
    return Coordinate(value, Units.PERCENT)


def _default_coords(kind: PaintType) -> list[Coordinate]:
    zero = Coordinate(0.0)
    if kind == PaintType.LINEAR_GRADIENT:
        return [_percent(0.0), _percent(0.0), _percent(100.0), _percent(0.0), zero]
    if kind == PaintType.RADIAL_GRADIENT:
        return [_percent(50.0), _percent(50.0), _percent(50.0), zero, zero]
    return [zero] * 5


@dataclass
class _GradientData:
    kind: PaintType
    id: str = ""
    ref: str = ""
    coords: list[Coordinate] = field(default_factory=list)
    spread: SpreadType = SpreadType.PAD
    object_space: bool = True
    xform: Transform = field(default_factory=Transform.identity)
    stops: list[GradientStop] = field(default_factory=list)


def _divide(a: float, b: float) -> float:
    """``a / b`` with the IEEE results for a zero divisor."""
    if b:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a)


def _union(a: Bounds, b: Bounds) -> Bounds:
    return min(a[0], b[0]), min(a[1], b[1]), max(a[2], b[2]), max(a[3], b[3])


def _points_bounds(points: Sequence[Point]) -> Bounds:
    """Union of the tight bounds of every cubic segment in ``points``."""
    boxes = []
    for start in range(0, len(points) - 1, 3):
        segment = points[start : start + 4]
        if len(segment) == 4:
            boxes.append(curve_bounds([c for p in segment for c in p]))
    return reduce(_union, boxes) if boxes else _ZERO_BOUNDS


def _with_alpha(color: int, opacity: float) -> int:
    return (color | (int(opacity * 255) << 24)) & _MASK


def _view_align(content: float, container: float, align: _Align) -> float:
    if align == _Align.MIN:
        return 0.0
    if align == _Align.MAX:
        return container - content
    return (container - content) * 0.5


class SvgParser:
    """Collects shapes from SVG markup, then scales them to the view box."""

    def __init__(self, dpi: float = 96.0) -> None:
        self._style = StyleContext(dpi)
        self._image = Image()
        self._builder = PathBuilder()
        self._pending: list[Path] = []
        self._gradients: list[_GradientData] = []
        self._align_x = _Align.MIN
        self._align_y = _Align.MIN
        self._align_type = _AlignType.NONE
        self._in_defs = False
        self._finished = False
        self._shape_elements = {
            "path": self._path,
            "rect": self._rect,
            "circle": self._circle,
            "ellipse": self._ellipse,
            "line": self._line,
            "polyline": lambda attrs: self._poly(attrs, False),
            "polygon": lambda attrs: self._poly(attrs, True),
        }
        self._gradient_elements = {
            "linearGradient": lambda attrs: self._gradient(attrs, PaintType.LINEAR_GRADIENT),
            "radialGradient": lambda attrs: self._gradient(attrs, PaintType.RADIAL_GRADIENT),
            "stop": self._stop,
        }

    def feed(self, text: str) -> None:
        """Process markup; every tag must lie wholly within ``text``."""
        if self._finished:
            raise RuntimeError("the parser has already finished")
        for event in iter_xml(text):
            if event.kind == EventKind.START:
                self._start(event.name, event.attributes)
            elif event.kind == EventKind.END:
                self._end(event.name)

    def finish(self, units: str = "px") -> Image:
        """Scale everything to the view box in ``units`` and return the image."""
        if self._finished:
            raise RuntimeError("the parser has already finished")
        self._finished = True
        self._scale_to_viewbox(units)
        return self._image

    # Elements

    def _start(self, name: str, attrs: tuple[tuple[str, str], ...]) -> None:
        if self._in_defs:
            # Only gradients are read inside defs.
            handler = self._gradient_elements.get(name)
            if handler is not None:
                handler(attrs)
            return
        if name == "g":
            self._style.push()
            self._style.parse_attributes(attrs)
        elif name in self._shape_elements:
            self._style.push()
            self._shape_elements[name](attrs)
            self._style.pop()
        elif name in self._gradient_elements:
            self._gradient_elements[name](attrs)
        elif name == "defs":
            self._in_defs = True
        elif name == "svg":
            self._svg(attrs)

    def _end(self, name: str) -> None:
        if name == "g":
            self._style.pop()
        elif name == "defs":
            self._in_defs = False

    def _path(self, attrs: Sequence[tuple[str, str]]) -> None:
        data = None
        for name, value in attrs:
            if name == "d":
                data = value
            else:
                self._style.parse_attributes([(name, value)])
        if data is not None:
            for points, closed in parse_path_data(data):
                self._add_path(points, closed)
        self._add_shape()

    def _rect(self, attrs: Sequence[tuple[str, str]]) -> None:
        style = self._style
        x = y = w = h = 0.0
        rx = ry = -1.0  # negative marks "not set"
        for name, value in attrs:
            if style.parse_attribute(name, value):
                continue
            if name == "x":
                x = style.parse_coordinate(value, style.view_minx, style.view_width)
            elif name == "y":
                y = style.parse_coordinate(value, style.view_miny, style.view_height)
            elif name == "width":
                w = style.parse_coordinate(value, 0.0, style.view_width)
            elif name == "height":
                h = style.parse_coordinate(value, 0.0, style.view_height)
            elif name == "rx":
                rx = abs(style.parse_coordinate(value, 0.0, style.view_width))
            elif name == "ry":
                ry = abs(style.parse_coordinate(value, 0.0, style.view_height))

        if rx < 0.0 and ry > 0.0:
            rx = ry
        if ry < 0.0 and rx > 0.0:
            ry = rx
        rx = min(max(rx, 0.0), w / 2.0) if rx > w / 2.0 or rx < 0.0 else rx
        ry = min(max(ry, 0.0), h / 2.0) if ry > h / 2.0 or ry < 0.0 else ry
        if w == 0.0 or h == 0.0:
            return

        b = self._builder
        b.reset()
        if rx < 0.00001 or ry < 0.0001:
            b.move_to(x, y)
            b.line_to(x + w, y)
            b.line_to(x + w, y + h)
            b.line_to(x, y + h)
        else:
            k = 1 - _KAPPA90
            b.move_to(x + rx, y)
            b.line_to(x + w - rx, y)
            b.cubic_to(x + w - rx * k, y, x + w, y + ry * k, x + w, y + ry)
            b.line_to(x + w, y + h - ry)
            b.cubic_to(x + w, y + h - ry * k, x + w - rx * k, y + h, x + w - rx, y + h)
            b.line_to(x + rx, y + h)
            b.cubic_to(x + rx * k, y + h, x, y + h - ry * k, x, y + h - ry)
            b.line_to(x, y + ry)
            b.cubic_to(x, y + ry * k, x + rx * k, y, x + rx, y)
        self._commit(True)
        self._add_shape()

    def _oval(self, cx: float, cy: float, rx: float, ry: float) -> None:
        b = self._builder
        k = _KAPPA90
        b.reset()
        b.move_to(cx + rx, cy)
        b.cubic_to(cx + rx, cy + ry * k, cx + rx * k, cy + ry, cx, cy + ry)
        b.cubic_to(cx - rx * k, cy + ry, cx - rx, cy + ry * k, cx - rx, cy)
        b.cubic_to(cx - rx, cy - ry * k, cx - rx * k, cy - ry, cx, cy - ry)
        b.cubic_to(cx + rx * k, cy - ry, cx + rx, cy - ry * k, cx + rx, cy)
        self._commit(True)
        self._add_shape()

    def _circle(self, attrs: Sequence[tuple[str, str]]) -> None:
        style = self._style
        cx = cy = r = 0.0
        for name, value in attrs:
            if style.parse_attribute(name, value):
                continue
            if name == "cx":
                cx = style.parse_coordinate(value, style.view_minx, style.view_width)
            elif name == "cy":
                cy = style.parse_coordinate(value, style.view_miny, style.view_height)
            elif name == "r":
                r = abs(style.parse_coordinate(value, 0.0, style.actual_length()))
        if r > 0.0:
            self._oval(cx, cy, r, r)

    def _ellipse(self, attrs: Sequence[tuple[str, str]]) -> None:
        style = self._style
        cx = cy = rx = ry = 0.0
        for name, value in attrs:
            if style.parse_attribute(name, value):
                continue
            if name == "cx":
                cx = style.parse_coordinate(value, style.view_minx, style.view_width)
            elif name == "cy":
                cy = style.parse_coordinate(value, style.view_miny, style.view_height)
            elif name == "rx":
                rx = abs(style.parse_coordinate(value, 0.0, style.view_width))
            elif name == "ry":
                ry = abs(style.parse_coordinate(value, 0.0, style.view_height))
        if rx > 0.0 and ry > 0.0:
            self._oval(cx, cy, rx, ry)

    def _line(self, attrs: Sequence[tuple[str, str]]) -> None:
        style = self._style
        x1 = y1 = x2 = y2 = 0.0
        for name, value in attrs:
            if style.parse_attribute(name, value):
                continue
            if name == "x1":
                x1 = style.parse_coordinate(value, style.view_minx, style.view_width)
            elif name == "y1":
                y1 = style.parse_coordinate(value, style.view_miny, style.view_height)
            elif name == "x2":
                x2 = style.parse_coordinate(value, style.view_minx, style.view_width)
            elif name == "y2":
                y2 = style.parse_coordinate(value, style.view_miny, style.view_height)
        self._builder.reset()
        self._builder.move_to(x1, y1)
        self._builder.line_to(x2, y2)
        self._commit(False)
        self._add_shape()

    def _poly(self, attrs: Sequence[tuple[str, str]], closed: bool) -> None:
        builder = self._builder
        builder.reset()
        count = 0
        for name, value in attrs:
            if self._style.parse_attribute(name, value) or name != "points":
                continue
            args: list[float] = []
            pos = 0
            while pos < len(value):
                item, pos = next_path_item(value, pos)
                args.append(atof(item))
                if len(args) >= 2:
                    if count == 0:
                        builder.move_to(args[0], args[1])
                    else:
                        builder.line_to(args[0], args[1])
                    args = []
                    count += 1
        self._commit(closed)
        self._add_shape()

    def _svg(self, attrs: Sequence[tuple[str, str]]) -> None:
        style = self._style
        for name, value in attrs:
            if style.parse_attribute(name, value):
                continue
            if name == "width":
                self._image.width = style.parse_coordinate(value, 0.0, 0.0)
            elif name == "height":
                self._image.height = style.parse_coordinate(value, 0.0, 0.0)
            elif name == "viewBox":
                if not self._view_box(value):
                    # An incomplete view box ends reading of this element.
                    return
            elif name == "preserveAspectRatio":
                self._aspect_ratio(value)

    def _view_box(self, text: str) -> bool:
        style = self._style
        values: list[float] = []
        pos = 0
        for slot in range(4):
            token, pos = parse_number(text, pos)
            values.append(atof(token))
            if slot == 3:
                break
            while pos < len(text) and (text[pos] in _SPACE or text[pos] in "%,"):
                pos += 1
            if pos >= len(text):
                break
        names = ("view_minx", "view_miny", "view_width", "view_height")
        for attr_name, value in zip(names, values):
            setattr(style, attr_name, value)
        return len(values) == 4

    def _aspect_ratio(self, text: str) -> None:
        if "none" in text:
            self._align_type = _AlignType.NONE
            return
        for axis in ("x", "y"):
            for suffix, align in (("Min", _Align.MIN), ("Mid", _Align.MID), ("Max", _Align.MAX)):
                if axis + suffix in text:
                    setattr(self, f"_align_{axis}", align)
                    break
        self._align_type = _AlignType.SLICE if "slice" in text else _AlignType.MEET

    def _gradient(self, attrs: Sequence[tuple[str, str]], kind: PaintType) -> None:
        data = _GradientData(kind, coords=_default_coords(kind))
        for name, value in attrs:
            if name == "id":
                data.id = value[:_MAX_ID]
            elif self._style.parse_attribute(name, value):
                continue
            elif name == "gradientUnits":
                data.object_space = value == "objectBoundingBox"
            elif name == "gradientTransform":
                data.xform = parse_transform(value)
            elif name in _GRADIENT_SLOTS:
                data.coords[_GRADIENT_SLOTS[name]] = parse_coordinate_raw(value)
            elif name == "spreadMethod":
                spread = {"pad": SpreadType.PAD, "reflect": SpreadType.REFLECT,
                          "repeat": SpreadType.REPEAT}.get(value)
                if spread is not None:
                    data.spread = spread
            elif name == "xlink:href":
                data.ref = value[1:][:_MAX_REF]
        self._gradients.append(data)

    def _stop(self, attrs: Sequence[tuple[str, str]]) -> None:
        current = self._style.current
        current.stop_offset = 0.0
        current.stop_color = 0
        current.stop_opacity = 1.0
        for name, value in attrs:
            self._style.parse_attribute(name, value)
        if not self._gradients:
            return
        stops = self._gradients[-1].stops
        index = next(
            (i for i, stop in enumerate(stops) if current.stop_offset < stop.offset),
            len(stops),
        )
        stops.insert(
            index,
            GradientStop(_with_alpha(current.stop_color, current.stop_opacity),
                         current.stop_offset),
        )

    # Paths and shapes

    def _commit(self, closed: bool) -> None:
        points = self._builder.commit(closed)
        if points is not None:
            self._add_path(points, closed)

    def _add_path(self, points: Sequence[Point], closed: bool) -> None:
        xform = self._style.current.xform
        mapped = [xform.apply(x, y) for x, y in points]
        # Later sub-paths come first, as in a pushed list.
        self._pending.insert(0, Path(mapped, closed, _points_bounds(mapped)))

    def _add_shape(self) -> None:
        if not self._pending:
            return
        attr = self._style.current
        paths, self._pending = self._pending, []
        scale = attr.xform.average_scale()
        shape = Shape(
            id=attr.id,
            opacity=attr.opacity,
            stroke_width=attr.stroke_width * scale,
            stroke_dash_offset=attr.stroke_dash_offset * scale,
            stroke_dash_array=[dash * scale for dash in attr.stroke_dash_array],
            stroke_line_join=attr.stroke_line_join,
            stroke_line_cap=attr.stroke_line_cap,
            miter_limit=attr.miter_limit,
            fill_rule=attr.fill_rule,
            visible=attr.visible,
            bounds=reduce(_union, (path.bounds for path in paths)),
            paths=paths,
        )
        shape.fill = self._paint(attr, paths, attr.has_fill, attr.fill_gradient,
                                 attr.fill_color, attr.fill_opacity)
        shape.stroke = self._paint(attr, paths, attr.has_stroke, attr.stroke_gradient,
                                   attr.stroke_color, attr.stroke_opacity)
        self._image.shapes.append(shape)

    def _paint(self, attr: Attributes, paths: Sequence[Path], drawn: bool,
               gradient_id: str | None, color: int, opacity: float) -> Paint:
        if not drawn:
            return Paint()
        if gradient_id is None:
            return Paint(PaintType.COLOR, color=_with_alpha(color, opacity))
        inverse = attr.xform.inverse()
        local = reduce(
            _union,
            (_points_bounds([inverse.apply(x, y) for x, y in path.points]) for path in paths),
        )
        made = self._create_gradient(gradient_id, local)
        if made is None:
            return Paint()
        gradient, kind = made
        return Paint(kind, gradient=gradient)

    def _find_gradient(self, gradient_id: str) -> _GradientData | None:
        if not gradient_id:
            return None
        return next((g for g in reversed(self._gradients) if g.id == gradient_id), None)

    def _create_gradient(self, gradient_id: str,
                         local: Bounds) -> tuple[Gradient, PaintType] | None:
        data = self._find_gradient(gradient_id)
        if data is None:
            return None

        stops: list[GradientStop] = []
        ref: _GradientData | None = data
        hops = 0
        while ref is not None:
            if ref.stops:
                stops = ref.stops
                break
            following = self._find_gradient(ref.ref)
            if following is ref:
                break
            ref = following
            hops += 1
            if hops > _MAX_REF_HOPS:
                break
        if not stops:
            return None

        style = self._style
        if data.object_space:
            ox, oy = local[0], local[1]
            sw, sh = local[2] - local[0], local[3] - local[1]
        else:
            ox, oy = style.view_minx, style.view_miny
            sw, sh = style.view_width, style.view_height
        sl = math.hypot(sw, sh) / math.sqrt(2.0)

        c = data.coords
        gradient = Gradient(spread=data.spread,
                            stops=[GradientStop(s.color, s.offset) for s in stops])
        if data.kind == PaintType.LINEAR_GRADIENT:
            x1 = style.convert_to_pixels(c[0], ox, sw)
            y1 = style.convert_to_pixels(c[1], oy, sh)
            x2 = style.convert_to_pixels(c[2], ox, sw)
            y2 = style.convert_to_pixels(c[3], oy, sh)
            dx, dy = x2 - x1, y2 - y1
            xform = Transform(dy, -dx, dx, dy, x1, y1)
        else:
            cx = style.convert_to_pixels(c[0], ox, sw)
            cy = style.convert_to_pixels(c[1], oy, sh)
            r = style.convert_to_pixels(c[2], 0.0, sl)
            fx = style.convert_to_pixels(c[3], ox, sw)
            fy = style.convert_to_pixels(c[4], oy, sh)
            xform = Transform(r, 0.0, 0.0, r, cx, cy)
            gradient.fx = _divide(fx, r)
            gradient.fy = _divide(fy, r)
        gradient.xform = xform.multiply(data.xform).multiply(style.current.xform)
        return gradient, data.kind

    # View box

    def _scale_to_viewbox(self, units: str) -> None:
        style = self._style
        image = self._image
        bounds = (reduce(_union, (shape.bounds for shape in image.shapes))
                  if image.shapes else _ZERO_BOUNDS)

        if style.view_width == 0:
            if image.width > 0:
                style.view_width = image.width
            else:
                style.view_minx = bounds[0]
                style.view_width = bounds[2] - bounds[0]
        if style.view_height == 0:
            if image.height > 0:
                style.view_height = image.height
            else:
                style.view_miny = bounds[1]
                style.view_height = bounds[3] - bounds[1]
        if image.width == 0:
            image.width = style.view_width
        if image.height == 0:
            image.height = style.view_height

        tx = -style.view_minx
        ty = -style.view_miny
        sx = image.width / style.view_width if style.view_width > 0 else 0.0
        sy = image.height / style.view_height if style.view_height > 0 else 0.0
        unit_pixels = style.convert_to_pixels(Coordinate(1.0, parse_units(units)), 0.0, 1.0)
        us = _divide(1.0, unit_pixels)

        if self._align_type != _AlignType.NONE:
            sx = sy = min(sx, sy) if self._align_type == _AlignType.MEET else max(sx, sy)
            tx += _divide(_view_align(style.view_width * sx, image.width, self._align_x), sx)
            ty += _divide(_view_align(style.view_height * sy, image.height, self._align_y), sy)

        sx *= us
        sy *= us
        average = (sx + sy) / 2.0

        def scale_bounds(b: Bounds) -> Bounds:
            return (b[0] + tx) * sx, (b[1] + ty) * sy, (b[2] + tx) * sx, (b[3] + ty) * sy

        for shape in image.shapes:
            shape.bounds = scale_bounds(shape.bounds)
            for path in shape.paths:
                path.bounds = scale_bounds(path.bounds)
                path.points = [((x + tx) * sx, (y + ty) * sy) for x, y in path.points]
            for paint in (shape.fill, shape.stroke):
                if paint.gradient is not None and paint.type in (
                    PaintType.LINEAR_GRADIENT, PaintType.RADIAL_GRADIENT
                ):
                    self._rescale_gradient(paint.gradient, tx, ty, sx, sy)
            shape.stroke_width *= average
            shape.stroke_dash_offset *= average
            shape.stroke_dash_array = [dash * average for dash in shape.stroke_dash_array]

    @staticmethod
    def _rescale_gradient(gradient: Gradient, tx: float, ty: float,
                          sx: float, sy: float) -> None:
        xform = (gradient.xform.multiply(Transform.translation(tx, ty))
                 .multiply(Transform.scaling(sx, sy)))
        det = xform.a * xform.d - xform.c * xform.b
        # A nearly singular transform is kept as it is.
        gradient.xform = xform if -1e-6 < det < 1e-6 else xform.inverse()


def parse(text: str, units: str = "px", dpi: float = 96.0) -> Image:
    """Parse an SVG document held in a string."""
    parser = SvgParser(dpi)
    parser.feed(text)
    return parser.finish(units)


def parse_file(filename: str | os.PathLike[str], units: str = "px",
               dpi: float = 96.0) -> Image:
    """Parse an SVG document read from a file."""
    with open(filename, encoding="utf-8", errors="replace") as handle:
        text = handle.read()
    return parse(text, units, dpi)