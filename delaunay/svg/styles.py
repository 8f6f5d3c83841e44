"""Presentation attributes of SVG elements and the inherited style stack."""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from delaunay.svg.colors import parse_color, rgb
from delaunay.svg.transform import Transform, parse_transform
from delaunay.svg.values import (
    Coordinate,
    FillRule,
    LineCap,
    LineJoin,
    Units,
    parse_coordinate_raw,
    parse_fill_rule,
    parse_line_cap,
    parse_line_join,
    parse_miter_limit,
    parse_opacity,
    parse_url,
)

_SPACE = " \t\n\v\f\r"
_MAX_DEPTH = 128
_MAX_DASHES = 8
_MAX_ID = 63
_MAX_NAME_VALUE = 511

_DASH_SEPARATOR = re.compile(r"[ \t\n\v\f\r,]+")


@dataclass
class Attributes:
    """The style in effect for an element.

    ``has_fill``/``has_stroke`` say whether the paint is drawn; when it is,
    a non-``None`` gradient id means the paint refers to a gradient.
    """

    id: str = ""
    xform: Transform = field(default_factory=Transform.identity)
    fill_color: int = rgb(0, 0, 0)
    stroke_color: int = rgb(0, 0, 0)
    opacity: float = 1.0
    fill_opacity: float = 1.0
    stroke_opacity: float = 1.0
    has_fill: bool = True
    fill_gradient: str | None = None
    has_stroke: bool = False
    stroke_gradient: str | None = None
    stroke_width: float = 1.0
    stroke_dash_offset: float = 0.0
    stroke_dash_array: list[float] = field(default_factory=list)
    stroke_line_join: LineJoin = LineJoin.MITER
    stroke_line_cap: LineCap = LineCap.BUTT
    miter_limit: float = 4.0
    fill_rule: FillRule = FillRule.NONZERO
    font_size: float = 0.0
    stop_color: int = 0
    stop_opacity: float = 1.0
    stop_offset: float = 0.0
    visible: bool = True

    def copy(self) -> Attributes:
        """An independent duplicate."""
        return replace(self, stroke_dash_array=list(self.stroke_dash_array))


class StyleContext:
    """A stack of inherited attributes plus the view box used to resolve lengths."""

    def __init__(self, dpi: float = 96.0) -> None:
        self.dpi = dpi
        self.view_minx = 0.0
        self.view_miny = 0.0
        self.view_width = 0.0
        self.view_height = 0.0
        self._stack: list[Attributes] = [Attributes()]

    @property
    def current(self) -> Attributes:
        """The attributes at the top of the stack."""
        return self._stack[-1]

    @property
    def depth(self) -> int:
        return len(self._stack)

    def push(self) -> None:
        """Enter a nested element that inherits the current style."""
        if len(self._stack) < _MAX_DEPTH:
            self._stack.append(self.current.copy())

    def pop(self) -> None:
        """Leave a nested element; the root style is never removed."""
        if len(self._stack) > 1:
            self._stack.pop()

    def actual_length(self) -> float:
        """The normalised diagonal of the view box, used for percentages."""
        return math.hypot(self.view_width, self.view_height) / math.sqrt(2.0)

    def convert_to_pixels(self, coord: Coordinate, orig: float, length: float) -> float:
        """Convert a coordinate to user-space pixels."""
        value = coord.value
        units = coord.units
        if units == Units.PT:
            return value / 72.0 * self.dpi
        if units == Units.PC:
            return value / 6.0 * self.dpi
        if units == Units.MM:
            return value / 25.4 * self.dpi
        if units == Units.CM:
            return value / 2.54 * self.dpi
        if units == Units.IN:
            return value * self.dpi
        if units == Units.EM:
            return value * self.current.font_size
        if units == Units.EX:
            # x-height of Helvetica.
            return value * self.current.font_size * 0.52
        if units == Units.PERCENT:
            return orig + value / 100.0 * length
        return value

    def parse_coordinate(self, text: str, orig: float, length: float) -> float:
        """Parse a length with optional unit and convert it to pixels."""
        return self.convert_to_pixels(parse_coordinate_raw(text), orig, length)

    def parse_dash_array(self, text: str) -> list[float]:
        """Parse ``stroke-dasharray``; ``none`` or an all-zero pattern give ``[]``."""
        if text.startswith("n"):
            return []
        items = [item[:_MAX_ID] for item in _DASH_SEPARATOR.split(text) if item]
        dashes = [
            abs(self.parse_coordinate(item, 0.0, self.actual_length()))
            for item in items[:_MAX_DASHES]
        ]
        if sum(dashes) <= 1e-6:
            return []
        return dashes

    def parse_attribute(self, name: str, value: str) -> bool:
        """Apply one presentation attribute; return whether it was recognised."""
        attr = self.current
        if name == "style":
            self.parse_style(value)
        elif name == "display":
            # One display:none hides the whole subtree; inline does not undo it.
            if value == "none":
                attr.visible = False
        elif name == "fill":
            attr.has_fill, attr.fill_gradient, color = self._paint(value)
            if color is not None:
                attr.fill_color = color
        elif name == "opacity":
            attr.opacity = parse_opacity(value)
        elif name == "fill-opacity":
            attr.fill_opacity = parse_opacity(value)
        elif name == "stroke":
            attr.has_stroke, attr.stroke_gradient, color = self._paint(value)
            if color is not None:
                attr.stroke_color = color
        elif name == "stroke-width":
            attr.stroke_width = self.parse_coordinate(value, 0.0, self.actual_length())
        elif name == "stroke-dasharray":
            attr.stroke_dash_array = self.parse_dash_array(value)
        elif name == "stroke-dashoffset":
            attr.stroke_dash_offset = self.parse_coordinate(value, 0.0, self.actual_length())
        elif name == "stroke-opacity":
            attr.stroke_opacity = parse_opacity(value)
        elif name == "stroke-linecap":
            attr.stroke_line_cap = parse_line_cap(value)
        elif name == "stroke-linejoin":
            attr.stroke_line_join = parse_line_join(value)
        elif name == "stroke-miterlimit":
            attr.miter_limit = parse_miter_limit(value)
        elif name == "fill-rule":
            attr.fill_rule = parse_fill_rule(value)
        elif name == "font-size":
            attr.font_size = self.parse_coordinate(value, 0.0, self.actual_length())
        elif name == "transform":
            attr.xform = attr.xform.premultiply(parse_transform(value))
        elif name == "stop-color":
            attr.stop_color = parse_color(value)
        elif name == "stop-opacity":
            attr.stop_opacity = parse_opacity(value)
        elif name == "offset":
            attr.stop_offset = self.parse_coordinate(value, 0.0, 1.0)
        elif name == "id":
            attr.id = value[:_MAX_ID]
        else:
            return False
        return True

    @staticmethod
    def _paint(value: str) -> tuple[bool, str | None, int | None]:
        if value == "none":
            return False, None, None
        if value.startswith("url("):
            return True, parse_url(value), None
        return True, None, parse_color(value)

    def _parse_declaration(self, declaration: str) -> bool:
        name, _, value = declaration.partition(":")
        name = name.rstrip(_SPACE + ":")[:_MAX_NAME_VALUE]
        value = value.lstrip(_SPACE + ":")[:_MAX_NAME_VALUE]
        return self.parse_attribute(name, value)

    def parse_style(self, text: str) -> None:
        """Apply a ``style`` attribute of ``name: value`` declarations."""
        for declaration in text.split(";"):
            self._parse_declaration(declaration.strip(_SPACE))

    def parse_attributes(self, attrs: Iterable[tuple[str, str]]) -> None:
        """Apply every ``(name, value)`` pair in order."""
        for name, value in attrs:
            if name == "style":
                self.parse_style(value)
            else:
                self.parse_attribute(name, value)