"""The result of reading an SVG document: images, shapes, paths and paints."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from delaunay.svg.transform import Transform
from delaunay.svg.values import FillRule, LineCap, LineJoin, PaintType, SpreadType

Bounds = tuple[float, float, float, float]


@dataclass
class GradientStop:
    """A colour (``0xAABBGGRR``) at an offset along a gradient."""

    color: int
    offset: float


@dataclass
class Gradient:
    """A resolved gradient; ``xform`` maps image space to gradient space."""

    xform: Transform = field(default_factory=Transform.identity)
    spread: SpreadType = SpreadType.PAD
    fx: float = 0.0
    fy: float = 0.0
    stops: list[GradientStop] = field(default_factory=list)


@dataclass
class Paint:
    """How a fill or stroke is drawn."""

    type: PaintType = PaintType.NONE
    color: int = 0
    gradient: Gradient | None = None


@dataclass
class Path:
    """A run of cubic Bézier segments sharing end points.

    ``points`` holds ``1 + 3*n`` points for ``n`` segments.
    """

    points: list[tuple[float, float]] = field(default_factory=list)
    closed: bool = False
    bounds: Bounds = (0.0, 0.0, 0.0, 0.0)

    def copy(self) -> Path:
        """An independent duplicate of this path."""
        return Path(list(self.points), self.closed, self.bounds)

    def curves(self) -> Iterator[tuple[float, ...]]:
        """Yield each segment as eight numbers ``x0, y0, ..., x3, y3``."""
        for start in range(0, len(self.points) - 1, 3):
            segment = self.points[start : start + 4]
            if len(segment) < 4:
                return
            yield tuple(coord for point in segment for coord in point)


@dataclass
class Shape:
    """A drawable element with its style and its paths."""

    id: str = ""
    fill: Paint = field(default_factory=Paint)
    stroke: Paint = field(default_factory=Paint)
    opacity: float = 1.0
    stroke_width: float = 0.0
    stroke_dash_offset: float = 0.0
    stroke_dash_array: list[float] = field(default_factory=list)
    stroke_line_join: LineJoin = LineJoin.MITER
    stroke_line_cap: LineCap = LineCap.BUTT
    miter_limit: float = 4.0
    fill_rule: FillRule = FillRule.NONZERO
    visible: bool = True
    bounds: Bounds = (0.0, 0.0, 0.0, 0.0)
    paths: list[Path] = field(default_factory=list)


@dataclass
class Image:
    """A parsed SVG document."""

    width: float = 0.0
    height: float = 0.0
    shapes: list[Shape] = field(default_factory=list)