"""SVG path data: tokenizing the ``d`` attribute and building cubic Bézier runs."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from delaunay.svg.transform import Transform
from delaunay.svg.values import atof, is_coordinate, parse_number

_SPACE = " \t\n\v\f\r"
_NUMBER_START = "-+.0123456789"
_MAX_ITEM = 64
_MAX_ARGS = 10

Point = tuple[float, float]

_ARGS_PER_COMMAND = {
    "v": 1, "V": 1, "h": 1, "H": 1,
    "m": 2, "M": 2, "l": 2, "L": 2, "t": 2, "T": 2,
    "q": 4, "Q": 4, "s": 4, "S": 4,
    "c": 6, "C": 6,
    "a": 7, "A": 7,
    "z": 0, "Z": 0,
}


class PathBuilder:
    """Accumulates the points of one sub-path as ``1 + 3*n`` Bézier points."""

    def __init__(self) -> None:
        self.points: list[Point] = []

    def reset(self) -> None:
        """Forget all points."""
        self.points.clear()

    def move_to(self, x: float, y: float) -> None:
        """Set the start point, replacing the last point if there is one."""
        if self.points:
            self.points[-1] = (x, y)
        else:
            self.points.append((x, y))

    def line_to(self, x: float, y: float) -> None:
        """Append a straight segment as a cubic; ignored before a start point."""
        if not self.points:
            return
        px, py = self.points[-1]
        dx, dy = x - px, y - py
        self.points.append((px + dx / 3.0, py + dy / 3.0))
        self.points.append((x - dx / 3.0, y - dy / 3.0))
        self.points.append((x, y))

    def cubic_to(
        self, cx1: float, cy1: float, cx2: float, cy2: float, x: float, y: float
    ) -> None:
        """Append a cubic segment; ignored before a start point."""
        if not self.points:
            return
        self.points.extend(((cx1, cy1), (cx2, cy2), (x, y)))

    def commit(self, closed: bool) -> list[Point] | None:
        """Finish the sub-path and return a copy of its points.

        A closed sub-path first gets a segment back to its start. Returns
        ``None`` when there are fewer than four points or the count is not
        ``1 + 3*n``.
        """
        if len(self.points) < 4:
            return None
        if closed:
            self.line_to(*self.points[0])
        if len(self.points) % 3 != 1:
            return None
        return list(self.points)


def next_path_item(text: str, pos: int = 0) -> tuple[str, int]:
    """Read the next number or one-letter command at ``pos``.

    Returns the item (empty at the end of the text) and the position after it.
    """
    n = len(text)
    while pos < n and (text[pos] in _SPACE or text[pos] == ","):
        pos += 1
    if pos >= n:
        return "", pos
    if text[pos] in _NUMBER_START:
        return parse_number(text, pos)
    return text[pos], pos + 1


def args_per_command(command: str) -> int | None:
    """The number of arguments a path command takes, or ``None`` if unknown."""
    return _ARGS_PER_COMMAND.get(command)


def _vector_angle(ux: float, uy: float, vx: float, vy: float) -> float:
    denominator = math.hypot(ux, uy) * math.hypot(vx, vy)
    ratio = (ux * vx + uy * vy) / denominator if denominator else 1.0
    ratio = min(max(ratio, -1.0), 1.0)
    return (-1.0 if ux * vy < uy * vx else 1.0) * math.acos(ratio)


@dataclass
class _Pen:
    builder: PathBuilder
    x: float = 0.0
    y: float = 0.0
    ctrl_x: float = 0.0
    ctrl_y: float = 0.0
    _handlers: dict = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._handlers = {
            "m": self._move, "l": self._line, "h": self._hline, "v": self._vline,
            "c": self._cubic, "s": self._smooth_cubic, "q": self._quad,
            "t": self._smooth_quad, "a": self._arc,
        }

    def execute(self, command: str, args: list[float]) -> None:
        handler = self._handlers.get(command.lower())
        if handler is not None:
            handler(args, command.islower())
        elif len(args) >= 2:
            self.x, self.y = args[-2], args[-1]
            self._sync_control()

    def _sync_control(self) -> None:
        self.ctrl_x, self.ctrl_y = self.x, self.y

    def _point(self, ax: float, ay: float, relative: bool) -> Point:
        return (self.x + ax, self.y + ay) if relative else (ax, ay)

    def _move(self, args: list[float], relative: bool) -> None:
        self.x, self.y = self._point(args[0], args[1], relative)
        self.builder.move_to(self.x, self.y)
        self._sync_control()

    def _line(self, args: list[float], relative: bool) -> None:
        self.x, self.y = self._point(args[0], args[1], relative)
        self.builder.line_to(self.x, self.y)
        self._sync_control()

    def _hline(self, args: list[float], relative: bool) -> None:
        self.x = self.x + args[0] if relative else args[0]
        self.builder.line_to(self.x, self.y)
        self._sync_control()

    def _vline(self, args: list[float], relative: bool) -> None:
        self.y = self.y + args[0] if relative else args[0]
        self.builder.line_to(self.x, self.y)
        self._sync_control()

    def _finish_curve(self, cx2: float, cy2: float, x: float, y: float) -> None:
        self.ctrl_x, self.ctrl_y = cx2, cy2
        self.x, self.y = x, y

    def _cubic(self, args: list[float], relative: bool) -> None:
        cx1, cy1 = self._point(args[0], args[1], relative)
        cx2, cy2 = self._point(args[2], args[3], relative)
        x, y = self._point(args[4], args[5], relative)
        self.builder.cubic_to(cx1, cy1, cx2, cy2, x, y)
        self._finish_curve(cx2, cy2, x, y)

    def _smooth_cubic(self, args: list[float], relative: bool) -> None:
        cx2, cy2 = self._point(args[0], args[1], relative)
        x, y = self._point(args[2], args[3], relative)
        cx1 = 2 * self.x - self.ctrl_x
        cy1 = 2 * self.y - self.ctrl_y
        self.builder.cubic_to(cx1, cy1, cx2, cy2, x, y)
        self._finish_curve(cx2, cy2, x, y)

    def _quad_as_cubic(self, cx: float, cy: float, x: float, y: float) -> None:
        x1, y1 = self.x, self.y
        self.builder.cubic_to(
            x1 + 2.0 / 3.0 * (cx - x1), y1 + 2.0 / 3.0 * (cy - y1),
            x + 2.0 / 3.0 * (cx - x), y + 2.0 / 3.0 * (cy - y),
            x, y,
        )
        self._finish_curve(cx, cy, x, y)

    def _quad(self, args: list[float], relative: bool) -> None:
        cx, cy = self._point(args[0], args[1], relative)
        x, y = self._point(args[2], args[3], relative)
        self._quad_as_cubic(cx, cy, x, y)

    def _smooth_quad(self, args: list[float], relative: bool) -> None:
        x, y = self._point(args[0], args[1], relative)
        cx = 2 * self.x - self.ctrl_x
        cy = 2 * self.y - self.ctrl_y
        self._quad_as_cubic(cx, cy, x, y)

    def _arc(self, args: list[float], relative: bool) -> None:
        self._draw_arc(args, relative)
        self._sync_control()

    def _draw_arc(self, args: list[float], relative: bool) -> None:
        rx, ry = abs(args[0]), abs(args[1])
        rotx = args[2] / 180.0 * math.pi
        large_arc = abs(args[3]) > 1e-6
        sweep = abs(args[4]) > 1e-6
        x1, y1 = self.x, self.y
        x2, y2 = self._point(args[5], args[6], relative)

        dx, dy = x1 - x2, y1 - y2
        if math.hypot(dx, dy) < 1e-6 or rx < 1e-6 or ry < 1e-6:
            self.builder.line_to(x2, y2)
            self.x, self.y = x2, y2
            return

        sinrx, cosrx = math.sin(rotx), math.cos(rotx)
        x1p = cosrx * dx / 2.0 + sinrx * dy / 2.0
        y1p = -sinrx * dx / 2.0 + cosrx * dy / 2.0
        d = x1p * x1p / (rx * rx) + y1p * y1p / (ry * ry)
        if d > 1:
            d = math.sqrt(d)
            rx *= d
            ry *= d

        sa = rx * rx * ry * ry - rx * rx * y1p * y1p - ry * ry * x1p * x1p
        sb = rx * rx * y1p * y1p + ry * ry * x1p * x1p
        sa = max(sa, 0.0)
        s = math.sqrt(sa / sb) if sb > 0.0 else 0.0
        if large_arc == sweep:
            s = -s
        cxp = s * rx * y1p / ry
        cyp = s * -ry * x1p / rx

        cx = (x1 + x2) / 2.0 + cosrx * cxp - sinrx * cyp
        cy = (y1 + y2) / 2.0 + sinrx * cxp + cosrx * cyp

        ux, uy = (x1p - cxp) / rx, (y1p - cyp) / ry
        vx, vy = (-x1p - cxp) / rx, (-y1p - cyp) / ry
        start_angle = _vector_angle(1.0, 0.0, ux, uy)
        delta = _vector_angle(ux, uy, vx, vy)
        if not sweep and delta > 0:
            delta -= 2 * math.pi
        elif sweep and delta < 0:
            delta += 2 * math.pi

        frame = Transform(cosrx, sinrx, -sinrx, cosrx, cx, cy)
        ndivs = int(abs(delta) / (math.pi * 0.5) + 1.0)
        half = delta / ndivs / 2.0
        sin_half = math.sin(half)
        kappa = abs(4.0 / 3.0 * (1.0 - math.cos(half)) / sin_half) if sin_half else 0.0
        if delta < 0.0:
            kappa = -kappa

        prev: tuple[float, float, float, float] | None = None
        for i in range(ndivs + 1):
            angle = start_angle + delta * (i / ndivs)
            ca, sa_ = math.cos(angle), math.sin(angle)
            x, y = frame.apply(ca * rx, sa_ * ry)
            tanx, tany = frame.apply_vector(-sa_ * rx * kappa, ca * ry * kappa)
            if prev is not None:
                px, py, ptanx, ptany = prev
                self.builder.cubic_to(px + ptanx, py + ptany, x - tanx, y - tany, x, y)
            prev = (x, y, tanx, tany)

        self.x, self.y = x2, y2


def parse_path_data(data: str) -> list[tuple[list[Point], bool]]:
    """Parse a ``d`` attribute into sub-paths of cubic Bézier points.

    Each sub-path is returned as ``(points, closed)`` in document order, with
    ``1 + 3*n`` points for ``n`` segments. Commands before the first moveto
    and unknown commands are ignored.
    """
    builder = PathBuilder()
    pen = _Pen(builder)
    paths: list[tuple[list[Point], bool]] = []

    def commit(closed: bool) -> None:
        points = builder.commit(closed)
        if points is not None:
            paths.append((points, closed))

    command = ""
    args: list[float] = []
    required = 0
    started = False
    closed = False
    pos = 0
    while pos < len(data):
        item, pos = next_path_item(data, pos)
        if not item:
            break
        if command and is_coordinate(item):
            if len(args) < _MAX_ARGS:
                args.append(atof(item))
            if len(args) >= required:
                pen.execute(command, args)
                if command in ("M", "m"):
                    # Further coordinate pairs after a moveto are linetos.
                    command = "l" if command == "m" else "L"
                    required = _ARGS_PER_COMMAND[command]
                    started = True
                args = []
            continue

        command = item[0]
        if command in ("M", "m"):
            if builder.points:
                commit(closed)
            builder.reset()
            closed = False
            args = []
        elif not started:
            command = ""
        if command in ("Z", "z"):
            closed = True
            if builder.points:
                pen.x, pen.y = builder.points[0]
                pen.ctrl_x, pen.ctrl_y = pen.x, pen.y
                commit(closed)
            builder.reset()
            builder.move_to(pen.x, pen.y)
            closed = False
            args = []
        count = args_per_command(command) if command else None
        if count is None:
            command = ""
            required = 0
        else:
            required = count

    if builder.points:
        commit(closed)
    return paths