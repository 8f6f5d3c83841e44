"""Affine 2-D transforms, SVG transform lists and cubic Bézier bounds."""

from __future__ import annotations

import math
import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

_DIGITS = "0123456789"
_NUMBER_START = "-+." + _DIGITS
_MAX_ITEM = 63
_BEZIER_EPSILON = 1e-12

_ATOF = re.compile(r"([+-]?)(\d*)(?:\.(\d*))?")
_EXPONENT = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")


@dataclass(frozen=True)
class Transform:
    """The affine map ``(x, y) -> (a*x + c*y + e, b*x + d*y + f)``."""

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def identity(cls) -> Transform:
        return cls()

    @classmethod
    def translation(cls, tx: float, ty: float) -> Transform:
        return cls(1.0, 0.0, 0.0, 1.0, tx, ty)

    @classmethod
    def scaling(cls, sx: float, sy: float) -> Transform:
        return cls(sx, 0.0, 0.0, sy, 0.0, 0.0)

    @classmethod
    def rotation(cls, angle: float) -> Transform:
        """Rotation by ``angle`` radians."""
        cs, sn = math.cos(angle), math.sin(angle)
        return cls(cs, sn, -sn, cs, 0.0, 0.0)

    @classmethod
    def skew_x(cls, angle: float) -> Transform:
        return cls(1.0, 0.0, math.tan(angle), 1.0, 0.0, 0.0)

    @classmethod
    def skew_y(cls, angle: float) -> Transform:
        return cls(1.0, math.tan(angle), 0.0, 1.0, 0.0, 0.0)

    def __iter__(self) -> Iterator[float]:
        return iter((self.a, self.b, self.c, self.d, self.e, self.f))

    def multiply(self, other: Transform) -> Transform:
        """The transform that applies ``self`` first, then ``other``."""
        s = other
        return Transform(
            self.a * s.a + self.b * s.c,
            self.a * s.b + self.b * s.d,
            self.c * s.a + self.d * s.c,
            self.c * s.b + self.d * s.d,
            self.e * s.a + self.f * s.c + s.e,
            self.e * s.b + self.f * s.d + s.f,
        )

    def premultiply(self, other: Transform) -> Transform:
        """The transform that applies ``other`` first, then ``self``."""
        return other.multiply(self)

    def inverse(self) -> Transform:
        """The inverse map; the identity when the map is nearly singular."""
        det = self.a * self.d - self.c * self.b
        if -1e-6 < det < 1e-6:
            return Transform.identity()
        inv = 1.0 / det
        return Transform(
            self.d * inv,
            -self.b * inv,
            -self.c * inv,
            self.a * inv,
            (self.c * self.f - self.d * self.e) * inv,
            (self.b * self.e - self.a * self.f) * inv,
        )

    def apply(self, x: float, y: float) -> tuple[float, float]:
        """Map a point."""
        return x * self.a + y * self.c + self.e, x * self.b + y * self.d + self.f

    def apply_vector(self, x: float, y: float) -> tuple[float, float]:
        """Map a direction, ignoring the translation."""
        return x * self.a + y * self.c, x * self.b + y * self.d

    def average_scale(self) -> float:
        sx = math.hypot(self.a, self.c)
        sy = math.hypot(self.b, self.d)
        return (sx + sy) * 0.5


def _scan_number(text: str, pos: int) -> tuple[str, int]:
    """Read a number token starting at ``pos``; return it and the end."""
    n = len(text)
    out: list[str] = []

    def take(i: int) -> int:
        if len(out) < _MAX_ITEM:
            out.append(text[i])
        return i + 1

    i = pos
    if i < n and text[i] in "+-":
        i = take(i)
    while i < n and text[i] in _DIGITS:
        i = take(i)
    if i < n and text[i] == ".":
        i = take(i)
        while i < n and text[i] in _DIGITS:
            i = take(i)
    if i < n and text[i] in "eE" and text[i + 1 : i + 2] not in ("m", "x"):
        i = take(i)
        if i < n and text[i] in "+-":
            i = take(i)
        while i < n and text[i] in _DIGITS:
            i = take(i)
    return "".join(out), i


def _to_float(token: str) -> float:
    match = _ATOF.match(token)
    sign, int_part, frac_part = match.group(1), match.group(2), match.group(3) or ""
    if not int_part and not frac_part:
        return 0.0
    value = float(int_part or "0")
    if frac_part:
        value += int(frac_part) / 10.0 ** len(frac_part)
    exponent = _EXPONENT.match(token, match.end() + 1) if token[match.end() : match.end() + 1] in ("e", "E") else None
    if exponent is not None:
        try:
            value *= 10.0 ** int(exponent.group(1))
        except OverflowError:
            value = math.inf
    return -value if sign == "-" else value


def _transform_args(text: str, pos: int, max_args: int) -> tuple[int, list[float] | None]:
    """Parse ``name(args)`` at ``pos``.

    Returns the number of characters consumed (0 when there are too many
    arguments) and the arguments, or ``None`` when there are no parentheses.
    """
    open_at = text.find("(", pos)
    if open_at < 0:
        return 1, None
    close_at = text.find(")", open_at)
    if close_at < 0:
        return 1, None
    args: list[float] = []
    i = open_at
    while i < close_at:
        if text[i] in _NUMBER_START:
            if len(args) >= max_args:
                return 0, None
            token, i = _scan_number(text, i)
            args.append(_to_float(token))
        else:
            i += 1
    return close_at - pos, args


def _matrix(args: list[float]) -> Transform | None:
    return Transform(*args) if len(args) == 6 else None


def _translate(args: list[float]) -> Transform | None:
    if not args:
        return None
    ty = args[1] if len(args) > 1 else 0.0
    return Transform.translation(args[0], ty)


def _scale(args: list[float]) -> Transform | None:
    if not args:
        return None
    sy = args[1] if len(args) > 1 else args[0]
    return Transform.scaling(args[0], sy)


def _rotate(args: list[float]) -> Transform | None:
    if not args:
        return None
    rotation = Transform.rotation(args[0] / 180.0 * math.pi)
    if len(args) == 1:
        return rotation
    cx = args[1]
    cy = args[2] if len(args) > 2 else 0.0
    return (
        Transform.translation(-cx, -cy)
        .multiply(rotation)
        .multiply(Transform.translation(cx, cy))
    )


def _skew_x(args: list[float]) -> Transform | None:
    return Transform.skew_x(args[0] / 180.0 * math.pi) if args else None


def _skew_y(args: list[float]) -> Transform | None:
    return Transform.skew_y(args[0] / 180.0 * math.pi) if args else None


_OPERATIONS = (
    ("matrix", 6, _matrix),
    ("translate", 2, _translate),
    ("scale", 2, _scale),
    ("rotate", 3, _rotate),
    ("skewX", 1, _skew_x),
    ("skewY", 1, _skew_y),
)


def parse_transform(text: str) -> Transform:
    """Parse an SVG ``transform`` attribute value into one transform."""
    result = Transform.identity()
    pos = 0
    while pos < len(text):
        for name, max_args, build in _OPERATIONS:
            if text.startswith(name, pos):
                length, args = _transform_args(text, pos, max_args)
                break
        else:
            pos += 1
            continue
        if length == 0:
            pos += 1
            continue
        pos += length
        step = build(args) if args is not None else None
        if step is not None:
            result = result.premultiply(step)
    return result


def eval_bezier(t: float, p0: float, p1: float, p2: float, p3: float) -> float:
    """Evaluate one coordinate of a cubic Bézier curve at ``t``."""
    it = 1.0 - t
    return it * it * it * p0 + 3.0 * it * it * t * p1 + 3.0 * it * t * t * p2 + t * t * t * p3


def _roots(a: float, b: float, c: float) -> list[float]:
    def inside(t: float) -> bool:
        return _BEZIER_EPSILON < t < 1.0 - _BEZIER_EPSILON

    if abs(a) < _BEZIER_EPSILON:
        if abs(b) > _BEZIER_EPSILON:
            t = -c / b
            return [t] if inside(t) else []
        return []
    disc = b * b - 4.0 * c * a
    if disc <= _BEZIER_EPSILON:
        return []
    root = math.sqrt(disc)
    candidates = ((-b + root) / (2.0 * a), (-b - root) / (2.0 * a))
    return [t for t in candidates if inside(t)]


def curve_bounds(curve: Sequence[float]) -> tuple[float, float, float, float]:
    """Tight bounds ``(minx, miny, maxx, maxy)`` of a cubic Bézier.

    ``curve`` holds eight numbers: ``x0, y0, x1, y1, x2, y2, x3, y3``.
    """
    if len(curve) != 8:
        raise ValueError("a cubic curve needs exactly eight coordinates")
    v0, v1, v2, v3 = curve[0:2], curve[2:4], curve[4:6], curve[6:8]
    lo = [min(v0[0], v3[0]), min(v0[1], v3[1])]
    hi = [max(v0[0], v3[0]), max(v0[1], v3[1])]

    def in_bounds(p: Sequence[float]) -> bool:
        return lo[0] <= p[0] <= hi[0] and lo[1] <= p[1] <= hi[1]

    if in_bounds(v1) and in_bounds(v2):
        return lo[0], lo[1], hi[0], hi[1]

    for axis in (0, 1):
        p0, p1, p2, p3 = v0[axis], v1[axis], v2[axis], v3[axis]
        a = -3.0 * p0 + 9.0 * p1 - 9.0 * p2 + 3.0 * p3
        b = 6.0 * p0 - 12.0 * p1 + 6.0 * p2
        c = 3.0 * p1 - 3.0 * p0
        for t in _roots(a, b, c):
            v = eval_bezier(t, p0, p1, p2, p3)
            lo[axis] = min(lo[axis], v)
            hi[axis] = max(hi[axis], v)
    return lo[0], lo[1], hi[0], hi[1]