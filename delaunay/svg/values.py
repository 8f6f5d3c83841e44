"""Enumerations and scalar value parsers shared by the SVG reader."""

from __future__ import annotations

import enum
import math
import re
from dataclasses import dataclass

_DIGITS = "0123456789"
_MAX_TOKEN = 63
_MAX_ID = 63

_EXPONENT = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")


class PaintType(enum.IntEnum):
    NONE = 0
    COLOR = 1
    LINEAR_GRADIENT = 2
    RADIAL_GRADIENT = 3


class SpreadType(enum.IntEnum):
    PAD = 0
    REFLECT = 1
    REPEAT = 2


class LineJoin(enum.IntEnum):
    MITER = 0
    ROUND = 1
    BEVEL = 2


class LineCap(enum.IntEnum):
    BUTT = 0
    ROUND = 1
    SQUARE = 2


class FillRule(enum.IntEnum):
    NONZERO = 0
    EVENODD = 1


class Units(enum.IntEnum):
    USER = 0
    PX = 1
    PT = 2
    PC = 3
    MM = 4
    CM = 5
    IN = 6
    PERCENT = 7
    EM = 8
    EX = 9


@dataclass(frozen=True)
class Coordinate:
    """A length together with the unit it was written in."""

    value: float
    units: Units = Units.USER


def parse_number(text: str, pos: int = 0) -> tuple[str, int]:
    """Scan a number starting at ``pos``.

    Returns the number's text (at most 63 characters are kept) and the
    position just past it. An ``e`` followed by ``m`` or ``x`` is left alone,
    since it starts an ``em`` or ``ex`` unit rather than an exponent.
    """
    n = len(text)
    out: list[str] = []

    def take(i: int) -> int:
        if len(out) < _MAX_TOKEN:
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


def _digits(text: str, i: int) -> int:
    n = len(text)
    while i < n and text[i] in _DIGITS:
        i += 1
    return i


def atof(text: str) -> float:
    """Convert the leading number of ``text`` to a float, independent of locale.

    Text with neither an integer nor a fractional part gives 0.0.
    """
    n = len(text)
    i = 0
    negative = False
    if i < n and text[i] in "+-":
        negative = text[i] == "-"
        i += 1

    end = _digits(text, i)
    int_digits = text[i:end]
    i = end
    value = float(int(int_digits)) if int_digits else 0.0

    frac_digits = ""
    if i < n and text[i] == ".":
        i += 1
        end = _digits(text, i)
        frac_digits = text[i:end]
        i = end
        if frac_digits:
            value += int(frac_digits) / 10.0 ** len(frac_digits)

    if not int_digits and not frac_digits:
        return 0.0

    if i < n and text[i] in "eE":
        match = _EXPONENT.match(text, i + 1)
        if match is not None:
            try:
                value *= 10.0 ** int(match.group(1))
            except OverflowError:
                value *= math.inf
    return -value if negative else value


def parse_opacity(text: str) -> float:
    """Parse an opacity, clamped to ``[0, 1]``."""
    return min(max(atof(text), 0.0), 1.0)


def parse_miter_limit(text: str) -> float:
    """Parse a miter limit, clamped to be non-negative."""
    return max(atof(text), 0.0)


_UNIT_PREFIXES = (
    ("px", Units.PX),
    ("pt", Units.PT),
    ("pc", Units.PC),
    ("mm", Units.MM),
    ("cm", Units.CM),
    ("in", Units.IN),
    ("%", Units.PERCENT),
    ("em", Units.EM),
    ("ex", Units.EX),
)


def parse_units(text: str) -> Units:
    """Identify the unit suffix at the start of ``text``; user units otherwise."""
    for prefix, units in _UNIT_PREFIXES:
        if text.startswith(prefix):
            return units
    return Units.USER


def is_coordinate(text: str) -> bool:
    """Whether ``text`` starts like a number: optional sign, then digit or dot."""
    body = text[1:] if text[:1] in ("-", "+") else text
    return bool(body) and (body[0] in _DIGITS or body[0] == ".")


def parse_coordinate_raw(text: str) -> Coordinate:
    """Parse a number and its unit suffix without converting to pixels."""
    token, end = parse_number(text, 0)
    return Coordinate(atof(token), parse_units(text[end:]))


def parse_line_cap(text: str) -> LineCap:
    return {"butt": LineCap.BUTT, "round": LineCap.ROUND, "square": LineCap.SQUARE}.get(
        text, LineCap.BUTT
    )


def parse_line_join(text: str) -> LineJoin:
    return {"miter": LineJoin.MITER, "round": LineJoin.ROUND, "bevel": LineJoin.BEVEL}.get(
        text, LineJoin.MITER
    )


def parse_fill_rule(text: str) -> FillRule:
    return {"nonzero": FillRule.NONZERO, "evenodd": FillRule.EVENODD}.get(
        text, FillRule.NONZERO
    )


def parse_url(text: str) -> str:
    """Extract the referenced id from ``url(#id)``, at most 63 characters."""
    body = text[4:]
    if body.startswith("#"):
        body = body[1:]
    close = body.find(")")
    if close >= 0:
        body = body[:close]
    return body[:_MAX_ID]