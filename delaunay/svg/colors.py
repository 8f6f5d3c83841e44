"""SVG colour values packed as ``0xAABBGGRR`` integers."""

from __future__ import annotations

import re

_MASK = 0xFFFFFFFF
_SPACE = " \t\n\v\f\r"

_HEX = re.compile(r"[+-]?(?:0[xX])?([0-9a-fA-F]+)")
_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")
_SEPARATOR = re.compile(r"[%, \t]+")


def rgb(r: int, g: int, b: int) -> int:
    """Pack three channels as ``r | g << 8 | b << 16``."""
    return (r & _MASK) | ((g << 8) & _MASK) | ((b << 16) & _MASK)


NAMED_COLORS: dict[str, int] = {
    "red": rgb(255, 0, 0),
    "green": rgb(0, 128, 0),
    "blue": rgb(0, 0, 255),
    "yellow": rgb(255, 255, 0),
    "cyan": rgb(0, 255, 255),
    "magenta": rgb(255, 0, 255),
    "black": rgb(0, 0, 0),
    "grey": rgb(128, 128, 128),
    "gray": rgb(128, 128, 128),
    "white": rgb(255, 255, 255),
}

_FALLBACK = rgb(128, 128, 128)


def _scan_hex(text: str) -> int:
    match = _HEX.match(text)
    if match is None:
        return 0
    value = int(match.group(1), 16)
    if match.group(0).startswith("-"):
        value = -value
    return value & _MASK


def parse_color_hex(text: str) -> int:
    """Parse ``#rrggbb`` or ``#rgb``; other lengths give black."""
    body = text[1:]
    length = len(body)
    for index, ch in enumerate(body):
        if ch in _SPACE:
            length = index
            break
    c = 0
    if length == 6:
        c = _scan_hex(body)
    elif length == 3:
        c = _scan_hex(body)
        c = (c & 0xF) | ((c & 0xF0) << 4) | ((c & 0xF00) << 8)
        c |= c << 4
    return rgb((c >> 16) & 0xFF, (c >> 8) & 0xFF, c & 0xFF)


def _percent(value: int) -> int:
    scaled = value * 255
    quotient = abs(scaled) // 100
    return quotient if scaled >= 0 else -quotient


def parse_color_rgb(text: str) -> int:
    """Parse ``rgb(r, g, b)`` with integer or percentage channels."""
    channels = [-1, -1, -1]
    separators = ["", ""]
    pos = 4
    for slot in range(3):
        number = _INT.match(text, pos)
        if number is None:
            break
        channels[slot] = int(number.group(1))
        pos = number.end()
        if slot == 2:
            break
        separator = _SEPARATOR.match(text, pos)
        if separator is None:
            break
        separators[slot] = separator.group()
        pos = separator.end()
    r, g, b = channels
    if "%" in separators[0]:
        return rgb(_percent(r), _percent(g), _percent(b))
    return rgb(r, g, b)


def parse_color_name(text: str) -> int:
    """Look up a colour keyword; unknown names give grey."""
    return NAMED_COLORS.get(text, _FALLBACK)


def parse_color(text: str) -> int:
    """Parse any supported SVG colour value."""
    text = text.lstrip(" ")
    if text.startswith("#"):
        return parse_color_hex(text)
    if text.startswith("rgb("):
        return parse_color_rgb(text)
    return parse_color_name(text)