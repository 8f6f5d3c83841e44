"""A minimal, forgiving XML tokenizer sufficient for SVG documents."""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass

_SPACE = " \t\n\v\f\r"
_QUOTES = "\"'"

MAX_ATTRIBUTES = 127


class EventKind(enum.Enum):
    START = "start"
    END = "end"
    CONTENT = "content"


@dataclass(frozen=True)
class XmlEvent:
    """A start tag, end tag or run of character content."""

    kind: EventKind
    name: str = ""
    attributes: tuple[tuple[str, str], ...] = ()
    text: str = ""


def _skip(text: str, i: int, chars: str) -> int:
    n = len(text)
    while i < n and text[i] in chars:
        i += 1
    return i


def _skip_until(text: str, i: int, chars: str) -> int:
    n = len(text)
    while i < n and text[i] not in chars:
        i += 1
    return i


def parse_element(text: str) -> list[XmlEvent]:
    """Parse the inside of one ``<...>`` into start and/or end events."""
    n = len(text)
    i = _skip(text, 0, _SPACE)

    is_end = i < n and text[i] == "/"
    is_start = not is_end
    if is_end:
        i += 1

    # Comments, declarations and processing instructions are ignored.
    if i >= n or text[i] in "?!":
        return []

    start = i
    i = _skip_until(text, i, _SPACE)
    name = text[start:i]
    if i < n:
        i += 1

    attributes: list[tuple[str, str]] = []
    while not is_end and i < n and len(attributes) < MAX_ATTRIBUTES:
        i = _skip(text, i, _SPACE)
        if i >= n:
            break
        if text[i] == "/":
            is_end = True
            break
        start = i
        i = _skip_until(text, i, _SPACE + "=")
        attr_name = text[start:i]
        if i < n:
            i += 1
        i = _skip_until(text, i, _QUOTES)
        if i >= n:
            break
        quote = text[i]
        i += 1
        start = i
        i = _skip_until(text, i, quote)
        value = text[start:i]
        if i < n:
            i += 1
        attributes.append((attr_name, value))

    events = []
    if is_start:
        events.append(XmlEvent(EventKind.START, name, tuple(attributes)))
    if is_end:
        events.append(XmlEvent(EventKind.END, name))
    return events


def _content_event(text: str) -> XmlEvent | None:
    stripped = text.lstrip(_SPACE)
    if not stripped:
        return None
    return XmlEvent(EventKind.CONTENT, text=stripped)


def iter_xml(text: str) -> Iterator[XmlEvent]:
    """Yield the events of a document in order.

    Text after the last complete tag is not reported.
    """
    mark = 0
    in_tag = False
    for i, ch in enumerate(text):
        if ch == "<" and not in_tag:
            event = _content_event(text[mark:i])
            if event is not None:
                yield event
            mark = i + 1
            in_tag = True
        elif ch == ">" and in_tag:
            yield from parse_element(text[mark:i])
            mark = i + 1
            in_tag = False