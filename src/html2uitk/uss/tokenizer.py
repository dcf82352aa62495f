"""Selector tokenizer: split selector text into typed segments.

The scan is a single left-to-right pass that never fails.  Characters it
does not understand become one-character UNKNOWN segments, which keeps the
scanner moving forward on any input.
"""

from __future__ import annotations

from html2uitk.uss.model import SegmentType, SelectorSegment

__all__ = ["tokenize_selector"]

_COMBINATORS = frozenset(">+~")


def _is_identifier_char(ch: str) -> bool:
    return ch.isalnum() or ch in "-_\\"


def _is_type_char(ch: str) -> bool:
    return ch.isalnum() or ch in "-_|\\."


def _scan_type(text: str, index: int) -> int:
    """Consume a type name such as ``div``, ``ui|Button`` or ``Slider.2``.

    A ``.`` stays inside the name only when a digit follows it; otherwise it
    starts a class segment (``div.card``).
    """
    while index < len(text) and _is_type_char(text[index]):
        if text[index] == "." and not (index + 1 < len(text) and text[index + 1].isdigit()):
            break
        index += 1
    return index


def _scan_while(text: str, index: int, predicate) -> int:
    while index < len(text) and predicate(text[index]):
        index += 1
    return index


def _scan_parens(text: str, index: int) -> int:
    """Consume a balanced ``(...)`` group starting at *index*."""
    depth = 0
    while index < len(text):
        ch = text[index]
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        index += 1
        if depth == 0:
            break
    return index


def _scan_attribute(text: str, index: int) -> int:
    """Consume ``[...]`` starting at *index*, honouring backslash escapes."""
    index += 1
    while index < len(text) and text[index] != "]":
        if text[index] == "\\" and index + 1 < len(text):
            index += 2
            continue
        index += 1
    if index < len(text):
        index += 1
    return index


def tokenize_selector(selector: str) -> list[SelectorSegment]:
    """Tokenize a single (comma-free) selector into segments.

    >>> [s.value for s in tokenize_selector("div.card:hover")]
    ['div', '.card', ':hover']
    """
    segments: list[SelectorSegment] = []
    index = 0
    length = len(selector)

    while index < length:
        ch = selector[index]
        start = index

        if ch.isspace():
            index = _scan_while(selector, index, str.isspace)
            segment_type = SegmentType.WHITESPACE
        elif ch in _COMBINATORS:
            index += 1
            segment_type = SegmentType.COMBINATOR
        elif ch == "*":
            index += 1
            segment_type = SegmentType.UNIVERSAL
        elif ch in ".#":
            index = _scan_while(selector, index + 1, _is_identifier_char)
            segment_type = SegmentType.CLASS if ch == "." else SegmentType.ID
        elif ch == ":":
            index += 1
            segment_type = SegmentType.PSEUDO_CLASS
            if index < length and selector[index] == ":":
                index += 1
                segment_type = SegmentType.PSEUDO_ELEMENT
            index = _scan_while(selector, index, _is_identifier_char)
            if index < length and selector[index] == "(":
                index = _scan_parens(selector, index)
        elif ch == "[":
            index = _scan_attribute(selector, index)
            segment_type = SegmentType.ATTRIBUTE
        elif _is_type_char(ch):
            index = _scan_type(selector, index)
            segment_type = SegmentType.TYPE
        else:
            index += 1
            segment_type = SegmentType.UNKNOWN

        segments.append(SelectorSegment(type=segment_type, value=selector[start:index]))

    return segments
