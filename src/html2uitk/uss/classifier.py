"""Value classifier: decide the semantic kind of a raw declaration value."""

from __future__ import annotations

import re

from html2uitk.uss.model import ValueFragment, ValueKind

__all__ = ["classify", "create_fragment", "split_number"]

# Leading signed decimal; the unit (if any) is whatever follows it.
_NUMBER_RE = re.compile(
    r"""
    [+-]?           # optional sign
    (?:
        \d+\.?\d*   # 10, 10., 10.5
      | \.\d+       # .5
    )
    """,
    re.VERBOSE,
)

_PREFIX_KINDS: tuple[tuple[str, ValueKind], ...] = (
    ("var(", ValueKind.VARIABLE_REFERENCE),
    ("resource(", ValueKind.RESOURCE),
    ("url(", ValueKind.URL),
)

_COLOR_PREFIXES = ("#", "rgb", "hsl")


def split_number(value: str) -> tuple[str, str] | None:
    """Split ``"12.5px"`` into ``("12.5", "px")``.

    Returns ``None`` when *value* does not start with a number, or when the
    text after the number contains whitespace (``"10 px"``, ``"1px solid"``).
    """
    match = _NUMBER_RE.match(value)
    if match is None:
        return None
    number = match.group(0)
    unit = value[match.end():]
    if any(ch.isspace() for ch in unit):
        return None
    return number, unit


def classify(raw: str) -> tuple[ValueKind, str | None] | None:
    """Classify *raw* into a ``(kind, unit)`` pair.

    Returns ``None`` for empty or whitespace-only input.  Checks run in a
    fixed order and the first match wins, since prefixes overlap (``rgb``
    looks like a keyword, ``url(...)`` like a function).
    """
    value = raw.strip()
    if not value:
        return None

    lowered = value.lower()
    for prefix, kind in _PREFIX_KINDS:
        if lowered.startswith(prefix):
            return kind, None

    if lowered.startswith(_COLOR_PREFIXES):
        return ValueKind.COLOR, None

    if value[0] in ("'", '"'):
        return ValueKind.STRING, None

    if lowered in ("true", "false"):
        return ValueKind.BOOLEAN, None

    numeric = split_number(value)
    if numeric is not None:
        number, unit = numeric
        if not unit:
            kind = ValueKind.NUMBER if "." in number else ValueKind.INTEGER
            return kind, None
        if unit == "%":
            return ValueKind.PERCENTAGE, unit
        return ValueKind.LENGTH, unit

    if "(" in value and value.endswith(")"):
        return ValueKind.FUNCTION, None

    return ValueKind.KEYWORD, None


def create_fragment(raw: str) -> ValueFragment | None:
    """Build a single top-level fragment for *raw*, or ``None`` if it is blank."""
    result = classify(raw)
    if result is None:
        return None
    kind, unit = result
    function_name = None
    if kind is ValueKind.FUNCTION:
        function_name = raw.strip().split("(", 1)[0].strip() or None
    return ValueFragment(kind=kind, raw=raw.strip(), unit=unit, function_name=function_name)
