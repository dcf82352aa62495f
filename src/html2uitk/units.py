"""Numeric helpers shared by value translation and fallback synthesis."""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

__all__ = [
    "PX_PER_EM",
    "round_half_away",
    "em_terms_to_px",
    "term_to_px",
    "parse_number",
    "sub_outside_protected",
]

PX_PER_EM = 16

_EM_TERM_RE = re.compile(
    r"(?<![\w.-])(?P<number>[+-]?(?:\d+\.?\d*|\.\d+))(?P<unit>r?em)\b", re.IGNORECASE
)

# url(...), resource(...) and quoted strings are copied through untouched.
_PROTECTED_RE = re.compile(
    r"""url\([^)]*\)|resource\([^)]*\)|"(?:\\.|[^"\\])*"|'(?:\\.|[^'\\])*'""",
    re.IGNORECASE,
)

_TERM_RE = re.compile(
    r"^(?P<number>[+-]?(?:\d+\.?\d*|\.\d+))(?P<unit>[a-z%]*)$", re.IGNORECASE
)


def parse_number(text: str) -> Decimal | None:
    """Parse *text* with ``.`` as the decimal separator, whatever the locale."""
    try:
        return Decimal(text)
    except InvalidOperation:
        return None


def round_half_away(value: Decimal) -> int:
    """Round to a whole number, halves away from zero (``2.5 -> 3``, ``-2.5 -> -3``)."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _em_to_px(number: str) -> str:
    # *number* is always a regex-matched numeral.
    return f"{round_half_away(Decimal(number) * PX_PER_EM)}px"


def em_terms_to_px(value: str) -> str:
    """Rewrite every ``<n>em`` / ``<n>rem`` term of *value* as whole pixels."""
    return sub_outside_protected(_EM_TERM_RE, lambda m: _em_to_px(m.group("number")), value)


def term_to_px(term: str) -> str | None:
    """Convert a single numeric term to pixels.

    Bare numbers gain ``px``; ``em``/``rem`` are scaled by :data:`PX_PER_EM`.
    Returns ``None`` for anything else (keywords, percentages, colors).
    """
    match = _TERM_RE.match(term.strip())
    if match is None:
        return None
    number, unit = match.group("number"), match.group("unit").lower()
    if unit in ("em", "rem"):
        return _em_to_px(number)
    if unit in ("px", ""):
        return f"{number}px"
    return None


def sub_outside_protected(pattern: re.Pattern, repl, text: str) -> str:
    """Like ``pattern.sub(repl, text)`` but leaves protected spans alone.

    Matches starting inside ``url(...)``, ``resource(...)`` or a quoted
    string are kept as they are.  *repl* is a template string or a callable
    taking the match.
    """
    spans = [m.span() for m in _PROTECTED_RE.finditer(text)]
    if not spans:
        return pattern.sub(repl, text)

    def replace(match: re.Match) -> str:
        start = match.start()
        if any(lo <= start < hi for lo, hi in spans):
            return match.group(0)
        return repl(match) if callable(repl) else match.expand(repl)

    return pattern.sub(replace, text)
