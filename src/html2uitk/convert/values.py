"""Value translation: rewrite a CSS value into something USS accepts."""

from __future__ import annotations

import re

from html2uitk.config import ConverterConfig
from html2uitk.units import em_terms_to_px, parse_number, round_half_away, sub_outside_protected
from html2uitk.uss.parser import split_top_level

__all__ = ["SINGLE_VALUE_PROPERTIES", "translate_value"]

SINGLE_VALUE_PROPERTIES = frozenset({
    "-unity-font",
    "-unity-font-definition",
    "background-image",
    "text-shadow",
    "cursor",
})

_GRADIENT_PROPERTIES = frozenset({"background-image", "background-color"})

_LEADING_DECIMAL_RE = re.compile(r"(^|[\s,(])\.(\d)")
_VIEWPORT_RE = re.compile(r"(?<=\d)v[wh]\b", re.IGNORECASE)
_GRADIENT_RE = re.compile(r"gradient\s*\(", re.IGNORECASE)
_CORNER_RADIUS_RE = re.compile(r"^border(-[a-z]+)*-radius$")
_PIXELS_RE = re.compile(r"^(?P<number>[+-]?(?:\d+\.?\d*|\.\d+))px$", re.IGNORECASE)


def _first_token(value: str) -> str:
    parts = value.split()
    return parts[0] if parts else value


def _first_top_level(value: str) -> str:
    return split_top_level(value)[0].strip()


def _double_pixels(value: str) -> str:
    match = _PIXELS_RE.match(value.strip())
    if match is None:
        return value
    amount = parse_number(match.group("number"))
    if amount is None:
        return value
    return f"{round_half_away(amount * 2)}px"


def _resolve_font(value: str, config: ConverterConfig | None) -> str:
    if config is None:
        return ""
    path = config.asset_path(value)
    if path is not None:
        return path
    # Already a configured asset path, e.g. when converting USS output again.
    cleaned = value.strip().strip("'\"")
    if any(asset.path == cleaned for asset in config.assets.values() if asset.path.strip()):
        return cleaned
    return ""


def translate_value(prop: str, value: str, config: ConverterConfig | None = None) -> str:
    """Translate *value* of *prop* for USS.

    An empty return value means the declaration should be left out.

    >>> translate_value("font-size", "2em")
    '32px'
    >>> translate_value("opacity", ".5")
    '0.5'
    """
    if not value or not value.strip():
        return value

    name = prop.lower()
    text = sub_outside_protected(_LEADING_DECIMAL_RE, r"\g<1>0.\2", value)
    text = sub_outside_protected(_VIEWPORT_RE, "%", text)

    if name in _GRADIENT_PROPERTIES and _GRADIENT_RE.search(text):
        return "none"

    if name in SINGLE_VALUE_PROPERTIES:
        text = _first_top_level(text)

    if name == "-unity-font":
        return _resolve_font(text, config)
    if name == "-unity-font-definition":
        return text

    if _CORNER_RADIUS_RE.match(name):
        text = _first_token(text)

    text = em_terms_to_px(text)

    if name == "letter-spacing":
        text = _double_pixels(text)

    return text
