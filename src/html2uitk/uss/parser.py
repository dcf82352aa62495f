"""Stylesheet parser: CSS text -> :class:`Stylesheet` model.

Low-level work (tokens, brace matching, comments, error recovery) is done
by tinycss2.  Each qualified rule is wrapped in a :class:`RuleSource` and
turned into typed selectors and classified declarations here.

Syntax example:
    .card, div > p:hover { color: #fff; margin: .5em !important; }
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Iterator, Protocol

import tinycss2

from html2uitk.uss.classifier import create_fragment
from html2uitk.uss.model import Declaration, Rule, Selector, Stylesheet, VariableDefinition
from html2uitk.uss.tokenizer import tokenize_selector

__all__ = [
    "RuleSource",
    "TinycssRule",
    "iter_rule_sources",
    "parse_stylesheet",
    "parse_stylesheet_file",
    "split_top_level",
]

logger = logging.getLogger(__name__)

_IMPORTANT_RE = re.compile(r"!\s*important\s*$", re.IGNORECASE)
_QUOTED_RE = re.compile(r"'(?:\\.|[^'\\])*'" r'|"(?:\\.|[^"\\])*"')
_STRUCTURAL_CHARS = frozenset("{};")

_OPENERS = {"(": ")", "[": "]"}


class RuleSource(Protocol):
    """What the parser needs from a low-level style rule."""

    def selector_text(self) -> str: ...

    def declarations(self) -> dict[str, str]: ...


class TinycssRule:
    """Adapts a tinycss2 ``QualifiedRule`` to :class:`RuleSource`."""

    def __init__(self, rule: tinycss2.ast.QualifiedRule) -> None:
        self._rule = rule

    def selector_text(self) -> str:
        tokens = [t for t in self._rule.prelude if t.type != "comment"]
        return tinycss2.serialize(tokens).strip()

    def declarations(self) -> dict[str, str]:
        """Return ``{property: value}`` in source order.

        A repeated property keeps its first position and its last value.
        Importance is re-attached as a ``!important`` suffix so callers see
        the declaration as it was written.
        """
        result: dict[str, str] = {}
        items = tinycss2.parse_declaration_list(
            self._rule.content or [], skip_comments=True, skip_whitespace=True
        )
        for item in items:
            if item.type != "declaration":
                continue
            tokens = [t for t in item.value if t.type != "comment"]
            value = tinycss2.serialize(tokens).strip()
            if item.important:
                value = f"{value} !important"
            name = item.name if item.name.startswith("--") else item.lower_name
            result[name] = value
        return result


def iter_rule_sources(text: str) -> Iterator[TinycssRule]:
    """Yield the top-level style rules of *text*.

    At-rules (``@media``, ``@font-face``...) and rules tinycss2 could not
    parse are skipped; they never reach the model.
    """
    for node in tinycss2.parse_stylesheet(text, skip_comments=True, skip_whitespace=True):
        if node.type == "qualified-rule":
            yield TinycssRule(node)
        elif node.type == "at-rule":
            logger.debug("Skipping at-rule @%s", node.lower_at_keyword)
        elif node.type == "error":
            logger.debug(
                "Skipping unparseable CSS at line %s: %s", node.source_line, node.message
            )


def split_top_level(text: str, separator: str = ",") -> list[str]:
    """Split *text* on *separator*, ignoring separators nested in (), [] or quotes."""
    parts: list[str] = []
    stack: list[str] = []
    quote: str | None = None
    start = 0
    index = 0
    while index < len(text):
        ch = text[index]
        if quote:
            if ch == "\\":
                index += 1
            elif ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch in _OPENERS:
            stack.append(_OPENERS[ch])
        elif stack and ch == stack[-1]:
            stack.pop()
        elif ch == separator and not stack:
            parts.append(text[start:index])
            start = index + 1
        index += 1
    parts.append(text[start:])
    return parts


def _parse_selectors(raw: str) -> list[Selector]:
    selectors: list[Selector] = []
    for candidate in split_top_level(raw):
        trimmed = candidate.strip()
        if not trimmed:
            continue
        selectors.append(Selector(raw=trimmed, segments=tuple(tokenize_selector(trimmed))))
    return selectors


def _build_declaration(prop: str, raw_value: str) -> Declaration | None:
    """Strip importance, classify the value; ``None`` when nothing usable is left."""
    if not prop.strip():
        return None
    text = raw_value or ""
    important = False
    match = _IMPORTANT_RE.search(text)
    if match:
        important = True
        text = text[: match.start()].strip()
    if _STRUCTURAL_CHARS.intersection(_QUOTED_RE.sub("", text)):
        logger.debug("Dropping %s: value contains a block or separator: %r", prop, text)
        return None
    fragment = create_fragment(text)
    if fragment is None:
        return None
    return Declaration(property=prop.strip(), value=(fragment,), important=important)


def build_rule(source: RuleSource) -> Rule | None:
    """Turn one :class:`RuleSource` into a :class:`Rule`, or ``None`` if it is empty."""
    raw_selectors = source.selector_text()
    if not raw_selectors.strip():
        return None

    selectors = _parse_selectors(raw_selectors)
    if not selectors:
        return None

    declarations = []
    for prop, value in source.declarations().items():
        declaration = _build_declaration(prop, value)
        if declaration is not None:
            declarations.append(declaration)
    if not declarations:
        return None

    return Rule(selectors=tuple(selectors), declarations=tuple(declarations))


def parse_rules(sources: Iterable[RuleSource]) -> list[Rule]:
    rules: list[Rule] = []
    for source in sources:
        rule = build_rule(source)
        if rule is not None:
            rules.append(rule)
    return rules


def parse_stylesheet(
    source: str, variables: Iterable[VariableDefinition] | None = None
) -> Stylesheet:
    """Parse CSS/USS text into a :class:`Stylesheet`.

    Returns the surviving rules in source order.  Rules without a selector or
    without a usable declaration are dropped before they reach the model.
    """
    return Stylesheet(
        rules=parse_rules(iter_rule_sources(source)),
        variables=list(variables or ()),
    )


def parse_stylesheet_file(
    path: str | Path, variables: Iterable[VariableDefinition] | None = None
) -> Stylesheet:
    """Read *path* as UTF-8 and parse it."""
    return parse_stylesheet(Path(path).read_text(encoding="utf-8"), variables=variables)
