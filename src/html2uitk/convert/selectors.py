"""Selector filtering and rewriting.

A selector survives when every pseudo-class it uses exists in USS and no
part of it matches the breaking-selector denylist.  Surviving selectors have
their HTML type names replaced by UXML element names::

    div.card:hover           -> VisualElement.card:hover
    input[type="checkbox"]   -> Toggle
    body                     -> :root
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from html2uitk.markup.tags import UI_NAMESPACE, ui_tag_for_selector
from html2uitk.policy.support import (
    SUPPORTED_PSEUDO_CLASSES,
    UNSUPPORTED_PSEUDO_CLASSES,
    UNSUPPORTED_PSEUDO_ELEMENTS,
    TranslationPolicy,
)
from html2uitk.uss.model import SegmentType, Selector, SelectorSegment

__all__ = ["SelectorOutcome", "rewrite_selector"]

_ROOT_TYPES = frozenset({"body", "html"})

_TYPE_ATTRIBUTE_RE = re.compile(
    r"""^\[\s*type\s*=\s*["']?(?P<type>[^"'\]\s]+)["']?\s*\]$""", re.IGNORECASE
)


@dataclass(frozen=True)
class SelectorOutcome:
    """Result of rewriting one selector.

    ``text`` is ``None`` when the selector was rejected; ``breaking`` means
    the whole rule has to go, not just this selector.
    """

    text: str | None
    reason: str | None = None
    breaking: bool = False

    @property
    def accepted(self) -> bool:
        return self.text is not None


def _pseudo_rejection(segment: SelectorSegment) -> str | None:
    name = segment.value.split("(", 1)[0].lower()
    if segment.type is SegmentType.PSEUDO_ELEMENT or name in UNSUPPORTED_PSEUDO_ELEMENTS:
        return f"unsupported pseudo-element '{name}'"
    if name in UNSUPPORTED_PSEUDO_CLASSES or name not in SUPPORTED_PSEUDO_CLASSES:
        return f"unsupported pseudo-class '{name}'"
    return None


def _split_compounds(segments: tuple[SelectorSegment, ...]) -> list[list[SelectorSegment]]:
    """Group segments into compounds and the separators between them."""
    groups: list[list[SelectorSegment]] = []
    for segment in segments:
        if segment.is_combinator or not groups or groups[-1][-1].is_combinator:
            groups.append([segment])
        else:
            groups[-1].append(segment)
    return groups


def _strip_namespace(tag: str) -> str:
    if tag.lower().startswith(UI_NAMESPACE):
        return tag[len(UI_NAMESPACE):]
    return tag


def _rewrite_compound(compound: list[SelectorSegment]) -> str:
    head = compound[0]
    if head.type is SegmentType.WHITESPACE:
        return " "
    if head.type is not SegmentType.TYPE:
        return "".join(s.value for s in compound)
    if len(compound) == 1 and head.value.lower() in _ROOT_TYPES:
        return ":root"

    rest = compound[1:]
    mapped = None
    if head.value.lower() == "input" and rest and rest[0].type is SegmentType.ATTRIBUTE:
        match = _TYPE_ATTRIBUTE_RE.match(rest[0].value)
        if match is not None:
            mapped = ui_tag_for_selector(f'input[type="{match.group("type")}"]')
            if mapped is not None:
                rest = rest[1:]
    if mapped is None:
        mapped = ui_tag_for_selector(head.value)

    name = _strip_namespace(mapped) if mapped else head.value
    return name + "".join(s.value for s in rest)


def rewrite_selector(selector: Selector, policy: TranslationPolicy) -> SelectorOutcome:
    """Filter *selector* against *policy* and map its type names to UXML."""
    for part in selector.raw.split():
        breaking = policy.breaking_match(part)
        if breaking is not None:
            return SelectorOutcome(
                text=None, reason=f"breaking selector '{breaking}'", breaking=True
            )

    for segment in selector.segments:
        if segment.type is SegmentType.UNKNOWN:
            return SelectorOutcome(
                text=None, reason=f"unparseable selector near '{segment.value}'"
            )
        if segment.is_pseudo:
            reason = _pseudo_rejection(segment)
            if reason is not None:
                return SelectorOutcome(text=None, reason=reason)

    text = "".join(_rewrite_compound(group) for group in _split_compounds(selector.segments))
    return SelectorOutcome(text=text.strip())
