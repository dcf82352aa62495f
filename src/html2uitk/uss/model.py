"""Stylesheet model: selectors, declarations, rules and variable metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class SegmentType(Enum):
    """Kind of a single selector segment."""

    UNIVERSAL = "universal"
    TYPE = "type"
    CLASS = "class"
    ID = "id"
    PSEUDO_CLASS = "pseudo-class"
    PSEUDO_ELEMENT = "pseudo-element"
    ATTRIBUTE = "attribute"
    COMBINATOR = "combinator"
    WHITESPACE = "whitespace"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class SelectorSegment:
    """A typed slice of selector text, e.g. ``(CLASS, ".card")``."""

    type: SegmentType
    value: str

    @property
    def is_combinator(self) -> bool:
        # Descendant whitespace and explicit combinators both separate compounds.
        return self.type in (SegmentType.COMBINATOR, SegmentType.WHITESPACE)

    @property
    def is_pseudo(self) -> bool:
        return self.type in (SegmentType.PSEUDO_CLASS, SegmentType.PSEUDO_ELEMENT)


@dataclass(frozen=True)
class Selector:
    """One comma-separated selector: its raw text plus tokenized segments."""

    raw: str
    segments: tuple[SelectorSegment, ...] = ()

    @property
    def is_root(self) -> bool:
        if len(self.segments) == 1 and self.segments[0].type is SegmentType.PSEUDO_CLASS:
            return self.segments[0].value == ":root"
        return self.raw.strip() == ":root"

    def contains_class(self, class_name: str) -> bool:
        """Return True if the selector targets ``.class_name``.

        Both the segments and the raw text are checked, so a class is found
        even when tokenizing split it unexpectedly.
        """
        needle = f".{class_name}".lower()
        if any(
            s.type is SegmentType.CLASS and s.value.lower() == needle
            for s in self.segments
        ):
            return True
        return bool(self.raw) and needle in self.raw.lower()

    def __str__(self) -> str:
        if not self.raw:
            return "".join(s.value for s in self.segments)
        return self.raw


class ValueKind(Enum):
    """Semantic kind of a declaration value."""

    NUMBER = "number"
    INTEGER = "integer"
    LENGTH = "length"
    PERCENTAGE = "percentage"
    COLOR = "color"
    KEYWORD = "keyword"
    VARIABLE_REFERENCE = "variable-reference"
    RESOURCE = "resource"
    URL = "url"
    STRING = "string"
    BOOLEAN = "boolean"
    FUNCTION = "function"
    COMMA = "comma"
    SLASH = "slash"
    OPERATOR = "operator"
    ASSET_REFERENCE = "asset-reference"
    ANGLE = "angle"
    TIME = "time"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ValueFragment:
    """A classified piece of a declaration value.

    ``arguments`` holds nested fragments for function values.  The classifier
    keeps whole values as a single top-level fragment, so it is empty today.
    """

    kind: ValueKind
    raw: str
    unit: str | None = None
    function_name: str | None = None
    arguments: tuple[ValueFragment, ...] = ()


@dataclass(frozen=True)
class Declaration:
    """A ``property: value`` pair with its importance flag."""

    property: str
    value: tuple[ValueFragment, ...] = ()
    important: bool = False

    @property
    def is_custom_property(self) -> bool:
        return self.property.startswith("--")

    @property
    def is_vendor_property(self) -> bool:
        return self.property.lower().startswith("-unity-")

    @property
    def text(self) -> str:
        """Raw text of the value, or an empty string when there is none."""
        return self.value[0].raw if self.value else ""


@dataclass(frozen=True)
class Rule:
    """A style rule: one or more selectors sharing one declaration block."""

    selectors: tuple[Selector, ...]
    declarations: tuple[Declaration, ...]

    @property
    def is_root_rule(self) -> bool:
        return any(s.is_root for s in self.selectors)

    @property
    def contains_custom_properties(self) -> bool:
        return any(d.is_custom_property for d in self.declarations)


class VariableType(Enum):
    """Declared type of a USS variable in the metadata file."""

    ASSET_REFERENCE = "asset-reference"
    INTEGER = "integer"
    KEYWORD = "keyword"
    LENGTH = "length"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class VariableDefinition:
    """Metadata about a USS custom property found in a reference theme."""

    name: str
    type: VariableType = VariableType.UNKNOWN
    defined: bool = False
    example: str | None = None
    lines_defined: tuple[int, ...] = ()
    lines_referenced: tuple[int, ...] = ()

    @property
    def is_unity_variable(self) -> bool:
        return self.name.lower().startswith("--unity-")

    @property
    def is_theme_variable(self) -> bool:
        return self.name.lower().startswith("--theme-")


@dataclass(frozen=True)
class Stylesheet:
    """A parsed stylesheet: rules in source order plus variable metadata."""

    rules: list[Rule] = field(default_factory=list)
    variables: list[VariableDefinition] = field(default_factory=list)

    def rules_for_class(self, class_name: str) -> list[Rule]:
        """Return the rules with at least one selector targeting *class_name*."""
        return [
            r for r in self.rules if any(s.contains_class(class_name) for s in r.selectors)
        ]
