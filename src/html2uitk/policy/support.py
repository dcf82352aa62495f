"""Translation policy: which properties and selectors USS can represent.

Two tables come from data files (property support, breaking selectors) and
can be swapped for custom ones.  The pseudo-class / pseudo-element tables are
fixed module constants.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from html2uitk.errors import PolicyError

__all__ = [
    "PropertySupport",
    "TranslationPolicy",
    "SUPPORTED_PSEUDO_CLASSES",
    "UNSUPPORTED_PSEUDO_CLASSES",
    "UNSUPPORTED_PSEUDO_ELEMENTS",
    "load_policy",
    "load_property_table",
    "load_breaking_selectors",
]

SUPPORTED_PSEUDO_CLASSES = frozenset({
    ":hover",
    ":active",
    ":focus",
    ":disabled",
    ":enabled",
    ":checked",
    ":inactive",
    ":selected",
    ":root",
})

UNSUPPORTED_PSEUDO_CLASSES = frozenset({
    ":nth-child",
    ":nth-of-type",
    ":first-child",
    ":last-child",
    ":only-child",
    ":first-of-type",
    ":last-of-type",
    ":focus-visible",
    ":focus-within",
})

# Legacy single-colon spellings are listed too: ``p:before`` is a pseudo-element.
UNSUPPORTED_PSEUDO_ELEMENTS = frozenset({
    "::before",
    "::after",
    "::first-letter",
    "::first-line",
    ":before",
    ":after",
    ":first-letter",
    ":first-line",
})

_DATA_PACKAGE = "html2uitk.data"
PROPERTIES_FILE = "uss_properties.json"
BREAKING_SELECTORS_FILE = "breaking_selectors.json"


@dataclass(frozen=True)
class PropertySupport:
    """How (and whether) a stylesheet property exists in USS."""

    native: bool
    inherited: bool = False
    animatable: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class TranslationPolicy:
    """Read-only property-support table plus the breaking-selector denylist.

    Instances never change after construction and can be shared between
    threads and converters.
    """

    properties: Mapping[str, PropertySupport] = field(default_factory=dict)
    breaking_selectors: frozenset[str] = frozenset()
    _ordered_breaking: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        table = {name.lower(): support for name, support in self.properties.items()}
        object.__setattr__(self, "properties", MappingProxyType(table))
        object.__setattr__(
            self,
            "breaking_selectors",
            frozenset(s.lower() for s in self.breaking_selectors if s),
        )
        object.__setattr__(self, "_ordered_breaking", tuple(sorted(self.breaking_selectors)))

    def lookup(self, prop: str) -> PropertySupport | None:
        return self.properties.get(prop.lower())

    def is_known(self, prop: str) -> bool:
        return prop.lower() in self.properties

    def is_native(self, prop: str) -> bool:
        support = self.lookup(prop)
        return support is not None and support.native

    def breaking_match(self, text: str) -> str | None:
        """Return the alphabetically first denylisted substring of *text*, if any."""
        lowered = text.lower()
        for breaking in self._ordered_breaking:
            if breaking in lowered:
                return breaking
        return None


def _read_json(path: Path | None, default_name: str) -> Any:
    try:
        if path is None:
            text = resources.files(_DATA_PACKAGE).joinpath(default_name).read_text(encoding="utf-8")
        else:
            text = Path(path).read_text(encoding="utf-8")
        return json.loads(text)
    except (OSError, json.JSONDecodeError) as exc:
        raise PolicyError(
            f"Failed to load {default_name}: {exc}", path=path or default_name, cause=exc
        ) from exc


def _support_from_json(name: str, entry: Any, path: Any) -> PropertySupport:
    if not isinstance(entry, Mapping):
        raise PolicyError(f"Property '{name}' must map to an object", path=path)
    fields = {str(k).lower(): v for k, v in entry.items()}
    animatable = fields.get("animatable")
    description = fields.get("description")
    return PropertySupport(
        native=fields.get("native") is True,
        inherited=fields.get("inherited") is True,
        animatable=str(animatable) if animatable is not None else None,
        description=str(description) if description is not None else None,
    )


def load_property_table(path: str | Path | None = None) -> dict[str, PropertySupport]:
    """Load ``{property: {native, inherited, animatable, description}}``.

    With no *path* the table bundled with the package is used.
    """
    data = _read_json(Path(path) if path else None, PROPERTIES_FILE)
    if not isinstance(data, Mapping):
        raise PolicyError("Property table must be a JSON object", path=path or PROPERTIES_FILE)
    return {
        str(name): _support_from_json(str(name), entry, path or PROPERTIES_FILE)
        for name, entry in data.items()
    }


def load_breaking_selectors(path: str | Path | None = None) -> list[str]:
    """Load the JSON array of breaking selector substrings."""
    data = _read_json(Path(path) if path else None, BREAKING_SELECTORS_FILE)
    if not isinstance(data, list) or not all(isinstance(s, str) for s in data):
        raise PolicyError(
            "Breaking selectors must be a JSON array of strings",
            path=path or BREAKING_SELECTORS_FILE,
        )
    return data


def load_policy(
    properties_path: str | Path | None = None,
    breaking_path: str | Path | None = None,
    extra_breaking: Iterable[str] = (),
) -> TranslationPolicy:
    """Build a :class:`TranslationPolicy` from data files (bundled by default)."""
    breaking = list(load_breaking_selectors(breaking_path)) + list(extra_breaking)
    return TranslationPolicy(
        properties=load_property_table(properties_path),
        breaking_selectors=frozenset(breaking),
    )
