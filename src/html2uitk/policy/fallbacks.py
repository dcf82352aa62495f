"""Fallback synthesis: substitute declarations for properties USS lacks.

The table lives in ``data/fallbacks.json``::

    {
      "text-align": [
        {"emit": [{"property": "-unity-text-align", "map": {"center": "middle-center"}}]}
      ],
      "display": [
        {"when": {"equals": ["flex"]},
         "emit": [{"property": "flex-direction", "value": "row"}]}
      ]
    }

Each source property has an ordered list of rules; the first rule whose
``when`` guard matches the value produces the substitutes.  A substitute
carries exactly one of ``value`` (``$value`` expands to the source value),
``map`` (keyword table) or ``transform`` (a named function below).
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from functools import lru_cache
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Mapping

from html2uitk.errors import PolicyError
from html2uitk.units import term_to_px
from html2uitk.uss.parser import split_top_level

__all__ = [
    "FallbackRule",
    "FallbackSubstitute",
    "FallbackTable",
    "SHADOW_COLOR",
    "default_fallbacks",
    "load_fallbacks",
]

FALLBACKS_FILE = "fallbacks.json"

SHADOW_COLOR = "rgba(0, 0, 0, 0.4)"


# ---------------------------------------------------------------------------
# Named transforms
# ---------------------------------------------------------------------------


def _shadow(value: str) -> str | None:
    """Approximate the first shadow with up to three pixel offsets + fixed color."""
    first = split_top_level(value)[0]
    offsets: list[str] = []
    for term in first.split():
        px = term_to_px(term)
        if px is None or len(offsets) == 3:
            break
        offsets.append(px)
    if not offsets:
        return None
    return " ".join(offsets + [SHADOW_COLOR])


def _edge(index: int) -> Callable[[str], str | None]:
    """Pick one side out of a CSS 1-4 value box shorthand."""

    def pick(value: str) -> str | None:
        parts = value.split()
        if not parts or len(parts) > 4:
            return None
        top = parts[0]
        right = parts[1] if len(parts) > 1 else top
        bottom = parts[2] if len(parts) > 2 else top
        left = parts[3] if len(parts) > 3 else right
        return (top, right, bottom, left)[index]

    return pick


TRANSFORMS: Mapping[str, Callable[[str], str | None]] = MappingProxyType({
    "shadow": _shadow,
    "edge-top": _edge(0),
    "edge-right": _edge(1),
    "edge-bottom": _edge(2),
    "edge-left": _edge(3),
})


# ---------------------------------------------------------------------------
# Table model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FallbackSubstitute:
    """One replacement declaration produced by a fallback rule."""

    property: str
    value: str | None = None
    keyword_map: Mapping[str, str] | None = None
    transform: str | None = None

    def render(self, source_value: str) -> str | None:
        if self.value is not None:
            return self.value.replace("$value", source_value)
        if self.keyword_map is not None:
            return self.keyword_map.get(source_value.strip().lower())
        if self.transform is not None:
            return TRANSFORMS[self.transform](source_value)
        return None


@dataclass(frozen=True)
class FallbackRule:
    """A guarded list of substitutes.  An empty guard always matches."""

    substitutes: tuple[FallbackSubstitute, ...]
    equals: frozenset[str] | None = None
    not_equals: frozenset[str] | None = None
    contains: str | None = None

    def matches(self, value: str) -> bool:
        lowered = value.strip().lower()
        if self.equals is not None and lowered not in self.equals:
            return False
        if self.not_equals is not None and lowered in self.not_equals:
            return False
        if self.contains is not None and self.contains not in lowered:
            return False
        return True


@dataclass(frozen=True)
class FallbackTable:
    """Read-only mapping from source property to its ordered fallback rules."""

    rules: Mapping[str, tuple[FallbackRule, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        table = {name.lower(): tuple(rules) for name, rules in self.rules.items()}
        object.__setattr__(self, "rules", MappingProxyType(table))

    def __contains__(self, prop: object) -> bool:
        return isinstance(prop, str) and prop.lower() in self.rules

    def synthesize(self, prop: str, value: str) -> list[tuple[str, str]]:
        """Return ``(property, value)`` substitutes for *prop*: *value*.

        Substitutes whose value renders empty are left out; an empty list
        means the table has nothing for this declaration.
        """
        for rule in self.rules.get(prop.lower(), ()):
            if not rule.matches(value):
                continue
            result: list[tuple[str, str]] = []
            for substitute in rule.substitutes:
                rendered = substitute.render(value)
                if rendered and rendered.strip():
                    result.append((substitute.property, rendered.strip()))
            return result
        return []


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def _lowered_set(raw: Any, where: str) -> frozenset[str] | None:
    if raw is None:
        return None
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list):
        raise PolicyError(f"{where}: expected a string or list of strings")
    return frozenset(str(v).lower() for v in raw)


def _substitute_from_json(raw: Any, where: str) -> FallbackSubstitute:
    if not isinstance(raw, Mapping) or not raw.get("property"):
        raise PolicyError(f"{where}: substitute needs a 'property'")
    given = [k for k in ("value", "map", "transform") if k in raw]
    if len(given) != 1:
        raise PolicyError(f"{where}: substitute needs exactly one of value, map, transform")
    keyword_map = None
    if "map" in raw:
        if not isinstance(raw["map"], Mapping):
            raise PolicyError(f"{where}: 'map' must be an object")
        keyword_map = MappingProxyType({str(k).lower(): str(v) for k, v in raw["map"].items()})
    transform = raw.get("transform")
    if transform is not None and transform not in TRANSFORMS:
        raise PolicyError(f"{where}: unknown transform '{transform}'")
    value = raw.get("value")
    return FallbackSubstitute(
        property=str(raw["property"]),
        value=str(value) if value is not None else None,
        keyword_map=keyword_map,
        transform=transform,
    )


def _rule_from_json(raw: Any, where: str) -> FallbackRule:
    if not isinstance(raw, Mapping) or not isinstance(raw.get("emit"), list):
        raise PolicyError(f"{where}: rule needs an 'emit' list")
    guard = raw.get("when") or {}
    if not isinstance(guard, Mapping):
        raise PolicyError(f"{where}: 'when' must be an object")
    contains = guard.get("contains")
    return FallbackRule(
        substitutes=tuple(
            _substitute_from_json(s, f"{where}.emit[{i}]") for i, s in enumerate(raw["emit"])
        ),
        equals=_lowered_set(guard.get("equals"), f"{where}.when.equals"),
        not_equals=_lowered_set(guard.get("not_equals"), f"{where}.when.not_equals"),
        contains=str(contains).lower() if contains is not None else None,
    )


def table_from_dict(data: Mapping[str, Any]) -> FallbackTable:
    rules: dict[str, tuple[FallbackRule, ...]] = {}
    for prop, entries in data.items():
        if not isinstance(entries, list):
            raise PolicyError(f"fallbacks['{prop}']: expected a list of rules")
        rules[prop] = tuple(
            _rule_from_json(entry, f"fallbacks['{prop}'][{i}]") for i, entry in enumerate(entries)
        )
    return FallbackTable(rules=rules)


def load_fallbacks(path: str | Path | None = None) -> FallbackTable:
    """Load a fallback table from *path*, or the bundled one."""
    try:
        if path is None:
            text = resources.files("html2uitk.data").joinpath(FALLBACKS_FILE).read_text(
                encoding="utf-8"
            )
        else:
            text = Path(path).read_text(encoding="utf-8")
        data = json.loads(text)
    except (OSError, json.JSONDecodeError) as exc:
        raise PolicyError(
            f"Failed to load fallback table: {exc}", path=path or FALLBACKS_FILE, cause=exc
        ) from exc
    if not isinstance(data, Mapping):
        raise PolicyError("Fallback table must be a JSON object", path=path or FALLBACKS_FILE)
    return table_from_dict(data)


@lru_cache(maxsize=1)
def default_fallbacks() -> FallbackTable:
    """The bundled table, loaded once per process."""
    return load_fallbacks()
