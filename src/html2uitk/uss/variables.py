"""Loader for USS variable metadata exported from a reference theme."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from html2uitk.errors import MetadataError
from html2uitk.uss.model import VariableDefinition, VariableType

__all__ = ["load_variables", "variable_from_json"]

_TYPE_NAMES = {t.value: t for t in VariableType if t is not VariableType.UNKNOWN}


def _int_list(entry: dict[str, Any], key: str) -> tuple[int, ...]:
    values = entry.get(key)
    if not isinstance(values, list):
        return ()
    # bool is an int subclass; line numbers never are.
    return tuple(v for v in values if isinstance(v, int) and not isinstance(v, bool))


def variable_from_json(entry: dict[str, Any]) -> VariableDefinition:
    """Build a :class:`VariableDefinition` from one metadata object."""
    type_raw = entry.get("type")
    type_key = type_raw.lower() if isinstance(type_raw, str) else ""
    example = entry.get("value_example")
    return VariableDefinition(
        name=str(entry.get("name") or ""),
        type=_TYPE_NAMES.get(type_key, VariableType.UNKNOWN),
        defined=entry.get("defined") is True,
        example=example if isinstance(example, str) else None,
        lines_defined=_int_list(entry, "lines_defined"),
        lines_referenced=_int_list(entry, "lines_referenced"),
    )


def load_variables(path: str | Path) -> list[VariableDefinition]:
    """Load a JSON array of variable metadata objects from *path*."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise MetadataError("USS variable metadata file not found", path=path, cause=exc) from exc
    except (OSError, json.JSONDecodeError) as exc:
        raise MetadataError(f"Cannot read USS variable metadata: {exc}", path=path, cause=exc) from exc

    if not isinstance(data, list):
        raise MetadataError("USS variable metadata must be a JSON array", path=path)
    return [variable_from_json(entry) for entry in data if isinstance(entry, dict)]
