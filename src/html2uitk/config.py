"""Conversion configuration: asset table and markup options."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from html2uitk.errors import ConfigError

__all__ = ["AssetConfig", "ConfigOptions", "ConverterConfig", "load_config"]


@dataclass(frozen=True)
class AssetConfig:
    path: str = ""


@dataclass(frozen=True)
class ConfigOptions:
    uppercase: bool = False
    focusable: bool | None = None  # None leaves the attribute off


@dataclass(frozen=True)
class ConverterConfig:
    """Assets referenced by stylesheets plus options for the UXML writer.

    Asset names are matched case-insensitively; keys are stored lower-cased.
    """

    assets: Mapping[str, AssetConfig] = field(default_factory=dict)
    options: ConfigOptions = field(default_factory=ConfigOptions)

    def __post_init__(self) -> None:
        normalized = {name.lower(): asset for name, asset in self.assets.items()}
        object.__setattr__(self, "assets", MappingProxyType(normalized))

    def asset_path(self, name: str) -> str | None:
        """Resolve *name* (quotes stripped) to its asset path, if configured."""
        cleaned = name.strip().strip("'\"").strip().lower()
        asset = self.assets.get(cleaned)
        if asset is None or not asset.path.strip():
            return None
        return asset.path


def _lower_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    return {str(k).lower(): v for k, v in data.items()}


def _parse_options(raw: Any) -> ConfigOptions:
    if not isinstance(raw, Mapping):
        return ConfigOptions()
    opts = _lower_keys(raw)
    focusable = opts.get("focusable")
    return ConfigOptions(
        uppercase=opts.get("uppercase") is True,
        focusable=focusable if isinstance(focusable, bool) else None,
    )


def _parse_assets(raw: Any) -> dict[str, AssetConfig]:
    if not isinstance(raw, Mapping):
        return {}
    assets: dict[str, AssetConfig] = {}
    for name, entry in raw.items():
        if isinstance(entry, Mapping):
            path = _lower_keys(entry).get("path") or ""
        else:
            path = ""
        assets[str(name)] = AssetConfig(path=str(path))
    return assets


def config_from_dict(data: Mapping[str, Any]) -> ConverterConfig:
    """Build a :class:`ConverterConfig` from decoded JSON (keys case-insensitive)."""
    top = _lower_keys(data)
    return ConverterConfig(
        assets=_parse_assets(top.get("assets")),
        options=_parse_options(top.get("options")),
    )


def load_config(path: str | Path) -> ConverterConfig:
    """Load a JSON configuration file.

    Raises :class:`ConfigError` when the file cannot be read or is not a JSON
    object.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Failed to load configuration: {exc}", path=path, cause=exc) from exc
    if data is None:
        return ConverterConfig()
    if not isinstance(data, Mapping):
        raise ConfigError("Configuration must be a JSON object", path=path)
    return config_from_dict(data)
