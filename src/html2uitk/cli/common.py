"""Helpers shared by the CLI commands."""

from __future__ import annotations

import click

from html2uitk.config import ConverterConfig, load_config
from html2uitk.convert.engine import ConversionResult, UssConverter
from html2uitk.policy.support import load_policy


def load_settings(
    config_path: str | None,
    properties_path: str | None = None,
    breaking_path: str | None = None,
) -> tuple[ConverterConfig, UssConverter]:
    """Load the configuration and build a converter; loader errors propagate."""
    config = load_config(config_path) if config_path else ConverterConfig()
    policy = load_policy(properties_path=properties_path, breaking_path=breaking_path)
    return config, UssConverter(policy, config=config)


def echo_summary(result: ConversionResult) -> None:
    for line in result.summary_lines():
        click.echo(line, err=True)
