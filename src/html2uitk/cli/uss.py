"""CLI command: html2uitk uss -- convert one stylesheet to stdout."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from html2uitk.cli.common import echo_summary, load_settings
from html2uitk.errors import Html2UitkError


@click.command()
@click.argument("cssfile", type=click.Path(exists=True, dir_okay=False))
@click.option("-c", "--config", "config_path", default=None, type=click.Path(exists=True))
@click.option("--properties", "properties_path", default=None, type=click.Path(exists=True))
@click.option("--breaking", "breaking_path", default=None, type=click.Path(exists=True))
def uss(
    cssfile: str,
    config_path: str | None,
    properties_path: str | None,
    breaking_path: str | None,
) -> None:
    """Convert a CSS file to USS and print it.

    Diagnostics go to stderr so stdout can be redirected into a .uss file.
    """
    try:
        _, converter = load_settings(config_path, properties_path, breaking_path)
        source = Path(cssfile).read_text(encoding="utf-8")
    except (Html2UitkError, OSError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    result = converter.convert_with_report(source)
    click.echo(result.text, nl=False)
    echo_summary(result)
