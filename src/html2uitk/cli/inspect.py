"""CLI command: html2uitk inspect -- display the parsed stylesheet model."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from html2uitk.errors import Html2UitkError
from html2uitk.uss.model import SegmentType
from html2uitk.uss.parser import parse_stylesheet
from html2uitk.uss.variables import load_variables


@click.command()
@click.argument("cssfile", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--variables", "variables_path", default=None, type=click.Path(exists=True),
    help="USS variable metadata (JSON)",
)
def inspect(cssfile: str, variables_path: str | None) -> None:
    """Parse a stylesheet and display its rules.

    Shows every selector with its segment types and every declaration with
    its value kind, unit and importance.
    """
    try:
        variables = load_variables(variables_path) if variables_path else []
        stylesheet = parse_stylesheet(
            Path(cssfile).read_text(encoding="utf-8"), variables=variables
        )
    except (Html2UitkError, OSError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    click.echo(f"Rules: {len(stylesheet.rules)}")
    if stylesheet.variables:
        click.echo(f"Variables: {len(stylesheet.variables)}")
    click.echo()

    for index, rule in enumerate(stylesheet.rules, start=1):
        click.echo(f"Rule {index}:")
        for selector in rule.selectors:
            segments = " ".join(
                f"{s.type.name}({s.value})" for s in selector.segments
                if s.type is not SegmentType.WHITESPACE
            )
            click.echo(f"  selector {selector.raw}: {segments}")
        for declaration in rule.declarations:
            parts = [f"  {declaration.property}: {declaration.text}"]
            for fragment in declaration.value:
                parts.append(f"kind={fragment.kind.value}")
                if fragment.unit:
                    parts.append(f"unit={fragment.unit}")
            if declaration.important:
                parts.append("!important")
            click.echo("  ".join(parts))

    for variable in stylesheet.variables:
        click.echo(f"Variable {variable.name}: type={variable.type.value} defined={variable.defined}")
