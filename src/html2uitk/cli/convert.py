"""CLI command: html2uitk convert -- HTML/CSS files to UXML/USS files."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from html2uitk.cli.common import echo_summary, load_settings
from html2uitk.errors import Html2UitkError
from html2uitk.markup.extract import extract_css
from html2uitk.markup.uxml import UxmlConverter


def _extract_stylesheets(
    inputs: tuple[str, ...], output_dir: Path, css_output_name: str | None
) -> tuple[list[Path], bool]:
    written: list[Path] = []
    failed = False
    click.echo("Extracting CSS from HTML files...")
    for html_path in map(Path, inputs):
        try:
            extracted = extract_css(html_path.read_text(encoding="utf-8"))
            if not extracted.has_css:
                continue
            name = css_output_name or f"{html_path.stem}-styles"
            target = output_dir / f"{name}.css"
            target.write_text(extracted.combined(), encoding="utf-8")
        except OSError as exc:
            click.echo(f"Failed to extract CSS from '{html_path}': {exc}", err=True)
            failed = True
            continue
        written.append(target)
        click.echo(f"{target.name} CSS extracted")
    return written, failed


@click.command()
@click.option(
    "-i", "--input", "inputs", multiple=True, required=True,
    type=click.Path(exists=True, dir_okay=False), help="HTML file to convert (repeatable)",
)
@click.option(
    "--css", "css_files", multiple=True,
    type=click.Path(exists=True, dir_okay=False), help="CSS file to convert (repeatable)",
)
@click.option(
    "--reset", "reset_css", default=None,
    type=click.Path(exists=True, dir_okay=False), help="Reset stylesheet, converted last",
)
@click.option(
    "-c", "--config", "config_path", default=None,
    type=click.Path(exists=True, dir_okay=False), help="JSON configuration (assets, options)",
)
@click.option(
    "-o", "--output", "output_dir", required=True,
    type=click.Path(file_okay=False), help="Output directory",
)
@click.option(
    "--extract-css/--no-extract-css", "extract", default=True,
    help="Extract <style> blocks from the HTML when no --css is given",
)
@click.option("--css-output-name", default=None, help="Base name for extracted CSS files")
@click.option(
    "--properties", "properties_path", default=None,
    type=click.Path(exists=True, dir_okay=False), help="Custom USS property table",
)
@click.option(
    "--breaking", "breaking_path", default=None,
    type=click.Path(exists=True, dir_okay=False), help="Custom breaking-selector list",
)
def convert(
    inputs: tuple[str, ...],
    css_files: tuple[str, ...],
    reset_css: str | None,
    config_path: str | None,
    output_dir: str,
    extract: bool,
    css_output_name: str | None,
    properties_path: str | None,
    breaking_path: str | None,
) -> None:
    """Convert HTML files to UXML and their stylesheets to USS.

    Writes <name>.uxml for every HTML input and <name>.uss for every
    stylesheet into the output directory.  Exits with code 1 when any file
    could not be processed.
    """
    try:
        config, uss_converter = load_settings(config_path, properties_path, breaking_path)
    except Html2UitkError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    out = Path(output_dir)
    try:
        out.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        click.echo(f"Failed to create output directory '{out}': {exc}", err=True)
        sys.exit(1)

    failed = False
    stylesheets = [Path(p) for p in css_files]
    if extract and not css_files:
        extracted, failed = _extract_stylesheets(inputs, out, css_output_name)
        stylesheets.extend(extracted)

    uxml_converter = UxmlConverter(config)
    for html_path in map(Path, inputs):
        try:
            uxml = uxml_converter.convert(html_path.read_text(encoding="utf-8"))
            (out / f"{html_path.stem}.uxml").write_text(uxml, encoding="utf-8")
        except OSError as exc:
            click.echo(f"Failed to process HTML file '{html_path}': {exc}", err=True)
            failed = True
            continue
        click.echo(f"{html_path.stem} UXML written")

    if reset_css:
        stylesheets.append(Path(reset_css))

    for css_path in stylesheets:
        try:
            result = uss_converter.convert_with_report(css_path.read_text(encoding="utf-8"))
            (out / f"{css_path.stem}.uss").write_text(result.text, encoding="utf-8")
        except OSError as exc:
            click.echo(f"Failed to process CSS file '{css_path}': {exc}", err=True)
            failed = True
            continue
        echo_summary(result)
        click.echo(f"{css_path.stem} USS written")

    if failed:
        sys.exit(1)
