"""html2uitk CLI entry point: Click group with subcommands."""

import logging

import click

from html2uitk import __version__


@click.group()
@click.version_option(version=__version__, prog_name="html2uitk")
@click.option("-v", "--verbose", is_flag=True, help="Log conversion details to stderr")
def cli(verbose: bool) -> None:
    """html2uitk - convert HTML/CSS into Unity UI Toolkit UXML/USS."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Import and register subcommands
from html2uitk.cli.convert import convert  # noqa: E402
from html2uitk.cli.uss import uss  # noqa: E402
from html2uitk.cli.inspect import inspect  # noqa: E402

cli.add_command(convert)
cli.add_command(uss)
cli.add_command(inspect)
