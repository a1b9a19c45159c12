"""NML CLI entry point: Click group with subcommands."""

import logging

import click

from nml import __version__


@click.group()
@click.version_option(version=__version__, prog_name="nml")
@click.option("-v", "--verbose", is_flag=True, help="Log compiler passes at DEBUG level.")
def cli(verbose: bool) -> None:
    """NML - compile markup DSL documents into HTML and CSS."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# Import and register subcommands
from nml.cli.check import check  # noqa: E402
from nml.cli.compile import compile_command  # noqa: E402
from nml.cli.inspect import inspect  # noqa: E402

cli.add_command(compile_command)
cli.add_command(check)
cli.add_command(inspect)
