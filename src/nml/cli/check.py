"""CLI command: nml check -- compile a DSL document and report diagnostics."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from nml.compiler import compile_dsl
from nml.model.diagnostic import Severity


@click.command()
@click.argument("dslfile", type=click.Path(exists=True, dir_okay=False))
@click.option("--strict", is_flag=True, help="Exit with code 1 when any warning is reported.")
def check(dslfile: str, strict: bool) -> None:
    """Compile a DSL document and print its diagnostics.

    Exits with code 0 unless --strict is given and warnings were found.
    """
    dsl_path = Path(dslfile)
    result = compile_dsl(dsl_path.read_text(encoding="utf-8"))
    diagnostics = result.diagnostics

    if not diagnostics:
        click.echo(f"OK: {dsl_path.name} compiled cleanly (0 diagnostics)")
        sys.exit(0)

    warnings = [d for d in diagnostics if d.severity is Severity.WARNING]
    infos = [d for d in diagnostics if d.severity is Severity.INFO]

    for diag in diagnostics:
        click.echo(str(diag))

    click.echo()
    click.echo(f"Summary: {len(warnings)} warning(s), {len(infos)} info")

    if strict and warnings:
        sys.exit(1)
    sys.exit(0)
