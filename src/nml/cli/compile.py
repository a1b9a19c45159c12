"""CLI command: nml compile -- compile a DSL document to HTML, JSON or CSS."""

from __future__ import annotations

import json
from pathlib import Path

import click

from nml.compiler import compile_dsl
from nml.render import render_html


@click.command("compile")
@click.argument("dslfile", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["html", "json", "css"]),
    default="html",
    show_default=True,
    help="Output artifact.",
)
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Write to a file instead of stdout.")
def compile_command(dslfile: str, output_format: str, output: str | None) -> None:
    """Compile a DSL document.

    html prints the stylesheet and markup, json prints the element tree,
    stylesheet and diagnostics, css prints only the stylesheet.
    """
    source = Path(dslfile).read_text(encoding="utf-8")
    result = compile_dsl(source)

    if output_format == "json":
        text = json.dumps(result.to_dict(), indent=2)
    elif output_format == "css":
        text = result.stylesheet
    else:
        text = render_html(result)

    if output:
        Path(output).write_text(text, encoding="utf-8")
        click.echo(f"Wrote {output_format} to {output}")
    else:
        click.echo(text)
