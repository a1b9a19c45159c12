"""CLI command: nml inspect -- display the compiled element tree."""

from __future__ import annotations

from pathlib import Path

import click

from nml.compiler import compile_dsl
from nml.model.element import ElementNode


def _describe(node: ElementNode) -> str:
    parts = [node.tag]
    if node.id:
        parts.append(f"#{node.id}")
    parts.extend(f".{c}" for c in node.classes)
    label = "".join(parts)
    if node.text:
        text = node.text[:40] + "..." if len(node.text) > 40 else node.text
        label += f' "{text}"'
    return label


@click.command()
@click.argument("dslfile", type=click.Path(exists=True, dir_okay=False))
def inspect(dslfile: str) -> None:
    """Compile a DSL document and display its element tree.

    Shows one line per element (tag, id, classes, text) indented by depth,
    followed by stylesheet counts.
    """
    result = compile_dsl(Path(dslfile).read_text(encoding="utf-8"))

    def _show(node: ElementNode, level: int) -> None:
        click.echo("  " * level + _describe(node))
        for child in node.children:
            _show(child, level + 1)

    click.echo("Tree:")
    for node in result.elements:
        _show(node, 1)
    click.echo()

    rules = [line for line in result.stylesheet.splitlines() if line.lstrip().startswith(".")]
    media = result.stylesheet.count("@media")
    keyframes = result.stylesheet.count("@keyframes")
    click.echo(f"Class rules: {len(rules)}")
    click.echo(f"Media blocks: {media}")
    click.echo(f"Keyframes: {keyframes}")
    click.echo(f"Diagnostics: {len(result.diagnostics)}")
