"""Document assembler: runs the compile passes and builds the (tree, stylesheet) pair."""

from __future__ import annotations

import logging

from nml.config import BASELINE_RULES, DEFAULT_CONFIG, CompilerConfig
from nml.context import CompileContext
from nml.model.element import CompileResult, ElementNode, prune_empty
from nml.parser.blocks import BlockParser
from nml.parser.directives import DirectiveProcessor
from nml.parser.lexer import split_lines
from nml.parser.variables import collect_variables, render_variables

__all__ = ["compile_dsl", "assemble_stylesheet"]

logger = logging.getLogger(__name__)


def compile_dsl(source: str, config: CompilerConfig | None = None) -> CompileResult:
    """Compile a DSL document into an element tree and a stylesheet.

    Passes:
        1. variable lines populate the variable table;
        2. column-0 directive blocks become stylesheet fragments (keyframe
           initial states are registered here, before any element uses them);
        3. the remaining lines are parsed into the element forest.

    Never raises for malformed input; recoveries are listed in
    ``CompileResult.diagnostics``.
    """
    config = config or DEFAULT_CONFIG
    ctx = CompileContext(config)

    lines = split_lines(source, config.indent_unit)
    lines = collect_variables(lines, ctx)
    directives = DirectiveProcessor(ctx)
    lines = directives.collect_top_level(lines)
    elements = BlockParser(ctx, directives).parse(lines)

    root = ElementNode(tag="div", id=config.root_id, children=prune_empty(elements))
    stylesheet = assemble_stylesheet(ctx)
    logger.debug(
        "Compiled %d element(s), %d generated class(es), %d diagnostic(s)",
        sum(1 for _ in root.walk()) - 1,
        len(ctx.classes),
        len(ctx.diagnostics),
    )
    return CompileResult(root=root, stylesheet=stylesheet, diagnostics=ctx.diagnostics)


def _baseline() -> str:
    body = "\n".join(f"  {prop}: {value};" for prop, value in BASELINE_RULES)
    return f"body {{\n{body}\n}}"


def assemble_stylesheet(ctx: CompileContext) -> str:
    """Join the stylesheet sections in their fixed order."""
    sections: list[str] = [render_variables(ctx)]
    if ctx.config.baseline:
        sections.append(_baseline())
    if ctx.utilities:
        sections.append(ctx.utilities.render())
    sections.extend(ctx.directive_fragments)
    for query, block in ctx.inline_media.items():
        if block:
            sections.append(f"@media {query} {{\n{block.render(indent='  ')}\n}}")
    return "\n\n".join(sections) + "\n"
