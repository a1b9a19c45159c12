"""Variable pass: collects ``$name=value`` lines into the compile's variable table."""

from __future__ import annotations

import logging
import re

from nml.context import CompileContext
from nml.parser.lexer import SourceLine, strip_quotes

logger = logging.getLogger(__name__)

_DECLARATION_RE = re.compile(r"^\$([A-Za-z_][A-Za-z0-9_-]*)\s*=\s*(.+)$")
_REFERENCE_RE = re.compile(r"\$([A-Za-z_][A-Za-z0-9_-]*)")


def collect_variables(lines: list[SourceLine], ctx: CompileContext) -> list[SourceLine]:
    """Register every variable line on *ctx* and return the remaining lines.

    Values may reference other variables (``$accent=$primary``); references
    are rewritten to ``var(--name)``.
    """
    remaining: list[SourceLine] = []
    for line in lines:
        if not line.is_variable:
            remaining.append(line)
            continue
        match = _DECLARATION_RE.match(line.text)
        if match is None:
            ctx.report(
                "invalid-variable",
                f"Variable line '{line.text}' is not of the form $name=value; skipped.",
                line=line.number,
            )
            continue
        name, raw = match.group(1), strip_quotes(match.group(2).strip())
        ctx.declare_variable(name, _REFERENCE_RE.sub(r"var(--\1)", raw))
    logger.debug("Collected %d variable(s)", len(ctx.variables))
    return remaining


def render_variables(ctx: CompileContext) -> str:
    """Render the ``:root`` block: declared variables, or the default palette."""
    body = "\n".join(f"  --{name}: {value};" for name, value in ctx.effective_variables().items())
    return f":root {{\n{body}\n}}"
