"""Element tree, declaration and diagnostic types."""

from nml.model.declaration import Declaration, parse_declarations, render_declarations
from nml.model.diagnostic import Diagnostic, Severity
from nml.model.element import CompileResult, ElementNode, prune_empty

__all__ = [
    # element tree
    "ElementNode",
    "CompileResult",
    "prune_empty",
    # declarations
    "Declaration",
    "parse_declarations",
    "render_declarations",
    # diagnostic
    "Severity",
    "Diagnostic",
]
