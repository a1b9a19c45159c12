"""NML - compiles an indentation/brace markup DSL into an element tree and a stylesheet."""

from nml.compiler import compile_dsl
from nml.config import CompilerConfig
from nml.model import CompileResult, Diagnostic, ElementNode, Severity
from nml.render import HtmlRenderer, MountError, Renderer, mount, render_html

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "compile_dsl",
    "CompilerConfig",
    "CompileResult",
    "Diagnostic",
    "ElementNode",
    "Severity",
    "HtmlRenderer",
    "MountError",
    "Renderer",
    "mount",
    "render_html",
]
