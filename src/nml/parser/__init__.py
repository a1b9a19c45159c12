from nml.parser.blocks import BlockParser
from nml.parser.directives import DirectiveKind, DirectiveProcessor, parse_directive_header
from nml.parser.elements import ELEMENT_TAGS, INFERENCE_RULES, classify
from nml.parser.lexer import LineCursor, SourceLine, split_lines, tokenize
from nml.parser.variables import collect_variables, render_variables

__all__ = [
    "BlockParser",
    "DirectiveKind",
    "DirectiveProcessor",
    "parse_directive_header",
    "ELEMENT_TAGS",
    "INFERENCE_RULES",
    "classify",
    "LineCursor",
    "SourceLine",
    "split_lines",
    "tokenize",
    "collect_variables",
    "render_variables",
]
