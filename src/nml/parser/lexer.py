"""Line lexer: source lines, token splitting, and the line cursor shared by parsing passes."""

from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = [
    "LineCursor",
    "SourceLine",
    "brace_delta",
    "expand_inline_blocks",
    "parse_selector_chain",
    "split_assignment",
    "split_lines",
    "strip_quotes",
    "tokenize",
]

# A token is a run of non-space characters in which "..." spans may contain
# whitespace; an unterminated quote runs to the end of the line.
_TOKEN_RE = re.compile(r'(?:[^\s"]+|"[^"]*(?:"|$))+')

_ASSIGNMENT_RE = re.compile(r"^([A-Za-z][A-Za-z0-9_:-]*)=(.*)$", re.DOTALL)

_QUOTED_RE = re.compile(r'"[^"]*(?:"|$)')


@dataclass(frozen=True)
class SourceLine:
    """One raw line: 1-based line number, leading-whitespace width, stripped text."""

    number: int
    indent: int
    text: str

    @property
    def is_blank(self) -> bool:
        return not self.text

    @property
    def is_comment(self) -> bool:
        if self.text.startswith("//"):
            return True
        return self.text == "#" or (self.text.startswith("#") and self.text[1:2].isspace())

    @property
    def is_brace(self) -> bool:
        return self.text in ("{", "}")

    @property
    def is_directive(self) -> bool:
        return self.text.startswith("@")

    @property
    def is_variable(self) -> bool:
        return self.text.startswith("$")

    @property
    def is_skippable(self) -> bool:
        return self.is_blank or self.is_comment

    def depth(self, indent_unit: int) -> int:
        return self.indent // indent_unit


def split_lines(source: str, indent_unit: int = 2) -> list[SourceLine]:
    """Split *source* into SourceLines; tabs count as one indent unit."""
    lines: list[SourceLine] = []
    for number, raw in enumerate(source.replace("\r\n", "\n").split("\n"), start=1):
        expanded = raw.expandtabs(indent_unit)
        text = expanded.strip()
        indent = len(expanded) - len(expanded.lstrip()) if text else 0
        lines.append(SourceLine(number=number, indent=indent, text=text))
    return lines


def tokenize(text: str) -> list[str]:
    """Split a line on whitespace, keeping quoted runs inside a single token."""
    return _TOKEN_RE.findall(text)


def strip_quotes(value: str) -> str:
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    if value.startswith('"'):
        return value[1:]
    return value


def split_assignment(token: str) -> tuple[str, str] | None:
    """Split a ``key=value`` token; returns None when the token has no such shape."""
    match = _ASSIGNMENT_RE.match(token)
    if match is None or not match.group(2):
        return None
    return match.group(1), match.group(2)


def parse_selector_chain(token: str) -> tuple[str, list[str]]:
    """Parse ``#id.cls1.cls2`` or ``.cls1.cls2`` into (id, classes)."""
    element_id = ""
    classes: list[str] = []
    for part in re.findall(r"[#.][^#.]+", token):
        if part[0] == "#":
            element_id = part[1:]
        else:
            classes.append(part[1:])
    return element_id, classes


def brace_delta(text: str) -> int:
    """Opening minus closing braces in *text*, ignoring quoted spans."""
    bare = _QUOTED_RE.sub("", text)
    return bare.count("{") - bare.count("}")


def expand_inline_blocks(line: SourceLine, indent_unit: int = 2) -> list[SourceLine]:
    """Rewrite a single-line brace block into the equivalent multi-line form.

    ``c pad=8 { p t="hi" }`` becomes ``c pad=8 {`` / ``  p t="hi"`` / ``}``.
    Lines with at most a trailing ``{`` are returned unchanged.
    """
    tokens = tokenize(line.text)
    inner = tokens[:-1] if tokens and tokens[-1] == "{" else tokens
    if len(tokens) <= 1 or ("{" not in inner and "}" not in inner):
        return [line]

    out: list[SourceLine] = []
    indent = line.indent
    current: list[str] = []
    for token in tokens:
        if token == "{":
            current.append("{")
            out.append(SourceLine(line.number, indent, " ".join(current)))
            current = []
            indent += indent_unit
        elif token == "}":
            if current:
                out.append(SourceLine(line.number, indent, " ".join(current)))
                current = []
            indent = max(line.indent, indent - indent_unit)
            out.append(SourceLine(line.number, indent, "}"))
        else:
            current.append(token)
    if current:
        out.append(SourceLine(line.number, indent, " ".join(current)))
    return out


class LineCursor:
    """A forward-only position over a list of SourceLines, owned by one parsing pass."""

    def __init__(self, lines: list[SourceLine]) -> None:
        self._lines = lines
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    @property
    def at_end(self) -> bool:
        return self._pos >= len(self._lines)

    def peek(self) -> SourceLine | None:
        if self.at_end:
            return None
        return self._lines[self._pos]

    def upcoming(self, count: int = 1) -> list[SourceLine]:
        """Return up to *count* upcoming lines, skipping blanks and comments."""
        found: list[SourceLine] = []
        for line in self._lines[self._pos:]:
            if len(found) >= count:
                break
            if not line.is_skippable:
                found.append(line)
        return found

    def peek_content(self) -> SourceLine | None:
        ahead = self.upcoming(1)
        return ahead[0] if ahead else None

    def advance(self) -> SourceLine:
        line = self._lines[self._pos]
        self._pos += 1
        return line

    def __len__(self) -> int:
        return len(self._lines)
