"""Directive processor: media-query and keyframe blocks introduced by ``@``.

Header grammar::

    @mobile | @tablet          predefined breakpoint queries
    @maxw=<px> | @minw=<px>    explicit width queries
    @keyframes <name>          keyframe animation

A header containing ``{`` owns everything up to the matching ``}`` (brace
counting). A header without one owns the following more-indented lines.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum

from nml.context import CompileContext
from nml.model.declaration import Declaration, render_declarations
from nml.parser.elements import selector_tag
from nml.parser.lexer import (
    LineCursor,
    SourceLine,
    brace_delta,
    split_assignment,
    strip_quotes,
    tokenize,
)
from nml.styles.keys import StyleKey
from nml.styles.resolver import ResolveMode, resolve_declarations
from nml.styles.rules import RuleBlock, StyleGroups

__all__ = [
    "DirectiveBlock",
    "DirectiveHeader",
    "DirectiveKind",
    "DirectiveProcessor",
    "collect_block",
    "parse_directive_header",
]

logger = logging.getLogger(__name__)

_WIDTH_RE = re.compile(r"^@(maxw|minw)=(\d+)")
_STEP_RE = re.compile(r"^(?:\d+(?:\.\d+)?%|from|to)$")
_INITIAL_STEPS = ("0%", "from")


class DirectiveKind(Enum):
    MEDIA = "media"
    KEYFRAMES = "keyframes"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class DirectiveHeader:
    """The parsed opening line of a directive block."""

    kind: DirectiveKind
    text: str
    query: str | None = None
    name: str | None = None


@dataclass
class DirectiveBlock:
    header: DirectiveHeader
    line: int
    lines: list[SourceLine] = field(default_factory=list)
    terminated: bool = True


def parse_directive_header(text: str, breakpoints: dict[str, str]) -> DirectiveHeader:
    """Classify a directive opening line (without its ``{``)."""
    text = text.strip()
    words = text[1:].split()
    word = words[0] if words else ""

    if word == "keyframes":
        name = words[1] if len(words) > 1 else None
        return DirectiveHeader(DirectiveKind.KEYFRAMES, text, name=name)
    if word in breakpoints:
        return DirectiveHeader(DirectiveKind.MEDIA, text, query=breakpoints[word])
    match = _WIDTH_RE.match(text)
    if match:
        bound = "max" if match.group(1) == "maxw" else "min"
        query = f"({bound}-width: {match.group(2)}px)"
        return DirectiveHeader(DirectiveKind.MEDIA, text, query=query)
    return DirectiveHeader(DirectiveKind.UNKNOWN, text)


def _header_rest(text: str, kind: DirectiveKind) -> str:
    """Text following the directive word (and keyframes name) on a header line."""
    skip = 2 if kind is DirectiveKind.KEYFRAMES else 1
    parts = text.split(None, skip)
    return parts[skip].strip() if len(parts) > skip else ""


def collect_block(
    cursor: LineCursor, breakpoints: dict[str, str], indent_unit: int = 2
) -> DirectiveBlock:
    """Consume a directive header and its body from *cursor*.

    A rule written after the directive word on a header without ``{``
    (``@mobile .card pad=8``) becomes the first body line. An unterminated
    brace block runs to the end of input and is marked ``terminated=False``.
    """
    opening = cursor.advance()
    head, brace, rest = opening.text.partition("{")
    block = DirectiveBlock(header=parse_directive_header(head, breakpoints), line=opening.number)

    if not brace:
        rule = _header_rest(head, block.header.kind)
        if rule:
            block.lines.append(SourceLine(opening.number, opening.indent + indent_unit, rule))
        while not cursor.at_end:
            nxt = cursor.peek()
            if nxt is None or not (nxt.is_blank or nxt.indent > opening.indent):
                break
            block.lines.append(cursor.advance())
        return block

    depth = 1 + brace_delta(rest)
    if depth <= 0:
        rest = rest.rsplit("}", 1)[0]
    if rest.strip():
        block.lines.append(SourceLine(opening.number, opening.indent + indent_unit, rest.strip()))
    while depth > 0 and not cursor.at_end:
        line = cursor.advance()
        depth += brace_delta(line.text)
        block.lines.append(line)
    block.terminated = depth <= 0
    return block


def _content_tokens(line: SourceLine) -> list[str]:
    if line.is_skippable:
        return []
    return [t for t in tokenize(line.text) if t not in ("{", "}")]


class DirectiveProcessor:
    """Turns directive blocks into stylesheet fragments on a CompileContext."""

    def __init__(self, ctx: CompileContext) -> None:
        self.ctx = ctx

    # --- entry points ---------------------------------------------------------

    def collect_top_level(self, lines: list[SourceLine]) -> list[SourceLine]:
        """Process every column-0 directive block; return the remaining lines."""
        cursor = LineCursor(lines)
        remaining: list[SourceLine] = []
        while not cursor.at_end:
            line = cursor.peek()
            if line is not None and line.is_directive and line.indent == 0:
                self.process_block(self._collect(cursor))
            else:
                remaining.append(cursor.advance())
        logger.debug("Collected %d directive fragment(s)", len(self.ctx.directive_fragments))
        return remaining

    def process_block(self, block: DirectiveBlock) -> None:
        """Render one top-level block and append its fragment to the context."""
        header = block.header
        if header.kind is DirectiveKind.MEDIA:
            fragment = self._media_fragment(block)
        elif header.kind is DirectiveKind.KEYFRAMES:
            fragment = self._keyframes_fragment(block)
        else:
            self.ctx.report(
                "unknown-directive",
                f"Directive '{header.text}' is not recognized; its block was skipped.",
                line=block.line,
                fix="Use @mobile, @tablet, @maxw=<px>, @minw=<px> or @keyframes <name>.",
            )
            fragment = ""
        if fragment:
            self.ctx.directive_fragments.append(fragment)

    def process_inline(self, cursor: LineCursor, has_target: bool = True) -> str | None:
        """Handle a directive block found inside the element tree.

        Returns the class generated from the block's first content line, to be
        attached to the preceding element; its rule is placed inside the
        block's media query. Without a preceding element (*has_target* false)
        a media block is consumed and reported, and nothing is emitted.
        """
        block = self._collect(cursor)
        header = block.header
        if header.kind is DirectiveKind.KEYFRAMES or header.kind is DirectiveKind.UNKNOWN:
            self.process_block(block)
            return None
        if not has_target or header.query is None:
            self.ctx.report(
                "orphan-directive",
                f"Directive '{header.text}' has no preceding element in its block; skipped.",
                line=block.line,
                fix="Place the directive after the element it styles.",
            )
            return None

        for line in block.lines:
            tokens = _content_tokens(line)
            if not tokens or tokens[0].startswith((".", "#")):
                continue
            if not any(split_assignment(t) for t in tokens):
                continue
            if split_assignment(tokens[0]) is None:
                tokens = tokens[1:]
            declarations: dict[str, Declaration] = {}
            for _, decls in self._resolve_line(tokens, line, ResolveMode.FORCED):
                for decl in decls:
                    declarations[decl.property] = decl
            if not declarations:
                continue
            text = render_declarations(declarations.values())
            class_name = self.ctx.classes.class_for(text)
            self.ctx.media_block(header.query).add_class_rule(class_name, text)
            return class_name
        return None

    # --- helpers --------------------------------------------------------------

    def _collect(self, cursor: LineCursor) -> DirectiveBlock:
        block = collect_block(cursor, self.ctx.config.breakpoints, self.ctx.config.indent_unit)
        if not block.terminated:
            self.ctx.report(
                "unterminated-block",
                f"Directive '{block.header.text}' was not closed; closed at end of input.",
                line=block.line,
                fix="Add a closing '}' line.",
            )
        return block

    def _resolve_line(
        self, tokens: list[str], line: SourceLine, mode: ResolveMode
    ) -> list[tuple[StyleKey, list[Declaration]]]:
        """Resolve the style tokens of one rule line, in token order."""
        pairs: list[tuple[str, str]] = []
        for token in tokens:
            assignment = split_assignment(token)
            if assignment is not None:
                pairs.append(assignment)
                continue
            if pairs and (key := StyleKey.lookup(pairs[-1][0])) is not None and key.multiword:
                pairs[-1] = (pairs[-1][0], f"{pairs[-1][1]} {token}")
                continue
            self.ctx.report(
                "skipped-token",
                f"Token '{token}' is not a key=value pair; skipped.",
                line=line.number,
            )

        resolved: list[tuple[StyleKey, list[Declaration]]] = []
        for key, value in pairs:
            style_key = StyleKey.lookup(key)
            if style_key is None:
                self.ctx.report(
                    "unknown-style-key",
                    f"Style key '{key}' is not recognized inside a directive; ignored.",
                    line=line.number,
                )
                continue
            decls = resolve_declarations(
                style_key, strip_quotes(value), self.ctx, mode, line=line.number
            )
            if decls:
                resolved.append((style_key, decls))
        return resolved

    def _media_fragment(self, block: DirectiveBlock) -> str:
        rules = RuleBlock()
        for line in block.lines:
            tokens = _content_tokens(line)
            if not tokens:
                continue
            if split_assignment(tokens[0]) is not None:
                selector = None
            else:
                selector, tokens = selector_tag(tokens[0]), tokens[1:]

            groups = StyleGroups()
            for style_key, decls in self._resolve_line(tokens, line, ResolveMode.FORCED):
                groups.add(style_key.category, decls)
            if not groups:
                self.ctx.report(
                    "empty-directive-rule",
                    f"Rule '{line.text}' produced no declarations.",
                    line=line.number,
                )
                continue
            for declarations in groups.declaration_strings():
                rules.add_class_rule(self.ctx.classes.class_for(declarations), declarations, selector)

        if not rules:
            return ""
        return f"@media {block.header.query} {{\n{rules.render(indent='  ')}\n}}"

    def _keyframes_fragment(self, block: DirectiveBlock) -> str:
        name = block.header.name
        if not name:
            self.ctx.report(
                "missing-keyframes-name",
                "@keyframes directive has no animation name; block skipped.",
                line=block.line,
            )
            return ""

        steps: dict[str, dict[str, Declaration]] = {}
        for line in block.lines:
            tokens = _content_tokens(line)
            if not tokens:
                continue
            step = tokens[0]
            if not _STEP_RE.match(step):
                self.ctx.report(
                    "keyframe-step",
                    f"'{step}' is not a keyframe step (expected N%, from or to); line skipped.",
                    line=line.number,
                )
                continue
            merged = steps.setdefault(step, {})
            for _, decls in self._resolve_line(tokens[1:], line, ResolveMode.NORMAL):
                for decl in decls:
                    merged[decl.property] = decl

        rules: list[str] = []
        for step, decls in steps.items():
            if not decls:
                continue
            text = render_declarations(decls.values())
            rules.append(f"  {step} {{ {text} }}")
            if step in _INITIAL_STEPS:
                self.ctx.register_initial_state(name, text)
        if not rules:
            return ""
        body = "\n".join(rules)
        return f"@keyframes {name} {{\n{body}\n}}"
