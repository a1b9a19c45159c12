"""Block parser: builds the element forest from markup lines.

Nesting comes from two sources that may be mixed freely:

* indentation: a line indented deeper than the previous element becomes
  its child (depth = indent // indent_unit);
* braces: a line ending in ``{`` opens a child scope that runs until a
  lone ``}`` line, a dedent below the scope's first line, or end of input.

Each scope is parsed by a recursive call that shares one LineCursor.
"""

from __future__ import annotations

import logging

from nml.context import CompileContext
from nml.model.element import ElementNode
from nml.parser.directives import DirectiveProcessor
from nml.parser.elements import ELEMENT_TAGS, classify, is_selector_type
from nml.parser.lexer import (
    LineCursor,
    SourceLine,
    expand_inline_blocks,
    parse_selector_chain,
    split_assignment,
    strip_quotes,
    tokenize,
)
from nml.styles.keys import StyleKey
from nml.styles.resolver import ResolveMode, resolve_declarations
from nml.styles.rules import StyleGroups

__all__ = ["BlockParser"]

logger = logging.getLogger(__name__)

TEXT_KEYS = frozenset({"t", "text"})
CLASS_KEYS = frozenset({"cls", "class"})
LINK_KEY = "h"


class BlockParser:
    """Parse markup lines (variables and top-level directives already removed)."""

    def __init__(self, ctx: CompileContext, directives: DirectiveProcessor) -> None:
        self.ctx = ctx
        self.directives = directives
        self.indent_unit = ctx.config.indent_unit

    def parse(self, lines: list[SourceLine]) -> list[ElementNode]:
        """Return the root-level elements in source order."""
        expanded: list[SourceLine] = []
        for line in lines:
            if line.is_skippable or line.is_directive:
                expanded.append(line)
            else:
                expanded.extend(expand_inline_blocks(line, self.indent_unit))
        cursor = LineCursor(expanded)
        elements = self._parse_scope(cursor, braced=False)
        logger.debug("Parsed %d root element(s) from %d line(s)", len(elements), len(lines))
        return elements

    # --- scopes ---------------------------------------------------------------

    def _parse_scope(self, cursor: LineCursor, braced: bool, opened_at: int | None = None) -> list[ElementNode]:
        first = cursor.peek_content()
        start_indent = first.indent if (braced and first is not None) else 0

        roots: list[ElementNode] = []
        stack: list[ElementNode] = []
        last: ElementNode | None = None

        while (line := cursor.peek()) is not None:
            if line.is_skippable:
                cursor.advance()
                continue
            if line.text == "}":
                cursor.advance()
                if braced:
                    return roots
                self.ctx.report("stray-brace", "Closing '}' without an open block; ignored.", line=line.number)
                continue
            if line.indent < start_indent:
                if braced:
                    self.ctx.report(
                        "unterminated-block",
                        "Block was not closed before a dedent; closed implicitly.",
                        line=opened_at,
                        fix="Add a closing '}' line.",
                    )
                return roots
            if line.is_directive:
                class_name = self.directives.process_inline(cursor, has_target=last is not None)
                if class_name and last is not None:
                    last.add_class(class_name)
                continue
            if line.text == "{":
                cursor.advance()
                if last is not None:
                    last.children.extend(self._parse_scope(cursor, braced=True, opened_at=line.number))
                continue

            cursor.advance()
            node, opens_block = self._build_element(line, cursor)

            while stack and stack[-1].depth >= node.depth:
                stack.pop()
            if stack:
                stack[-1].append_child(node)
            else:
                roots.append(node)
            stack.append(node)
            last = node

            if opens_block:
                node.children.extend(self._parse_scope(cursor, braced=True, opened_at=line.number))

        if braced:
            self.ctx.report(
                "unterminated-block",
                "Block was not closed; closed at end of input.",
                line=opened_at,
                fix="Add a closing '}' line.",
            )
        return roots

    @staticmethod
    def _has_children(line: SourceLine, cursor: LineCursor, opens_block: bool) -> bool:
        ahead = cursor.upcoming(2)
        if not opens_block and ahead and ahead[0].text == "{":
            opens_block = True
            ahead = ahead[1:]
        if not ahead:
            return False
        child = ahead[0]
        if child.text == "}" or child.is_directive:
            return False
        return opens_block or child.indent > line.indent

    # --- elements -------------------------------------------------------------

    def _build_element(self, line: SourceLine, cursor: LineCursor) -> tuple[ElementNode, bool]:
        tokens = tokenize(line.text)
        opens_block = tokens[-1] == "{"
        if opens_block:
            tokens = tokens[:-1]
        element_type = tokens[0]

        element_id, classes = ("", [])
        if is_selector_type(element_type):
            element_id, classes = parse_selector_chain(element_type)
        elif element_type not in ELEMENT_TAGS:
            self.ctx.note(
                "unknown-element",
                f"Element type '{element_type}' is not recognized; treated as a generic container.",
                line=line.number,
            )

        text: str | None = None
        pending: list[tuple[str, str]] = []
        continuing = False
        for token in tokens[1:]:
            if token in ("{", "}"):
                continuing = False
                continue
            if is_selector_type(token):
                token_id, token_classes = parse_selector_chain(token)
                element_id = token_id or element_id
                classes.extend(token_classes)
                continuing = False
                continue
            assignment = split_assignment(token)
            if assignment is None:
                if continuing:
                    key, value = pending[-1]
                    pending[-1] = (key, f"{value} {token}")
                    continue
                self.ctx.report(
                    "skipped-token",
                    f"Token '{token}' is not an id, class or key=value pair; skipped.",
                    line=line.number,
                )
                continue
            key, value = assignment
            continuing = False
            if key in CLASS_KEYS:
                classes.extend(strip_quotes(value).split())
            elif key in TEXT_KEYS:
                text = strip_quotes(value)
            else:
                pending.append((key, value))
                style_key = StyleKey.lookup(key)
                continuing = style_key is not None and style_key.multiword

        has_children = self._has_children(line, cursor, opens_block)
        classes = list(dict.fromkeys(classes))
        tag = classify(element_type, classes, element_id, text, has_children)
        node = ElementNode(
            tag=tag,
            id=element_id,
            classes=classes,
            text=text,
            depth=line.depth(self.indent_unit),
        )
        self._apply_attributes(node, pending, line)
        return node, opens_block

    def _apply_attributes(self, node: ElementNode, pending: list[tuple[str, str]], line: SourceLine) -> None:
        groups = StyleGroups()
        for key, raw in pending:
            value = strip_quotes(raw)
            if key == LINK_KEY and node.tag == "a":
                node.attributes["href"] = value
            elif key == "role":
                node.attributes["role"] = value
            elif key == "aria":
                name, sep, aria_value = value.partition(":")
                if sep and name and aria_value:
                    node.attributes[f"aria-{name}"] = aria_value
                else:
                    self.ctx.report(
                        "invalid-aria",
                        f"aria value '{value}' is not of the form name:value; skipped.",
                        line=line.number,
                    )
            elif (style_key := StyleKey.lookup(key)) is not None:
                groups.add(
                    style_key.category,
                    resolve_declarations(style_key, value, self.ctx, ResolveMode.NORMAL, line=line.number),
                )
            else:
                node.attributes[key] = value
                self.ctx.note(
                    "literal-attribute",
                    f"Key '{key}' is not a style key; kept as a literal attribute.",
                    line=line.number,
                )

        for declarations in groups.declaration_strings():
            class_name = self.ctx.classes.class_for(declarations)
            self.ctx.utilities.add_class_rule(class_name, declarations)
            node.add_class(class_name)
