"""Tests for the line lexer and cursor."""

from nml.parser.lexer import (
    LineCursor,
    SourceLine,
    brace_delta,
    expand_inline_blocks,
    parse_selector_chain,
    split_assignment,
    split_lines,
    strip_quotes,
    tokenize,
)


# ---------------------------------------------------------------------------
# Lines
# ---------------------------------------------------------------------------


class TestSplitLines:
    def test_numbers_and_indent(self):
        lines = split_lines("c\n  p t=x\n    a t=y")
        assert [(ln.number, ln.indent, ln.text) for ln in lines] == [
            (1, 0, "c"),
            (2, 2, "p t=x"),
            (3, 4, "a t=y"),
        ]

    def test_tab_is_one_unit(self):
        assert split_lines("\tp t=x")[0].indent == 2

    def test_blank_line_has_no_indent(self):
        line = split_lines("p\n    \n")[1]
        assert line.is_blank
        assert line.indent == 0

    def test_crlf(self):
        assert [ln.text for ln in split_lines("a\r\nb")] == ["a", "b"]

    def test_depth(self):
        assert SourceLine(1, 4, "p").depth(2) == 2


class TestLineKinds:
    def test_slash_comment(self):
        assert SourceLine(1, 0, "// note").is_comment

    def test_hash_comment(self):
        assert SourceLine(1, 0, "# note").is_comment
        assert SourceLine(1, 0, "#").is_comment

    def test_id_selector_is_not_comment(self):
        assert not SourceLine(1, 0, "#main t=x").is_comment

    def test_directive_and_variable(self):
        assert SourceLine(1, 0, "@mobile {").is_directive
        assert SourceLine(1, 0, "$x=1").is_variable

    def test_brace(self):
        assert SourceLine(1, 0, "}").is_brace
        assert not SourceLine(1, 0, "c {").is_brace


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------


class TestTokenize:
    def test_plain(self):
        assert tokenize("p s=14 tc=red") == ["p", "s=14", "tc=red"]

    def test_quoted_value_keeps_spaces(self):
        assert tokenize('p t="Hello world" s=14') == ["p", 't="Hello world"', "s=14"]

    def test_unterminated_quote_runs_to_end(self):
        assert tokenize('p t="never closed s=1') == ["p", 't="never closed s=1']

    def test_strip_quotes(self):
        assert strip_quotes('"hi"') == "hi"
        assert strip_quotes('"open') == "open"
        assert strip_quotes("bare") == "bare"


class TestAssignments:
    def test_key_value(self):
        assert split_assignment("pad=8") == ("pad", "8")

    def test_value_may_contain_equals_and_colons(self):
        assert split_assignment("aria=label:a=b") == ("aria", "label:a=b")

    def test_empty_value(self):
        assert split_assignment("pad=") is None

    def test_not_an_assignment(self):
        assert split_assignment("hello") is None
        assert split_assignment("#main") is None

    def test_selector_chain(self):
        assert parse_selector_chain("#main.card.wide") == ("main", ["card", "wide"])
        assert parse_selector_chain(".a") == ("", ["a"])


class TestBraceDelta:
    def test_counts(self):
        assert brace_delta("c {") == 1
        assert brace_delta("}") == -1
        assert brace_delta("c { p }") == 0

    def test_quoted_braces_ignored(self):
        assert brace_delta('p t="{ not a block }" {') == 1


# ---------------------------------------------------------------------------
# Single-line blocks
# ---------------------------------------------------------------------------


class TestExpandInlineBlocks:
    def test_single_line_block(self):
        expanded = expand_inline_blocks(SourceLine(1, 0, 'c pad=8 { p t="hi" }'))
        assert [(ln.indent, ln.text) for ln in expanded] == [
            (0, "c pad=8 {"),
            (2, 'p t="hi"'),
            (0, "}"),
        ]

    def test_nested_single_line_blocks(self):
        expanded = expand_inline_blocks(SourceLine(1, 2, "c { ul { li t=x } }"))
        assert [(ln.indent, ln.text) for ln in expanded] == [
            (2, "c {"),
            (4, "ul {"),
            (6, "li t=x"),
            (4, "}"),
            (2, "}"),
        ]

    def test_trailing_brace_unchanged(self):
        line = SourceLine(3, 0, "c pad=8 {")
        assert expand_inline_blocks(line) == [line]

    def test_quoted_brace_unchanged(self):
        line = SourceLine(3, 0, 'p t="a { b }"')
        assert expand_inline_blocks(line) == [line]

    def test_keeps_line_number(self):
        expanded = expand_inline_blocks(SourceLine(7, 0, "c { p t=x }"))
        assert {ln.number for ln in expanded} == {7}


# ---------------------------------------------------------------------------
# Cursor
# ---------------------------------------------------------------------------


class TestLineCursor:
    def test_advance_and_peek(self):
        cursor = LineCursor(split_lines("a\nb"))
        assert cursor.peek().text == "a"
        assert cursor.advance().text == "a"
        assert cursor.position == 1
        assert cursor.advance().text == "b"
        assert cursor.at_end
        assert cursor.peek() is None

    def test_upcoming_skips_blanks_and_comments(self):
        cursor = LineCursor(split_lines("\n// c\na\n\nb\nc"))
        assert [ln.text for ln in cursor.upcoming(2)] == ["a", "b"]
        assert cursor.position == 0

    def test_peek_content_at_end(self):
        cursor = LineCursor(split_lines("\n\n"))
        assert cursor.peek_content() is None
        assert len(cursor) == 3
