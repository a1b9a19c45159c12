"""Tests for the style resolver."""

import pytest

from nml.config import CompilerConfig
from nml.context import CompileContext
from nml.styles.keys import StyleCategory, StyleKey
from nml.styles.resolver import (
    _RESOLVERS,
    ResolveMode,
    coerce_pixels,
    normalize_color,
    resolve_declarations,
    resolve_token,
)


@pytest.fixture()
def ctx() -> CompileContext:
    return CompileContext(CompilerConfig())


# ---------------------------------------------------------------------------
# Style keys
# ---------------------------------------------------------------------------


class TestStyleKeys:
    def test_every_key_has_a_resolver(self):
        assert set(_RESOLVERS) == set(StyleKey)

    def test_lookup_by_token(self):
        assert StyleKey.lookup("pad") is StyleKey.PADDING
        assert StyleKey.lookup("anim") is StyleKey.ANIMATION

    def test_lookup_unknown(self):
        assert StyleKey.lookup("flex") is None

    def test_categories(self):
        assert StyleKey.DIRECTION.category is StyleCategory.FLEX_LAYOUT
        assert StyleKey.DISPLAY.category is StyleCategory.FLEX_LAYOUT
        assert StyleKey.WIDTH.category is StyleCategory.SIZING
        assert StyleKey.GAP.category is StyleCategory.SPACING

    def test_only_animation_is_multiword(self):
        assert [k for k in StyleKey if k.multiword] == [StyleKey.ANIMATION]


# ---------------------------------------------------------------------------
# Pixel coercion
# ---------------------------------------------------------------------------


class TestPixelCoercion:
    def test_digits_get_px(self, ctx):
        assert resolve_token("pad", "8", ctx) == "padding: 8px;"

    def test_percentage_passes_through(self, ctx):
        assert resolve_token("pad", "50%", ctx) == "padding: 50%;"

    def test_unit_value_passes_through(self, ctx):
        assert resolve_token("w", "100vw", ctx) == "width: 100vw;"

    def test_keyword_passes_through(self, ctx):
        assert resolve_token("maxw", "none", ctx) == "max-width: none;"

    def test_shorthand_parts_coerced(self, ctx):
        assert resolve_token("pad", "8 16", ctx) == "padding: 8px 16px;"

    def test_non_pixel_key_untouched(self, ctx):
        assert resolve_token("op", "1", ctx) == "opacity: 1;"

    def test_coerce_pixels_helper(self):
        assert coerce_pixels("0 auto 12") == "0px auto 12px"


# ---------------------------------------------------------------------------
# Variables and colors
# ---------------------------------------------------------------------------


class TestVariables:
    def test_declared_variable_rewritten(self, ctx):
        ctx.declare_variable("primary", "#2196f3")
        assert resolve_token("bg", "$primary", ctx) == "background-color: var(--primary);"
        assert ctx.diagnostics == ()

    def test_default_palette_counts_as_declared(self, ctx):
        assert resolve_token("tc", "$accent", ctx) == "color: var(--accent);"
        assert ctx.diagnostics == ()

    def test_undeclared_variable_reported(self, ctx):
        ctx.declare_variable("primary", "#2196f3")
        assert resolve_token("tc", "$missing", ctx) == "color: var(--missing);"
        assert [d.rule for d in ctx.diagnostics] == ["undeclared-variable"]

    def test_variable_inside_value(self, ctx):
        ctx.declare_variable("gutter", "12px")
        assert resolve_token("pad", "0 $gutter", ctx) == "padding: 0px var(--gutter);"


class TestColors:
    def test_short_hex_expanded(self):
        assert normalize_color("#ABC") == "#aabbcc"

    def test_white_keyword(self):
        assert normalize_color("#fff") == "white"
        assert normalize_color("#FFFFFF") == "white"

    def test_black_keyword(self):
        assert normalize_color("#000") == "black"

    def test_other_values_unchanged(self):
        assert normalize_color("rebeccapurple") == "rebeccapurple"

    def test_color_key_normalizes(self, ctx):
        assert resolve_token("tc", "#fff", ctx) == "color: white;"

    def test_non_color_key_does_not_normalize(self, ctx):
        assert resolve_token("trf", "#fff", ctx) == "transform: #fff;"


# ---------------------------------------------------------------------------
# Layout keys
# ---------------------------------------------------------------------------


class TestLayout:
    def test_direction_column(self, ctx):
        assert resolve_token("dir", "col", ctx) == "display: flex; flex-direction: column;"

    def test_direction_row(self, ctx):
        assert resolve_token("dir", "row", ctx) == "display: flex; flex-direction: row;"

    def test_direction_unknown_yields_nothing(self, ctx):
        assert resolve_token("dir", "diagonal", ctx) == ""

    def test_align_center(self, ctx):
        assert (
            resolve_token("align", "c", ctx)
            == "align-items: center; justify-content: center;"
        )

    def test_align_literal(self, ctx):
        assert resolve_token("align", "flex-start", ctx) == "align-items: flex-start;"

    def test_wrap(self, ctx):
        assert resolve_token("wrap", "wrap", ctx) == "flex-wrap: wrap;"
        assert resolve_token("wrap", "sometimes", ctx) == ""

    def test_display(self, ctx):
        assert resolve_token("disp", "none", ctx) == "display: none;"


# ---------------------------------------------------------------------------
# Animation
# ---------------------------------------------------------------------------


class TestAnimation:
    def test_default_duration(self, ctx):
        assert resolve_token("anim", "fade", ctx) == "animation: fade 1s ease-in-out forwards;"

    def test_explicit_duration(self, ctx):
        assert (
            resolve_token("anim", "fade 0.5s", ctx)
            == "animation: fade 0.5s ease-in-out forwards;"
        )

    def test_initial_state_prepended(self, ctx):
        ctx.register_initial_state("pulse", "opacity: 0;")
        assert (
            resolve_token("anim", "pulse 1s withInitial", ctx)
            == "opacity: 0; animation: pulse 1s ease-in-out forwards;"
        )

    def test_marker_without_registered_state(self, ctx):
        assert (
            resolve_token("anim", "pulse 1s withInitial", ctx)
            == "animation: pulse 1s ease-in-out forwards;"
        )

    def test_registered_state_needs_marker(self, ctx):
        ctx.register_initial_state("pulse", "opacity: 0;")
        assert resolve_token("anim", "pulse 1s", ctx) == "animation: pulse 1s ease-in-out forwards;"


# ---------------------------------------------------------------------------
# Modes and unknown keys
# ---------------------------------------------------------------------------


class TestModes:
    def test_forced_marks_every_declaration(self, ctx):
        assert (
            resolve_token("dir", "col", ctx, ResolveMode.FORCED)
            == "display: flex !important; flex-direction: column !important;"
        )

    def test_forced_coerces_pixels(self, ctx):
        assert resolve_token("s", "14", ctx, ResolveMode.FORCED) == "font-size: 14px !important;"

    def test_unknown_key(self, ctx):
        assert resolve_token("zz", "1", ctx) == ""

    def test_declarations_are_structured(self, ctx):
        decls = resolve_declarations(StyleKey.PADDING, "8", ctx, ResolveMode.FORCED)
        assert len(decls) == 1
        assert decls[0].property == "padding"
        assert decls[0].value == "8px"
        assert decls[0].important is True
