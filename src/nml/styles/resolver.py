"""Style resolver: turns one ``key=value`` style token into CSS declarations.

Value handling, in order:
    1. ``$name`` references become ``var(--name)``.
    2. Color keys normalize literal colors (3-digit hex expanded, #fff -> white).
    3. Size/space keys suffix bare digits with ``px``.
Forced mode appends ``!important`` to every declaration.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import TYPE_CHECKING, Callable

from nml.model.declaration import Declaration, parse_declarations, render_declarations
from nml.styles.keys import COLOR_KEYS, StyleKey

if TYPE_CHECKING:
    from nml.context import CompileContext

__all__ = [
    "ResolveMode",
    "coerce_pixels",
    "normalize_color",
    "resolve_declarations",
    "resolve_token",
    "substitute_variables",
]

_VARIABLE_RE = re.compile(r"\$([A-Za-z_][A-Za-z0-9_-]*)")
_HEX3_RE = re.compile(r"^#([0-9a-fA-F])([0-9a-fA-F])([0-9a-fA-F])$")
_HEX6_RE = re.compile(r"^#[0-9a-fA-F]{6}$")
_DIGITS_RE = re.compile(r"^\d+$")

_NAMED_COLORS = {
    "#ffffff": "white",
    "#000000": "black",
}


class ResolveMode(Enum):
    NORMAL = "normal"
    FORCED = "forced"


def substitute_variables(value: str, ctx: CompileContext, line: int | None = None) -> str:
    """Rewrite every ``$name`` inside *value* to ``var(--name)``."""

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if not ctx.is_declared(name):
            ctx.report(
                "undeclared-variable",
                f"Variable '${name}' is referenced but never declared.",
                line=line,
                fix=f"Declare it with a line like '${name}=value'.",
            )
        return f"var(--{name})"

    return _VARIABLE_RE.sub(_replace, value)


def normalize_color(value: str) -> str:
    match = _HEX3_RE.match(value)
    if match:
        value = "#" + "".join(c * 2 for c in match.groups())
    if _HEX6_RE.match(value):
        value = value.lower()
    return _NAMED_COLORS.get(value, value)


def coerce_pixels(value: str) -> str:
    """Suffix every all-digit part of *value* with ``px``; other parts pass through."""
    return " ".join(p + "px" if _DIGITS_RE.match(p) else p for p in value.split())


# ---------------------------------------------------------------------------
# Per-key resolvers
# ---------------------------------------------------------------------------

if TYPE_CHECKING:
    Resolver = Callable[[str, CompileContext], list[Declaration]]


def _simple(prop: str) -> Resolver:
    def resolve(value: str, ctx: CompileContext) -> list[Declaration]:
        return [Declaration(prop, value)]

    return resolve


def _direction(value: str, ctx: CompileContext) -> list[Declaration]:
    if value in ("col", "column"):
        return [Declaration("display", "flex"), Declaration("flex-direction", "column")]
    if value == "row":
        return [Declaration("display", "flex"), Declaration("flex-direction", "row")]
    return []


def _align(value: str, ctx: CompileContext) -> list[Declaration]:
    if value == "c":
        return [Declaration("align-items", "center"), Declaration("justify-content", "center")]
    return [Declaration("align-items", value)]


def _wrap(value: str, ctx: CompileContext) -> list[Declaration]:
    if value in ("wrap", "nowrap", "wrap-reverse"):
        return [Declaration("flex-wrap", value)]
    return []


def _animation(value: str, ctx: CompileContext) -> list[Declaration]:
    parts = value.split()
    if not parts:
        return []
    name = parts[0]
    duration = parts[1] if len(parts) > 1 else ctx.config.default_animation_duration
    declarations: list[Declaration] = []
    if len(parts) > 2:
        declarations.extend(parse_declarations(ctx.initial_state(name)))
    declarations.append(
        Declaration("animation", f"{name} {duration} {ctx.config.animation_timing}")
    )
    return declarations


_RESOLVERS: dict[StyleKey, Resolver] = {
    StyleKey.FONT_SIZE: _simple("font-size"),
    StyleKey.TEXT_COLOR: _simple("color"),
    StyleKey.BACKGROUND: _simple("background-color"),
    StyleKey.PADDING: _simple("padding"),
    StyleKey.BORDER_RADIUS: _simple("border-radius"),
    StyleKey.OPACITY: _simple("opacity"),
    StyleKey.MAX_WIDTH: _simple("max-width"),
    StyleKey.MIN_WIDTH: _simple("min-width"),
    StyleKey.WIDTH: _simple("width"),
    StyleKey.HEIGHT: _simple("height"),
    StyleKey.GAP: _simple("gap"),
    StyleKey.DIRECTION: _direction,
    StyleKey.ALIGN: _align,
    StyleKey.ANIMATION: _animation,
    StyleKey.DISPLAY: _simple("display"),
    StyleKey.WRAP: _wrap,
    StyleKey.TRANSFORM: _simple("transform"),
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def resolve_declarations(
    key: StyleKey,
    value: str,
    ctx: CompileContext,
    mode: ResolveMode = ResolveMode.NORMAL,
    line: int | None = None,
) -> list[Declaration]:
    """Resolve a recognized style key and raw value into declarations."""
    value = substitute_variables(value.strip(), ctx, line=line)
    if key in COLOR_KEYS:
        value = normalize_color(value)
    if key.pixels:
        value = coerce_pixels(value)
    if not value:
        return []
    declarations = _RESOLVERS[key](value, ctx)
    if mode is ResolveMode.FORCED:
        declarations = [d.forced() for d in declarations]
    return declarations


def resolve_token(
    key: str,
    value: str,
    ctx: CompileContext,
    mode: ResolveMode = ResolveMode.NORMAL,
    line: int | None = None,
) -> str:
    """Resolve a raw ``key``/``value`` pair to a declaration string.

    Returns an empty string for an unknown key or a value that yields nothing.
    """
    style_key = StyleKey.lookup(key)
    if style_key is None:
        return ""
    return render_declarations(resolve_declarations(style_key, value, ctx, mode, line=line))
