"""The closed set of recognized style keys and their semantic categories."""

from __future__ import annotations

from enum import Enum


class StyleCategory(Enum):
    """Coarse grouping used to combine declarations before class generation."""

    SIZING = "sizing"
    SPACING = "spacing"
    COLOR = "color"
    FLEX_LAYOUT = "flex-layout"
    ANIMATION = "animation"
    BORDER = "border"
    TYPOGRAPHY = "font-size"
    OPACITY = "opacity"
    TRANSFORM = "transform"


class StyleKey(Enum):
    """A style token key.

    Each member carries the DSL token, its category, whether bare digits are
    coerced to pixels, and whether the value may continue over following
    unquoted words.
    """

    FONT_SIZE = ("s", StyleCategory.TYPOGRAPHY, True, False)
    TEXT_COLOR = ("tc", StyleCategory.COLOR, False, False)
    BACKGROUND = ("bg", StyleCategory.COLOR, False, False)
    PADDING = ("pad", StyleCategory.SPACING, True, False)
    BORDER_RADIUS = ("br", StyleCategory.BORDER, True, False)
    OPACITY = ("op", StyleCategory.OPACITY, False, False)
    MAX_WIDTH = ("maxw", StyleCategory.SIZING, True, False)
    MIN_WIDTH = ("minw", StyleCategory.SIZING, True, False)
    WIDTH = ("w", StyleCategory.SIZING, True, False)
    HEIGHT = ("h", StyleCategory.SIZING, True, False)
    GAP = ("gap", StyleCategory.SPACING, True, False)
    DIRECTION = ("dir", StyleCategory.FLEX_LAYOUT, False, False)
    ALIGN = ("align", StyleCategory.FLEX_LAYOUT, False, False)
    ANIMATION = ("anim", StyleCategory.ANIMATION, False, True)
    DISPLAY = ("disp", StyleCategory.FLEX_LAYOUT, False, False)
    WRAP = ("wrap", StyleCategory.FLEX_LAYOUT, False, False)
    TRANSFORM = ("trf", StyleCategory.TRANSFORM, False, False)

    def __init__(self, token: str, category: StyleCategory, pixels: bool, multiword: bool) -> None:
        self.token = token
        self.category = category
        self.pixels = pixels
        self.multiword = multiword

    @classmethod
    def lookup(cls, token: str) -> StyleKey | None:
        """Return the key for a DSL token, or None if it is not a style key."""
        return _BY_TOKEN.get(token)


_BY_TOKEN: dict[str, StyleKey] = {k.token: k for k in StyleKey}

COLOR_KEYS = frozenset({StyleKey.TEXT_COLOR, StyleKey.BACKGROUND})
