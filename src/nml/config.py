"""Compiler configuration."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_BREAKPOINTS: dict[str, str] = {
    "mobile": "(max-width: 600px)",
    "tablet": "(min-width: 601px) and (max-width: 900px)",
}

DEFAULT_PALETTE: tuple[tuple[str, str], ...] = (
    ("background", "#1a1a1a"),
    ("text", "#ffffff"),
    ("primary", "#9333ea"),
    ("secondary", "#4f46e5"),
    ("accent", "#06b6d4"),
)

BASELINE_RULES: tuple[tuple[str, str], ...] = (
    ("background-color", "var(--background)"),
    ("color", "var(--text)"),
    ("margin", "0"),
    ("padding", "0"),
    ("min-height", "100vh"),
    ("font-family", "system-ui, -apple-system, sans-serif"),
)


@dataclass(frozen=True)
class CompilerConfig:
    """Settings shared by every compile; the defaults describe the standard dialect."""

    indent_unit: int = 2
    class_prefix: str = "n-"
    root_id: str = "app"
    default_animation_duration: str = "1s"
    animation_timing: str = "ease-in-out forwards"
    breakpoints: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_BREAKPOINTS))
    default_palette: tuple[tuple[str, str], ...] = DEFAULT_PALETTE
    baseline: bool = True

    def __post_init__(self) -> None:
        if self.indent_unit < 1:
            raise ValueError("indent_unit must be a positive number of columns")
        if not self.class_prefix:
            raise ValueError("class_prefix must be a non-empty string")


DEFAULT_CONFIG = CompilerConfig()
