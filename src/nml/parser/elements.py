"""Element classifier: chooses the output tag for a DSL element-type code.

Known codes map straight to tags. The generic container code ``c`` (and any
unrecognized code) goes through semantic inference: the ordered rules in
``INFERENCE_RULES`` are checked first to last against the element's class
names, id, and text, and the first match wins. With no match, an element
with children becomes a ``section`` unless a wrapper/container class marks
it as a layout box; everything else is a ``div``.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "ELEMENT_TAGS",
    "GENERIC_CONTAINER",
    "INFERENCE_RULES",
    "InferenceRule",
    "classify",
    "is_selector_type",
    "selector_tag",
]

GENERIC_CONTAINER = "c"

ELEMENT_TAGS: dict[str, str] = {
    # text
    "p": "p",
    "h1": "h1",
    "h2": "h2",
    "h3": "h3",
    "h4": "h4",
    "h5": "h5",
    "h6": "h6",
    # sectioning
    GENERIC_CONTAINER: "div",
    "sec": "section",
    "art": "article",
    "aside": "aside",
    "main": "main",
    "nav": "nav",
    "head": "header",
    "foot": "footer",
    # interactive
    "a": "a",
    "btn": "button",
    # lists
    "ul": "ul",
    "ol": "ol",
    "li": "li",
    # other semantic elements
    "fig": "figure",
    "cap": "figcaption",
    "time": "time",
    "mark": "mark",
}

_LAYOUT_MARKERS = ("wrapper", "container")


@dataclass(frozen=True)
class InferenceRule:
    """Choose *tag* when any keyword occurs in one of the inspected sources."""

    tag: str
    keywords: tuple[str, ...]
    sources: tuple[str, ...] = ("class", "id")
    needs_children: bool = False

    def matches(self, haystacks: dict[str, str], has_children: bool) -> bool:
        if self.needs_children and not has_children:
            return False
        return any(
            keyword in haystacks[source]
            for source in self.sources
            for keyword in self.keywords
        )


INFERENCE_RULES: tuple[InferenceRule, ...] = (
    InferenceRule("header", ("banner", "header")),
    InferenceRule("footer", ("footer",)),
    InferenceRule("nav", ("nav",)),
    InferenceRule("aside", ("aside", "sidebar")),
    InferenceRule("footer", ("copyright", "©", "footer"), sources=("text",)),
    InferenceRule("nav", ("menu", "navigation"), sources=("text",)),
    InferenceRule("article", ("card", "article"), needs_children=True),
    InferenceRule("section", ("section",), needs_children=True),
)


def is_selector_type(element_type: str) -> bool:
    """True for a bare ``.class`` / ``#id`` used in place of an element type."""
    return element_type.startswith((".", "#"))


def classify(
    element_type: str,
    classes: list[str] | None = None,
    element_id: str = "",
    text: str | None = None,
    has_children: bool = False,
) -> str:
    """Return the output tag for an element."""
    if is_selector_type(element_type):
        return "div"
    if element_type != GENERIC_CONTAINER and element_type in ELEMENT_TAGS:
        return ELEMENT_TAGS[element_type]

    class_text = " ".join(classes or []).lower()
    haystacks = {
        "class": class_text,
        "id": element_id.lower(),
        "text": (text or "").lower(),
    }
    for rule in INFERENCE_RULES:
        if rule.matches(haystacks, has_children):
            return rule.tag

    if has_children and not any(marker in class_text for marker in _LAYOUT_MARKERS):
        return "section"
    return "div"


def selector_tag(selector: str) -> str:
    """Map a directive-rule selector to CSS: codes become tags, others pass through."""
    if is_selector_type(selector):
        return selector
    return ELEMENT_TAGS.get(selector, selector.lower())
