"""Element tree model: ElementNode and CompileResult."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

from nml.model.diagnostic import Diagnostic


@dataclass
class ElementNode:
    """One output element of the compiled tree.

    ``depth`` is the indentation depth of the source line (indent divided by
    the indent unit), fixed when the node is created.
    """

    tag: str
    id: str = ""
    classes: list[str] = field(default_factory=list)
    attributes: dict[str, str] = field(default_factory=dict)
    text: str | None = None
    children: list[ElementNode] = field(default_factory=list)
    depth: int = 0

    def add_class(self, name: str) -> None:
        """Append *name* to the class list unless it is already present."""
        if name and name not in self.classes:
            self.classes.append(name)

    def append_child(self, child: ElementNode) -> None:
        self.children.append(child)

    @property
    def has_content(self) -> bool:
        """True when the node carries text or children."""
        return bool(self.text) or bool(self.children)

    @property
    def has_attributes(self) -> bool:
        """True when the node carries an id, a class, or any literal attribute."""
        return bool(self.id) or bool(self.classes) or bool(self.attributes)

    @property
    def is_empty(self) -> bool:
        return not self.has_content and not self.has_attributes

    def html_attributes(self) -> dict[str, str]:
        """Return all attributes in output order: id, class, then literals."""
        attrs: dict[str, str] = {}
        if self.id:
            attrs["id"] = self.id
        if self.classes:
            attrs["class"] = " ".join(self.classes)
        attrs.update(self.attributes)
        return attrs

    def walk(self) -> Iterator[ElementNode]:
        """Yield this node and all descendants in document order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, tag: str) -> list[ElementNode]:
        """Return every descendant-or-self node with the given tag."""
        return [n for n in self.walk() if n.tag == tag]

    def to_dict(self) -> dict[str, Any]:
        """Serialize as a nested tag/attribute/children structure."""
        data: dict[str, Any] = {"tag": self.tag}
        if self.id:
            data["id"] = self.id
        if self.classes:
            data["classes"] = list(self.classes)
        if self.attributes:
            data["attributes"] = dict(self.attributes)
        if self.text is not None:
            data["text"] = self.text
        if self.children:
            data["children"] = [c.to_dict() for c in self.children]
        return data


def prune_empty(nodes: list[ElementNode]) -> list[ElementNode]:
    """Drop nodes that end up with neither content nor attributes, bottom-up."""
    kept: list[ElementNode] = []
    for node in nodes:
        node.children = prune_empty(node.children)
        if not node.is_empty:
            kept.append(node)
    return kept


@dataclass(frozen=True)
class CompileResult:
    """The (tree, stylesheet) pair produced by one compile."""

    root: ElementNode
    stylesheet: str
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def elements(self) -> list[ElementNode]:
        """The root-level forest (children of the root node)."""
        return self.root.children

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.is_warning]

    def to_dict(self) -> dict[str, Any]:
        return {
            "tree": self.root.to_dict(),
            "stylesheet": self.stylesheet,
            "diagnostics": [
                {"rule": d.rule, "severity": d.severity.value, "message": d.message, "line": d.line}
                for d in self.diagnostics
            ],
        }
