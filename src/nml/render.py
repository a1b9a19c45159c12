"""Renderer collaborator: materializes a CompileResult into a host document."""

from __future__ import annotations

from html import escape
from typing import Any, Protocol

from nml.model.element import CompileResult, ElementNode

__all__ = ["HtmlRenderer", "MountError", "Renderer", "mount", "render_html"]


class MountError(Exception):
    """Raised when the renderer cannot provide a mount point."""


class Renderer(Protocol):
    """The capabilities the compiler output needs from a host document."""

    def mount_point(self) -> Any | None: ...

    def create_element(self, tag: str) -> Any: ...

    def set_attribute(self, element: Any, name: str, value: str) -> None: ...

    def set_text(self, element: Any, text: str) -> None: ...

    def append_child(self, parent: Any, child: Any) -> None: ...

    def insert_stylesheet(self, css: str) -> None: ...


def _build(node: ElementNode, renderer: Renderer) -> Any:
    element = renderer.create_element(node.tag)
    for name, value in node.html_attributes().items():
        renderer.set_attribute(element, name, value)
    if node.text:
        renderer.set_text(element, node.text)
    for child in node.children:
        renderer.append_child(element, _build(child, renderer))
    return element


def mount(result: CompileResult, renderer: Renderer) -> Any:
    """Insert the stylesheet and append the compiled forest under the mount point."""
    target = renderer.mount_point()
    if target is None:
        raise MountError("Renderer has no mount point to attach the compiled tree to")
    renderer.insert_stylesheet(result.stylesheet)
    for node in result.elements:
        renderer.append_child(target, _build(node, renderer))
    return target


class _HtmlElement:
    def __init__(self, tag: str) -> None:
        self.tag = tag
        self.attributes: dict[str, str] = {}
        self.text = ""
        self.children: list[_HtmlElement] = []

    def serialize(self) -> str:
        attrs = "".join(f' {name}="{escape(value)}"' for name, value in self.attributes.items())
        inner = escape(self.text, quote=False) + "".join(c.serialize() for c in self.children)
        return f"<{self.tag}{attrs}>{inner}</{self.tag}>"


class HtmlRenderer:
    """In-memory renderer producing an HTML string.

    The mount point is the root element (``div#app`` by default); the
    stylesheet becomes a ``<style>`` element placed first inside it.
    """

    def __init__(self, root_id: str = "app") -> None:
        self.root = _HtmlElement("div")
        self.root.attributes["id"] = root_id
        self.stylesheet = ""

    def mount_point(self) -> _HtmlElement:
        return self.root

    def create_element(self, tag: str) -> _HtmlElement:
        return _HtmlElement(tag)

    def set_attribute(self, element: _HtmlElement, name: str, value: str) -> None:
        element.attributes[name] = value

    def set_text(self, element: _HtmlElement, text: str) -> None:
        element.text = text

    def append_child(self, parent: _HtmlElement, child: _HtmlElement) -> None:
        parent.children.append(child)

    def insert_stylesheet(self, css: str) -> None:
        self.stylesheet = css

    def inner_html(self) -> str:
        style = f"<style>{self.stylesheet}</style>" if self.stylesheet else ""
        return style + "".join(c.serialize() for c in self.root.children)


def render_html(result: CompileResult) -> str:
    """Return the markup for *result*: the ``<style>`` block, then the elements."""
    renderer = HtmlRenderer(root_id=result.root.id or "app")
    mount(result, renderer)
    return renderer.inner_html()
