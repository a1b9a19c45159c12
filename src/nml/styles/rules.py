"""Stylesheet rule blocks and per-element style groups."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from nml.model.declaration import Declaration, render_declarations
from nml.styles.keys import StyleCategory


class StyleGroups:
    """Declarations for one element (or one directive rule), keyed by category.

    Within a category a later declaration for the same property replaces the
    earlier one but keeps its position.
    """

    def __init__(self) -> None:
        self._groups: dict[StyleCategory, dict[str, Declaration]] = {}

    def add(self, category: StyleCategory, declarations: Iterable[Declaration]) -> None:
        for decl in declarations:
            self._groups.setdefault(category, {})[decl.property] = decl

    def declaration_strings(self) -> list[str]:
        """One combined declaration string per non-empty category, first-seen order."""
        return [
            render_declarations(decls.values())
            for decls in self._groups.values()
            if decls
        ]

    def __bool__(self) -> bool:
        return any(self._groups.values())


@dataclass
class _Rule:
    declarations: str
    selectors: list[str] = field(default_factory=list)


class RuleBlock:
    """Ordered, de-duplicated class rules belonging to one stylesheet scope."""

    def __init__(self) -> None:
        self._rules: dict[str, _Rule] = {}

    def add_class_rule(self, class_name: str, declarations: str, selector: str | None = None) -> None:
        """Add ``.class_name { declarations }``; extra selectors join the existing rule."""
        rule = self._rules.get(class_name)
        if rule is None:
            rule = _Rule(declarations=declarations)
            self._rules[class_name] = rule
        if selector and selector not in rule.selectors:
            rule.selectors.append(selector)

    def __contains__(self, class_name: str) -> bool:
        return class_name in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def render(self, indent: str = "") -> str:
        lines = []
        for name, rule in self._rules.items():
            selector = ", ".join([f".{name}", *rule.selectors])
            lines.append(f"{indent}{selector} {{ {rule.declarations} }}")
        return "\n".join(lines)
