"""Declaration model: a single resolved CSS ``property: value`` pair."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable

IMPORTANT = "!important"


@dataclass(frozen=True)
class Declaration:
    """A resolved CSS declaration, already unit-coerced and variable-substituted."""

    property: str
    value: str
    important: bool = False

    def forced(self) -> Declaration:
        """Return a copy carrying the forced-priority marker."""
        return replace(self, important=True)

    def __str__(self) -> str:
        marker = f" {IMPORTANT}" if self.important else ""
        return f"{self.property}: {self.value}{marker};"

    @classmethod
    def parse(cls, text: str) -> Declaration | None:
        """Parse ``"prop: value [!important]"`` (trailing ``;`` optional)."""
        text = text.strip().rstrip(";").strip()
        if ":" not in text:
            return None
        prop, value = text.split(":", 1)
        value = value.strip()
        important = value.endswith(IMPORTANT)
        if important:
            value = value[: -len(IMPORTANT)].strip()
        prop = prop.strip()
        if not prop or not value:
            return None
        return cls(property=prop, value=value, important=important)


def parse_declarations(text: str) -> list[Declaration]:
    """Split a declaration string on ``;`` and parse every non-empty part."""
    result: list[Declaration] = []
    for part in text.split(";"):
        decl = Declaration.parse(part)
        if decl is not None:
            result.append(decl)
    return result


def render_declarations(declarations: Iterable[Declaration]) -> str:
    """Join declarations into a single-line declaration string."""
    return " ".join(str(d) for d in declarations)
