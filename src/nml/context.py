"""Compile context: every piece of state owned by exactly one compile call."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping

from nml.config import CompilerConfig
from nml.model.diagnostic import Diagnostic, Severity
from nml.styles.classnames import ClassRegistry
from nml.styles.rules import RuleBlock

logger = logging.getLogger(__name__)


class CompileContext:
    """State threaded through the resolver, class generator, and parsers.

    Created at the start of a compile and discarded at its end, so nothing
    registered while compiling one document is visible to the next.
    """

    def __init__(self, config: CompilerConfig) -> None:
        self.config = config
        self.classes = ClassRegistry(prefix=config.class_prefix)
        self.utilities = RuleBlock()
        self.directive_fragments: list[str] = []
        self.inline_media: dict[str, RuleBlock] = {}
        self._variables: dict[str, str] = {}
        self._keyframe_initial: dict[str, str] = {}
        self._diagnostics: list[Diagnostic] = []

    # --- variable table -------------------------------------------------------

    def declare_variable(self, name: str, value: str) -> None:
        self._variables[name] = value

    @property
    def variables(self) -> Mapping[str, str]:
        """Read-only view of the declared variables."""
        return MappingProxyType(self._variables)

    def effective_variables(self) -> dict[str, str]:
        """Declared variables, or the default palette when none were declared."""
        if self._variables:
            return dict(self._variables)
        return dict(self.config.default_palette)

    def is_declared(self, name: str) -> bool:
        return name in self.effective_variables()

    # --- keyframe initial states ---------------------------------------------

    def register_initial_state(self, animation: str, declarations: str) -> None:
        self._keyframe_initial[animation] = declarations

    def initial_state(self, animation: str) -> str:
        return self._keyframe_initial.get(animation, "")

    # --- stylesheet fragments -------------------------------------------------

    def media_block(self, query: str) -> RuleBlock:
        """Return the inline rule block for *query*, creating it on first use."""
        block = self.inline_media.get(query)
        if block is None:
            block = RuleBlock()
            self.inline_media[query] = block
        return block

    # --- diagnostics ----------------------------------------------------------

    def report(
        self,
        rule: str,
        message: str,
        line: int | None = None,
        severity: Severity = Severity.WARNING,
        fix: str | None = None,
    ) -> None:
        diagnostic = Diagnostic(rule=rule, severity=severity, message=message, line=line, fix=fix)
        logger.debug("%s", diagnostic)
        self._diagnostics.append(diagnostic)

    def note(self, rule: str, message: str, line: int | None = None) -> None:
        self.report(rule, message, line=line, severity=Severity.INFO)

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return tuple(self._diagnostics)
