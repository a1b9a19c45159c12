from nml.styles.classnames import ClassRegistry, canonicalize
from nml.styles.keys import StyleCategory, StyleKey
from nml.styles.resolver import ResolveMode, resolve_declarations, resolve_token
from nml.styles.rules import RuleBlock, StyleGroups

__all__ = [
    "ClassRegistry",
    "canonicalize",
    "StyleCategory",
    "StyleKey",
    "ResolveMode",
    "resolve_declarations",
    "resolve_token",
    "RuleBlock",
    "StyleGroups",
]
