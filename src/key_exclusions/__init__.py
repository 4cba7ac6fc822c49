"""Key Exclusions -- per-address keyboard exclusion rules.

Decides, for a page address, which keyboard input a host application
should suppress and which it should pass through to the page, from a
user-configured list of wildcard rules.

Packages
--------
* :mod:`key_exclusions.core` -- configuration, errors, entry types and
  the settings collaborator interface.
* :mod:`key_exclusions.matching` -- wildcard pattern matching and the
  rule merge algebra.
* :mod:`key_exclusions.exclusions` -- the :class:`Exclusions` resolver.
"""
from __future__ import annotations

__version__ = "1.0.0a1"

from key_exclusions.core.config import ExclusionsConfig
from key_exclusions.core.errors import (
    ExclusionError,
    InvalidPattern,
    InvalidRuleEntry,
    SettingsError,
)
from key_exclusions.core.interfaces import InMemorySettingsStore, SettingsStore
from key_exclusions.core.types import EnabledState, RuleEntry
from key_exclusions.exclusions import Exclusions
from key_exclusions.matching import (
    MERGED_RULE_PATTERN,
    NEVER_MATCH,
    PatternMatcher,
    Rule,
    merge_commands,
    merge_keys,
)

__all__ = [
    "MERGED_RULE_PATTERN",
    "NEVER_MATCH",
    "EnabledState",
    "ExclusionError",
    "Exclusions",
    "ExclusionsConfig",
    "InMemorySettingsStore",
    "InvalidPattern",
    "InvalidRuleEntry",
    "PatternMatcher",
    "Rule",
    "RuleEntry",
    "SettingsError",
    "SettingsStore",
    "__version__",
    "merge_commands",
    "merge_keys",
]
