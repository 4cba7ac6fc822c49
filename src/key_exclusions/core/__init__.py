"""Key exclusions core: configuration, errors, shared types and interfaces."""
from __future__ import annotations

from key_exclusions.core.config import ExclusionsConfig
from key_exclusions.core.errors import (
    ExclusionError,
    InvalidPattern,
    InvalidRuleEntry,
    SettingsError,
)
from key_exclusions.core.interfaces import InMemorySettingsStore, SettingsStore
from key_exclusions.core.types import EnabledState, RuleEntry

__all__ = [
    "EnabledState",
    "ExclusionError",
    "ExclusionsConfig",
    "InMemorySettingsStore",
    "InvalidPattern",
    "InvalidRuleEntry",
    "RuleEntry",
    "SettingsError",
    "SettingsStore",
]
