"""Pattern matching and rule merging.

* **PatternMatcher** -- wildcard pattern compilation with a clearable
  cache and a never-matching fallback for malformed patterns.
* **Rule** -- immutable pass/allow sets with the predicates consumers
  query per key or command.
* **merge_keys** / **merge_commands** -- the union operations used by
  :meth:`Rule.merge_rule`.
"""
from __future__ import annotations

from key_exclusions.matching.pattern_matcher import NEVER_MATCH, PatternMatcher
from key_exclusions.matching.rules import (
    MERGED_RULE_PATTERN,
    Rule,
    merge_commands,
    merge_keys,
)

__all__ = [
    "MERGED_RULE_PATTERN",
    "NEVER_MATCH",
    "PatternMatcher",
    "Rule",
    "merge_commands",
    "merge_keys",
]
