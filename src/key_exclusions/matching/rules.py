"""Exclusion rules and the merge algebra that combines them.

A :class:`Rule` describes what happens to keyboard input on an address:

* ``pass_keys`` / ``pass_mappings`` -- single characters and named
  commands passed through to the page instead of being handled.  An
  empty ``pass_keys`` means the rule excludes *everything*.
* ``allow_keys`` / ``allow_mappings`` -- characters and commands that
  are always handled, whatever else the rule says.  Applying them over
  the pass sets is the consumer's job; the rule only exposes them.

Rules are immutable values.  Several rules matching the same address are
combined with :meth:`Rule.merge_rule`, which takes the union of each of
the four sets.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from key_exclusions.core.types import RuleEntry

MERGED_RULE_PATTERN = "merged-rule"


def merge_keys(a_keys: str | None, b_keys: str | None) -> str:
    """Return the distinct, whitespace-free characters of both key strings.

    The result is sorted, so merging is commutative and idempotent on
    the returned string itself, not just on its character set.
    """
    keys = (a_keys or "") + (b_keys or "")
    return "".join(sorted({char for char in keys if not char.isspace()}))


def merge_commands(
    a_commands: Iterable[str] | None,
    b_commands: Iterable[str] | None,
) -> tuple[str, ...]:
    """Return the distinct command names of both sequences, first-seen order."""
    return tuple(dict.fromkeys([*(a_commands or ()), *(b_commands or ())]))


@dataclass(frozen=True, slots=True)
class Rule:
    """The combined effect of one or more exclusion entries.

    Every set field is normalized on construction: ``None`` reads as
    empty, key strings lose whitespace and duplicates, and command
    sequences lose duplicates.
    """

    pattern: str = ""
    pass_keys: str = ""
    pass_mappings: tuple[str, ...] = ()
    allow_keys: str = ""
    allow_mappings: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "pattern", self.pattern or "")
        object.__setattr__(self, "pass_keys", merge_keys(self.pass_keys, None))
        object.__setattr__(self, "pass_mappings", merge_commands(self.pass_mappings, None))
        object.__setattr__(self, "allow_keys", merge_keys(self.allow_keys, None))
        object.__setattr__(self, "allow_mappings", merge_commands(self.allow_mappings, None))

    @classmethod
    def from_entry(cls, entry: RuleEntry, *, full: bool = False) -> Rule:
        """Build a rule from a configured entry.

        By default only ``pattern`` and ``pass_keys`` carry over; this is
        the per-pattern rule used when resolving an address.  With
        ``full=True`` the mapping and allow sets are kept as well.
        """
        if not full:
            return cls(entry.pattern, entry.pass_keys)
        return cls(
            entry.pattern,
            entry.pass_keys,
            tuple(entry.pass_mappings),
            entry.allow_keys,
            tuple(entry.allow_mappings),
        )

    # -- predicates ---------------------------------------------------------

    def is_enabled(self) -> bool:
        return not self.exclude_everything()

    def exclude_everything(self) -> bool:
        """An empty pass-key set suppresses all input on the address."""
        return not self.pass_keys

    def ignore_key_char(self, key_char: str) -> bool:
        """*key_char* must be one character; an empty string is always found."""
        return key_char in self.pass_keys

    def ignore_mapping(self, mapping: str) -> bool:
        return mapping in self.pass_mappings

    def force_include_key_char(self, key_char: str) -> bool:
        return key_char in self.allow_keys

    def force_include_mapping(self, mapping: str) -> bool:
        return mapping in self.allow_mappings

    # -- combination --------------------------------------------------------

    def merge_rule(self, other: Rule, *, label: str = MERGED_RULE_PATTERN) -> Rule:
        """Return a new rule holding the union of both rules' sets.

        The result's ``pattern`` is *label*, a marker rather than a
        matchable pattern.
        """
        return Rule(
            label,
            merge_keys(self.pass_keys, other.pass_keys),
            merge_commands(self.pass_mappings, other.pass_mappings),
            merge_keys(self.allow_keys, other.allow_keys),
            merge_commands(self.allow_mappings, other.allow_mappings),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "pattern": self.pattern,
            "passKeys": self.pass_keys,
            "passMappings": list(self.pass_mappings),
            "allowKeys": self.allow_keys,
            "allowMappings": list(self.allow_mappings),
        }
