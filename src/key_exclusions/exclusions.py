"""Exclusion rule resolution for addresses.

:class:`Exclusions` owns the configured list of rule entries and answers,
for an address, which rule (if any) governs keyboard input there:

1. Every entry with a non-empty pattern that matches the whole address
   contributes a rule built from its pattern and pass keys.
2. The rules are folded left to right with :meth:`Rule.merge_rule`.
3. As soon as a rule that excludes everything is folded in, that rule
   alone is returned; later matches cannot dilute it.
4. No match yields ``None``, which callers read as "fully enabled".

The entry list is read from a :class:`SettingsStore` at construction
and re-read whenever the store reports a write to the rules key.  Each
replacement swaps in a new tuple, so a concurrent reader sees either
the old list or the new one, never a mixture.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from key_exclusions.core.config import ExclusionsConfig
from key_exclusions.core.errors import InvalidRuleEntry, SettingsError
from key_exclusions.core.interfaces import SettingsStore
from key_exclusions.core.types import EnabledState, RuleEntry
from key_exclusions.matching.pattern_matcher import PatternMatcher
from key_exclusions.matching.rules import Rule

logger = logging.getLogger(__name__)


class Exclusions:
    """Resolve the effective exclusion rule for an address.

    Parameters
    ----------
    settings:
        Store holding the entry list under ``config.settings_key``.
    config:
        Optional :class:`ExclusionsConfig`; defaults are used otherwise.
    matcher:
        Optional :class:`PatternMatcher`.  Defaults to a new matcher
        built from *config*.  A supplied matcher matches with its own
        wildcard and case sensitivity, so when both are given they must
        agree with *config*.

    Raises
    ------
    ValueError
        If *matcher* and *config* disagree on wildcard or case sensitivity.
    SettingsError
        If the stored rule list is not a list.  Only construction raises;
        a later reload logs the problem and reads an empty list instead.
    """

    def __init__(
        self,
        settings: SettingsStore,
        *,
        config: ExclusionsConfig | None = None,
        matcher: PatternMatcher | None = None,
    ) -> None:
        self._settings = settings
        self._config = config or ExclusionsConfig()
        if matcher is not None and config is not None:
            _check_matcher_config(matcher.config, config)
        self._matcher = matcher or PatternMatcher(self._config)
        self._rules: tuple[RuleEntry, ...] = self._load(strict=True)
        self._disposed = False
        settings.register_post_update_hook(
            self._config.settings_key, self.post_update_hook
        )

    # -- public properties --------------------------------------------------

    @property
    def rules(self) -> tuple[RuleEntry, ...]:
        """Return the configured entries."""
        return self._rules

    @property
    def matcher(self) -> PatternMatcher:
        """Return the pattern matcher (and its cache) used for resolution."""
        return self._matcher

    # A rules-editing surface tests candidate patterns against this cache.
    regexp_cache = matcher

    @property
    def config(self) -> ExclusionsConfig:
        return self._config

    # -- resolution ---------------------------------------------------------

    def get_rule(
        self,
        address: str,
        rules: Iterable[RuleEntry | dict[str, Any] | None] | None = None,
    ) -> Rule | None:
        """Return the merged rule for *address*, or ``None`` if nothing matches.

        *rules* replaces the configured entries for this call only, so
        candidate entries can be previewed without saving them.

        Raises
        ------
        InvalidRuleEntry
            If a candidate entry in *rules* is malformed.
        """
        entries = self._rules if rules is None else self._coerce_all(rules)
        matching = [
            Rule.from_entry(entry)
            for entry in entries
            if entry.pattern and self._matcher.test(entry.pattern, address)
        ]
        logger.debug("%d exclusion rule(s) match %s", len(matching), address)

        merged: Rule | None = None
        for rule in matching:
            if merged is None:
                merged = rule
            else:
                merged = merged.merge_rule(rule, label=self._config.merged_rule_pattern)
            if rule.exclude_everything():
                return rule
        return merged

    def is_enabled_for_url(self, address: str) -> EnabledState:
        """Return whether key handling is enabled for *address*."""
        rule = self.get_rule(address)
        return EnabledState(
            is_enabled_for_url=rule is None or rule.is_enabled(),
            pass_keys=rule.pass_keys if rule is not None else "",
            rule=rule,
        )

    # -- configuration ------------------------------------------------------

    def set_rules(self, rules: Iterable[RuleEntry | dict[str, Any] | None]) -> None:
        """Replace the configured entries and persist them.

        Falsy placeholders (``None``, ``{}``) and entries without a pattern
        are dropped.

        Raises
        ------
        InvalidRuleEntry
            If an entry is malformed.  Nothing is replaced or persisted.
        """
        entries = tuple(entry for entry in self._coerce_all(rules) if entry.pattern)
        self._settings.set(
            self._config.settings_key,
            [entry.to_settings() for entry in entries],
        )
        self._rules = entries
        logger.debug("Exclusion rules replaced: %d entr(ies)", len(entries))

    def reload(self) -> None:
        """Re-read the entries from the settings store and clear the matcher cache."""
        self._matcher.clear()
        self._rules = self._load(strict=False)
        logger.debug("Exclusion rules reloaded: %d entr(ies)", len(self._rules))

    def post_update_hook(self, value: Any = None) -> None:
        """Settings hook for the rules key.

        *value* may be a transient copy owned by the writer, so it is not
        kept; the store is re-read instead.
        """
        self.reload()

    def dispose(self) -> None:
        """Detach from the settings store and drop cached matchers."""
        if self._disposed:
            return
        self._settings.unregister_post_update_hook(
            self._config.settings_key, self.post_update_hook
        )
        self._matcher.clear()
        self._disposed = True

    # -- internal helpers ---------------------------------------------------

    def _load(self, *, strict: bool) -> tuple[RuleEntry, ...]:
        key = self._config.settings_key
        raw = self._settings.get(key)
        if raw is None:
            return ()
        if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
            exc = SettingsError(details={"key": key, "type": type(raw).__name__})
            if strict:
                raise exc
            logger.warning("Ignoring stored exclusion rules: %s %s", exc.message, exc.details)
            return ()
        entries: list[RuleEntry] = []
        for item in raw:
            if not item:
                continue
            try:
                entries.append(RuleEntry.coerce(item))
            except InvalidRuleEntry as exc:
                logger.warning("Skipping stored exclusion rule: %s %s", exc.message, exc.details)
        return tuple(entries)

    @staticmethod
    def _coerce_all(
        rules: Iterable[RuleEntry | dict[str, Any] | None],
    ) -> tuple[RuleEntry, ...]:
        return tuple(RuleEntry.coerce(rule) for rule in rules if rule)


def _check_matcher_config(matcher_config: ExclusionsConfig, config: ExclusionsConfig) -> None:
    for field in ("wildcard", "case_sensitive"):
        if getattr(matcher_config, field) != getattr(config, field):
            raise ValueError(
                f"Matcher {field} {getattr(matcher_config, field)!r} does not match "
                f"config {field} {getattr(config, field)!r}"
            )
