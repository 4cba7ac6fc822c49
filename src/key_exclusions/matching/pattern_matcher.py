"""Wildcard pattern compilation and caching.

An exclusion pattern is plain address text in which ``*`` (the
configured wildcard) matches any sequence of characters, including the
empty one.  Every other character matches itself literally.  Patterns
are anchored at both ends: ``"ex*le.com"`` matches ``"example.com"`` but
not ``"example.com/x"``.

A pattern the regex engine rejects never breaks matching for the other
rules: it is logged and replaced by a matcher that accepts only the
empty string, which is never a real address.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Callable, MutableMapping

from key_exclusions.core.config import ExclusionsConfig
from key_exclusions.core.errors import InvalidPattern

logger = logging.getLogger(__name__)

# Installed in place of a pattern that failed to compile.
NEVER_MATCH: re.Pattern[str] = re.compile(r"\A\Z")

_COMPILE_ERRORS = (re.error, OverflowError, RecursionError)


class PatternMatcher:
    """Compile wildcard patterns into anchored regexes, with a cache.

    Parameters
    ----------
    config:
        Supplies the wildcard character and case sensitivity.
    log:
        Optional single-argument diagnostic sink for malformed-pattern
        warnings.  Defaults to this module's logger.
    """

    def __init__(
        self,
        config: ExclusionsConfig | None = None,
        *,
        log: Callable[[str], object] | None = None,
    ) -> None:
        self._config = config or ExclusionsConfig()
        self._log = log
        self._cache: MutableMapping[str, re.Pattern[str]] = {}

    @property
    def config(self) -> ExclusionsConfig:
        """Return the configuration this matcher compiles with."""
        return self._config

    # -- compilation --------------------------------------------------------

    def translate(self, pattern: str) -> str:
        """Return the anchored regex source for *pattern*."""
        literals = pattern.split(self._config.wildcard)
        return r"\A" + ".*".join(re.escape(part) for part in literals) + r"\Z"

    def validate(self, pattern: str) -> re.Pattern[str]:
        """Compile *pattern* without touching the cache.

        Raises
        ------
        InvalidPattern
            If the regex engine rejects the translated pattern.
        """
        flags = re.DOTALL
        if not self._config.case_sensitive:
            flags |= re.IGNORECASE
        try:
            return re.compile(self.translate(pattern), flags)
        except _COMPILE_ERRORS as exc:
            raise InvalidPattern(
                f"bad regexp in exclusion rule: {pattern}",
                details={"pattern": pattern, "reason": str(exc)},
            ) from exc

    def compile(self, pattern: str) -> re.Pattern[str]:
        """Return the cached matcher for *pattern*, compiling it on first use.

        Never raises for a malformed pattern; see the module docstring.
        """
        cache = self._cache
        matcher = cache.get(pattern)
        if matcher is None:
            try:
                matcher = self.validate(pattern)
            except InvalidPattern as exc:
                self._report(exc.message)
                matcher = NEVER_MATCH
            cache[pattern] = matcher
        return matcher

    # -- matching -----------------------------------------------------------

    def test(self, pattern: str, address: str) -> bool:
        """Return ``True`` if *pattern* matches the whole of *address*."""
        return self.compile(pattern).match(address) is not None

    # -- cache management ---------------------------------------------------

    def clear(self, cache: MutableMapping[str, re.Pattern[str]] | None = None) -> None:
        """Discard every cached matcher.

        If *cache* is given it becomes the new cache, otherwise an empty
        one is installed.  The swap is a single assignment.
        """
        self._cache = cache if cache is not None else {}

    @property
    def cache_size(self) -> int:
        """Return the number of cached matchers."""
        return len(self._cache)

    # -- internal helpers ---------------------------------------------------

    def _report(self, message: str) -> None:
        if self._log is None:
            logger.warning(message)
            return
        try:
            self._log(message)
        except Exception:
            logger.debug("Diagnostic sink failed for: %s", message, exc_info=True)
