"""Settings collaborator interface and an in-memory implementation.

The resolver never persists anything itself: it reads and writes the
rule list through a :class:`SettingsStore`, and relies on the store's
post-update hooks to learn about writes made elsewhere (for example by
a separate rules-editing surface holding its own copy of the list).

The in-memory implementation is **not** thread-safe and is meant for
tests and local development.
"""
from __future__ import annotations

import copy
import logging
from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

PostUpdateHook = Callable[[Any], None]


@runtime_checkable
class SettingsStore(Protocol):
    """Backend for settings persistence."""

    def get(self, key: str) -> Any:
        """Return the stored value for *key*, or ``None`` if unset."""
        ...

    def set(self, key: str, value: Any) -> None:
        """Store *value* under *key* and run the key's post-update hooks."""
        ...

    def register_post_update_hook(self, key: str, hook: PostUpdateHook) -> None:
        """Call *hook* with the new value after every write to *key*."""
        ...

    def unregister_post_update_hook(self, key: str, hook: PostUpdateHook) -> None:
        """Stop calling *hook* for *key*.  Unknown hooks are ignored."""
        ...


class InMemorySettingsStore:
    """Dict-backed settings store.

    Values are deep-copied on the way in and out so callers can never
    mutate stored state through a reference they hold.
    """

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = copy.deepcopy(initial) if initial else {}
        self._hooks: dict[str, list[PostUpdateHook]] = {}

    def get(self, key: str) -> Any:
        return copy.deepcopy(self._values.get(key))

    def set(self, key: str, value: Any) -> None:
        self._values[key] = copy.deepcopy(value)
        hooks = list(self._hooks.get(key, ()))
        logger.debug("Setting %r updated, running %d hook(s)", key, len(hooks))
        for hook in hooks:
            hook(self.get(key))

    def register_post_update_hook(self, key: str, hook: PostUpdateHook) -> None:
        self._hooks.setdefault(key, []).append(hook)

    def unregister_post_update_hook(self, key: str, hook: PostUpdateHook) -> None:
        hooks = self._hooks.get(key)
        if hooks and hook in hooks:
            hooks.remove(hook)

    def hooks_for(self, key: str) -> list[PostUpdateHook]:
        """Return the hooks registered for *key* (test helper)."""
        return list(self._hooks.get(key, ()))
