"""Shared fixtures for key exclusion tests."""
from __future__ import annotations

from collections.abc import Iterator

import pytest

from key_exclusions import (
    Exclusions,
    ExclusionsConfig,
    InMemorySettingsStore,
    PatternMatcher,
)

RULES_KEY = "exclusionRules"


@pytest.fixture()
def config() -> ExclusionsConfig:
    return ExclusionsConfig()


@pytest.fixture()
def matcher(config: ExclusionsConfig) -> PatternMatcher:
    return PatternMatcher(config)


@pytest.fixture()
def settings() -> InMemorySettingsStore:
    """A settings store with an empty rule list."""
    return InMemorySettingsStore({RULES_KEY: []})


@pytest.fixture()
def exclusions(settings: InMemorySettingsStore) -> Iterator[Exclusions]:
    instance = Exclusions(settings)
    yield instance
    instance.dispose()
