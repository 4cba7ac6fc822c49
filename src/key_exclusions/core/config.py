"""Key exclusion configuration.

Defines the validated configuration model shared by the pattern matcher
and the :class:`~key_exclusions.exclusions.Exclusions` resolver.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ExclusionsConfig(BaseModel):
    """Configuration for an :class:`~key_exclusions.exclusions.Exclusions` instance.

    All fields carry defaults so that ``ExclusionsConfig()`` is a
    complete configuration.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    settings_key: str = Field(
        default="exclusionRules",
        min_length=1,
        description="Settings key holding the ordered list of rule entries.",
    )
    wildcard: str = Field(
        default="*",
        min_length=1,
        max_length=1,
        description="Pattern character matching any sequence of characters.",
    )
    merged_rule_pattern: str = Field(
        default="merged-rule",
        description=(
            "Synthetic label carried in the ``pattern`` field of a rule "
            "produced by merging.  It is never matched against addresses."
        ),
    )
    case_sensitive: bool = Field(
        default=True,
        description="Whether patterns match addresses case-sensitively.",
    )
