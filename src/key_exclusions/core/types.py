"""Key exclusion shared types.

* ``RuleEntry`` is the persisted unit read from and written to the
  settings store.  Field names are snake_case with the camelCase aliases
  used by the stored data.
* ``EnabledState`` is the answer to "is this address subject to any
  suppression?" returned by
  :meth:`~key_exclusions.exclusions.Exclusions.is_enabled_for_url`.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from key_exclusions.core.errors import InvalidRuleEntry

if TYPE_CHECKING:
    from key_exclusions.matching.rules import Rule


class RuleEntry(BaseModel):
    """A configured exclusion entry, as persisted.

    ``pass_keys`` and ``allow_keys`` are strings whose characters form an
    unordered set; ``pass_mappings`` and ``allow_mappings`` are command
    names.  ``None`` is accepted for every field and read as empty.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    pattern: str = Field(default="")
    pass_keys: str = Field(default="", alias="passKeys")
    pass_mappings: list[str] = Field(default_factory=list, alias="passMappings")
    allow_keys: str = Field(default="", alias="allowKeys")
    allow_mappings: list[str] = Field(default_factory=list, alias="allowMappings")

    @field_validator("pattern", "pass_keys", "allow_keys", mode="before")
    @classmethod
    def _none_as_empty_string(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("pass_mappings", "allow_mappings", mode="before")
    @classmethod
    def _none_as_empty_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @classmethod
    def coerce(cls, value: Any) -> RuleEntry:
        """Return *value* as a :class:`RuleEntry`.

        Raises
        ------
        InvalidRuleEntry
            If *value* is neither a ``RuleEntry`` nor a mapping, or a
            field has the wrong type.
        """
        if isinstance(value, RuleEntry):
            return value
        if not isinstance(value, Mapping):
            raise InvalidRuleEntry(
                f"Expected a mapping, got {type(value).__name__}",
                details={"entry": repr(value)},
            )
        try:
            return cls.model_validate(dict(value))
        except ValidationError as exc:
            raise InvalidRuleEntry(
                f"Invalid exclusion rule entry: {exc.error_count()} field error(s)",
                details={
                    "pattern": value.get("pattern"),
                    "errors": [
                        {"loc": list(err["loc"]), "msg": err["msg"]}
                        for err in exc.errors()
                    ],
                },
            ) from exc

    def to_settings(self) -> dict[str, Any]:
        """Dump the entry in its stored (camelCase) shape."""
        return self.model_dump(by_alias=True)


@dataclass(frozen=True, slots=True)
class EnabledState:
    """Whether key handling is enabled for an address.

    Attributes
    ----------
    is_enabled_for_url:
        ``False`` only when the effective rule excludes everything.
    pass_keys:
        Characters passed through to the page (empty if no rule matched).
    rule:
        The effective rule, or ``None`` when no entry matched.
    """

    is_enabled_for_url: bool
    pass_keys: str
    rule: Rule | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "isEnabledForUrl": self.is_enabled_for_url,
            "passKeys": self.pass_keys,
            "rule": self.rule.to_dict() if self.rule is not None else None,
        }
