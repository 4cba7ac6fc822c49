"""Key exclusion error hierarchy.

Hierarchy
---------
::

    ExclusionError            (EX-E000)
    +-- InvalidPattern        (EX-E100)
    +-- InvalidRuleEntry      (EX-E200)
    +-- SettingsError         (EX-E300)

None of these is fatal to the host application.  ``InvalidPattern`` in
particular never escapes pattern matching: the matcher logs it and
degrades the offending pattern to one that matches nothing.

Usage
-----
Catch by base class::

    try:
        exclusions.set_rules(candidate)
    except ExclusionError as exc:
        show_error(exc.to_dict())
"""
from __future__ import annotations

from typing import Any


class ExclusionError(Exception):
    """Base exception for all key exclusion errors.

    Attributes
    ----------
    code : str
        Error code, e.g. ``"EX-E100"``.
    message : str
        Human-readable description.
    details : dict[str, Any]
        Machine-readable context specific to the error instance.
    resolution : str
        Suggested action for the caller.
    """

    code: str = "EX-E000"
    message: str = "Unknown exclusion error"
    resolution: str = ""

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
        resolution: str | None = None,
    ) -> None:
        self.details: dict[str, Any] = details or {}
        if message is not None:
            self.message = message
        if resolution is not None:
            self.resolution = resolution
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialise the error for display in a rules-editing surface."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            payload["detail"] = self.details
        if self.resolution:
            payload["resolution"] = self.resolution
        return {"error": payload}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class InvalidPattern(ExclusionError):
    """EX-E100 -- A pattern could not be compiled into a matcher."""

    code = "EX-E100"
    message = "Exclusion pattern could not be compiled"
    resolution = (
        "Use plain address text with '*' as the only wildcard, "
        "e.g. 'https://mail.example.com/*'."
    )


class InvalidRuleEntry(ExclusionError):
    """EX-E200 -- A configured entry does not have the rule entry shape."""

    code = "EX-E200"
    message = "Exclusion rule entry is malformed"
    resolution = (
        "Each entry must be a mapping with 'pattern', 'passKeys', "
        "'passMappings', 'allowKeys' and 'allowMappings' fields."
    )


class SettingsError(ExclusionError):
    """EX-E300 -- The settings store holds an unusable rule list."""

    code = "EX-E300"
    message = "Stored exclusion rules are not a list"
    resolution = "Reset the exclusion rules setting to a list of entries."
