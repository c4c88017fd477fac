"""Exception hierarchy for configuration assembly.

Every failure raised while building a configuration derives from
``ConfigurationError`` so the process bootstrap can catch a single type and
abort startup. Read accessors never raise these.
"""

from __future__ import annotations

from typing import Any, Optional


class ConfigurationError(Exception):
    """Base class for all configuration construction failures."""


class SourceUnavailableError(ConfigurationError):
    """The configuration source is missing or unreadable."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        super().__init__(f"configuration source {source!r} unavailable: {reason}")


class DecodeError(ConfigurationError):
    """The configuration source exists but could not be decoded."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        super().__init__(f"unable to decode configuration source {source!r}: {reason}")


class CoercionError(ConfigurationError):
    """An environment variable could not be converted to its field type."""

    def __init__(self, variable: str, raw_value: str, expected: str) -> None:
        self.variable = variable
        self.raw_value = raw_value
        self.expected = expected
        super().__init__(
            f"invalid value {raw_value!r} for environment variable {variable}: expected {expected}"
        )


class ConfigValidationError(ConfigurationError):
    """A configuration value violates a semantic constraint."""

    def __init__(self, message: str, *, field: Optional[str] = None, value: Any = None) -> None:
        self.field = field
        self.value = value
        super().__init__(message)


__all__ = [
    "ConfigurationError",
    "SourceUnavailableError",
    "DecodeError",
    "CoercionError",
    "ConfigValidationError",
]
