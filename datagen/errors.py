"""
Exception hierarchy for the generator.

Everything raised on purpose derives from DatagenError so the CLI can turn it
into a diagnostic and a nonzero exit code in one place.
"""

from __future__ import annotations


class DatagenError(Exception):
    """Base class for generator errors."""


class ConfigLoadError(DatagenError):
    """The config file is missing, unreadable, or not valid YAML."""


class ConfigValidationError(DatagenError):
    """The config parsed but is semantically invalid."""


class RangeConversionError(DatagenError, ValueError):
    """A field range does not fit the field's type tag."""

    def __init__(self, column: str, type_tag: str, reason: str) -> None:
        self.column = column
        self.type_tag = type_tag
        self.reason = reason
        super().__init__(f"invalid range for {type_tag} column '{column}': {reason}")


__all__ = [
    "DatagenError",
    "ConfigLoadError",
    "ConfigValidationError",
    "RangeConversionError",
]
