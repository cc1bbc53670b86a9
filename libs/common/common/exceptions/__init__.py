"""Custom exceptions for the common library."""

from .enum_exceptions import (
    AmbiguousPrefixError,
    ConfigurationError,
    EnumError,
    EnumValidationError,
    UnknownGroupAttributeError,
    UnknownGroupError,
    UnsupportedStrategyError,
)

__all__ = [
    "AmbiguousPrefixError",
    "ConfigurationError",
    "EnumError",
    "EnumValidationError",
    "UnknownGroupAttributeError",
    "UnknownGroupError",
    "UnsupportedStrategyError",
]
