"""Custom exceptions for enumeration lists attached to models."""

from collections.abc import Iterable, Mapping


class EnumError(Exception):
    """Base exception for enumeration list errors."""


class ConfigurationError(EnumError):
    """Raised when an enumeration list is configured incorrectly."""

    def __init__(self, message: str, group: str | None = None):
        self.group = group
        if group:
            message = f"Configuration error for enum group '{group}': {message}"
        super().__init__(message)


class UnsupportedStrategyError(ConfigurationError):
    """Raised when a group requests a strategy that is not registered."""

    def __init__(self, strategy: str, group: str | None = None, supported_strategies: Iterable[str] | None = None):
        self.strategy = strategy
        self.supported_strategies = list(supported_strategies or [])

        if self.supported_strategies:
            supported_list = ", ".join(self.supported_strategies)
            message = f"Class not found for strategy ({strategy}). Supported strategies: {supported_list}"
        else:
            message = f"Class not found for strategy ({strategy})"

        super().__init__(message, group=group)


class AmbiguousPrefixError(EnumError):
    """Raised when a group's prefix cannot be derived from its backing source."""

    def __init__(self, group: str, candidates: Iterable[str] | None = None):
        self.group = group
        self.candidates = list(candidates or [])

        if self.candidates:
            tried = ", ".join(self.candidates)
            message = f"Undefined prefix for strategy ({group}). Tried: {tried}"
        else:
            message = f"Undefined prefix for strategy ({group})"

        super().__init__(message)


class UnknownGroupError(EnumError, LookupError):
    """Raised when an undeclared enumeration group is requested."""

    def __init__(self, group: str, known_groups: Iterable[str] | None = None):
        self.group = group
        self.known_groups = list(known_groups or [])

        if self.known_groups:
            known_list = ", ".join(self.known_groups)
            message = f"Unknown enum group '{group}'. Declared groups: {known_list}"
        else:
            message = f"Unknown enum group '{group}'"

        super().__init__(message)


class UnknownGroupAttributeError(UnknownGroupError, AttributeError):
    """Raised when a dynamic ``is_valid_<group>`` attribute names an undeclared group."""


class EnumValidationError(EnumError, ValueError):
    """Raised when an entity fails one or more enumeration rules."""

    def __init__(self, errors: Mapping[str, list[str]], entity: object | None = None):
        self.errors = dict(errors)
        self.entity = entity

        details = "; ".join(f"{field}: {', '.join(messages)}" for field, messages in self.errors.items())
        super().__init__(f"Enum validation failed ({details})" if details else "Enum validation failed")
