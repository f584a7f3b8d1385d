"""Exceptions raised while loading or accessing configuration."""

from __future__ import annotations

from typing import Any, Optional, Sequence


class ConfigError(Exception):
    """Base class for every configuration failure."""

    def __init__(self, message: str, *, key: Optional[str] = None) -> None:
        super().__init__(message)
        self.key = key


class InvalidValueError(ConfigError, ValueError):
    """Raised when a raw value is missing or cannot be coerced to its type."""

    def __init__(self, key: str, value: Any) -> None:
        super().__init__(f'Invalid config value for "{key}": {value}', key=key)
        self.value = value


class InvalidTypeError(ConfigError, TypeError):
    """Raised when the schema declares a type the engine does not know."""

    def __init__(self, key: str, type_name: Any) -> None:
        super().__init__(f'Invalid type "{type_name}" for "{key}" config', key=key)
        self.type_name = type_name


class InvalidSchemaError(ConfigError):
    """Raised for malformed schema entries (bad ``validate`` or ``enum``)."""


class ValidationFailedError(ConfigError, ValueError):
    """Raised when a custom validator or pattern rejects a resolved value."""


class EnumViolationError(ConfigError, ValueError):
    """Raised when a resolved value is not one of the allowed values."""

    def __init__(self, key: str, value: Any, allowed: Sequence[Any]) -> None:
        choices = ", ".join(str(item) for item in allowed)
        super().__init__(f"Value for {key} should be one of: {choices}", key=key)
        self.value = value
        self.allowed = list(allowed)


class UnknownKeyError(ConfigError, KeyError):
    """Raised when code touches a key that the schema never declared."""

    def __init__(self, key: str) -> None:
        super().__init__(f'Unknown config key "{key}"', key=key)

    def __str__(self) -> str:
        # KeyError would otherwise render the message with quotes
        return str(self.args[0])
