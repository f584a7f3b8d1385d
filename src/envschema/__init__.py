"""envschema package exposing schema-driven configuration loading."""

from __future__ import annotations

from .engine import parse, resolve
from .errors import (
    ConfigError,
    EnumViolationError,
    InvalidSchemaError,
    InvalidTypeError,
    InvalidValueError,
    UnknownKeyError,
    ValidationFailedError,
)
from .loader import load
from .schema import Attribute, load_schema_file
from .sources import collect_sources
from .view import ConfigView

__all__ = [
    "Attribute",
    "ConfigView",
    "ConfigError",
    "EnumViolationError",
    "InvalidSchemaError",
    "InvalidTypeError",
    "InvalidValueError",
    "UnknownKeyError",
    "ValidationFailedError",
    "collect_sources",
    "load",
    "load_schema_file",
    "parse",
    "resolve",
]
