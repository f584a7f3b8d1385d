"""Schema entry model and schema file reading."""

from __future__ import annotations

import re
import tomllib
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError

from .errors import InvalidSchemaError

SchemaEntry = Union[str, Mapping[str, Any], "Attribute"]
Schema = Mapping[str, SchemaEntry]


class Attribute(BaseModel):
    """Declaration of a single configuration key.

    ``default`` may be a value or a zero-argument callable. ``validate`` may be
    a callable ``(value, key, config) -> bool`` or a compiled regular
    expression. ``type``, ``validate`` and ``enum`` are checked by the engine
    when the key is resolved.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,
        populate_by_name=True,
    )

    type: str
    required: StrictBool = False
    default: Any = None
    validator: Any = Field(default=None, alias="validate")
    enum: Any = None


def normalize_entry(key: str, entry: SchemaEntry) -> Attribute:
    """Return the full attribute record for a schema entry."""
    if isinstance(entry, Attribute):
        return entry
    if isinstance(entry, str):
        return Attribute(type=entry)
    if isinstance(entry, Mapping):
        try:
            return Attribute.model_validate(dict(entry))
        except ValidationError as exc:
            raise InvalidSchemaError(
                f"Invalid schema entry for {key} configuration: {exc}", key=key
            ) from exc
    raise InvalidSchemaError(
        f"Invalid schema entry for {key} configuration: {entry!r}", key=key
    )


def read_toml(path: Path) -> dict[str, Any]:
    """Read a TOML file, failing when it does not exist."""
    if not path.exists():
        raise FileNotFoundError(f"Schema file not found at {path}")
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _compile_pattern(key: str, pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise InvalidSchemaError(
            f'Invalid validate pattern for {key} configuration: "{pattern}" ({exc})',
            key=key,
        ) from exc


def load_schema_file(path: str | Path) -> dict[str, SchemaEntry]:
    """Load a schema declared in TOML.

    Top-level string values are type shorthands, tables are attribute records.
    A string ``validate`` is compiled as a regular expression since TOML has
    no way to express a callable.
    """
    data = read_toml(Path(path).expanduser())
    schema: dict[str, SchemaEntry] = {}
    for key, entry in data.items():
        if isinstance(entry, str):
            schema[key] = entry
            continue
        if not isinstance(entry, dict):
            raise InvalidSchemaError(
                f"Invalid schema entry for {key} configuration: {entry!r}", key=key
            )
        record = dict(entry)
        pattern: Optional[Any] = record.get("validate")
        if isinstance(pattern, str):
            record["validate"] = _compile_pattern(key, pattern)
        schema[key] = normalize_entry(key, record)
    return schema
