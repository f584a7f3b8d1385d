"""Type coercion and validation of raw configuration values."""

from __future__ import annotations

import json
import re
from typing import Any, Callable, Mapping

from .errors import (
    EnumViolationError,
    InvalidSchemaError,
    InvalidTypeError,
    InvalidValueError,
    ValidationFailedError,
)
from .schema import Attribute, Schema, normalize_entry

NUMBER_PATTERN = re.compile(r"-?(0|[1-9][0-9]*)")
BOOLEANS = ("true", "false")


def stringify(value: Any) -> str:
    """Render a resolved value the way pattern validators see it."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value)
    return str(value)


def _coerce(key: str, raw: str, type_name: str) -> Any:
    if type_name == "string":
        return raw

    if type_name == "array":
        return [piece.strip() for piece in raw.split(",")]

    if type_name == "number":
        if not NUMBER_PATTERN.fullmatch(raw):
            raise InvalidValueError(key, raw)
        return int(raw)

    if type_name == "boolean":
        lowered = raw.lower()
        if lowered not in BOOLEANS:
            raise InvalidValueError(key, raw)
        return lowered == "true"

    if type_name == "json":
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise InvalidValueError(key, raw) from exc

    raise InvalidTypeError(key, type_name)


def parse(key: str, raw: Any, attribute: Attribute) -> Any:
    """Resolve the raw value for ``key`` into its typed value."""
    if attribute.required is True:
        # required values skip coercion and are returned as given
        if not isinstance(raw, str) or raw == "":
            raise InvalidValueError(key, raw)
        return raw

    if raw is None or raw == "":
        if callable(attribute.default):
            return attribute.default()
        if attribute.type == "array" and attribute.default is None:
            return []
        return attribute.default

    if not isinstance(raw, str):
        raise InvalidValueError(key, raw)

    return _coerce(key, raw, attribute.type)


def _check_enum(key: str, value: Any, allowed: Any) -> None:
    if not isinstance(allowed, (list, tuple)):
        raise InvalidSchemaError(
            f"Invalid enum value for {key} configuration: {allowed}", key=key
        )
    # True == 1 in Python; booleans only match booleans
    if not any(
        item == value and isinstance(item, bool) == isinstance(value, bool)
        for item in allowed
    ):
        raise EnumViolationError(key, value, allowed)


def _deferred_check(key: str, value: Any, validate: Any) -> Callable[[Mapping[str, Any]], None]:
    def check(config: Mapping[str, Any]) -> None:
        if isinstance(validate, re.Pattern):
            if not validate.search(stringify(value)):
                raise ValidationFailedError(
                    f'Value for {key} does not validate format of regex "{validate.pattern}"',
                    key=key,
                )
        elif callable(validate):
            if not validate(value, key, config):
                raise ValidationFailedError(
                    f"Value for {key} configuration does not pass custom validation",
                    key=key,
                )
        else:
            raise InvalidSchemaError(
                f"Invalid validate value for {key} configuration", key=key
            )

    return check


def resolve(schema: Schema, raw: Mapping[str, Any]) -> dict[str, Any]:
    """Resolve every schema key against the merged raw values.

    Validators run only once every key has a value so that a validator can
    look at its siblings through the ``config`` argument.
    """
    config: dict[str, Any] = {}
    pending: list[Callable[[Mapping[str, Any]], None]] = []

    for key, entry in schema.items():
        attribute = normalize_entry(key, entry)
        value = parse(key, raw.get(key), attribute)

        if attribute.validator:
            pending.append(_deferred_check(key, value, attribute.validator))

        if attribute.enum is not None:
            _check_enum(key, value, attribute.enum)

        config[key] = value

    for check in pending:
        check(config)

    return config
