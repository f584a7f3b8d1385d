"""Access-checked wrapper around a resolved configuration."""

from __future__ import annotations

from typing import Any, ItemsView, Iterator, KeysView, Mapping

from .errors import UnknownKeyError


class ConfigView:
    """Resolved configuration that only accepts the keys it was built with.

    Keys are readable and writable both as attributes (``config.PORT``) and as
    items (``config["PORT"]``). Touching any other key raises
    :class:`UnknownKeyError`. Writes are not re-validated.

    Attribute names starting with ``_`` that are not configuration keys fall
    through to a plain :class:`AttributeError` so that ``copy``, ``pickle``,
    ``hasattr`` and interactive inspectors keep working.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, Any]) -> None:
        object.__setattr__(self, "_values", dict(values))

    def get(self, key: str) -> Any:
        try:
            return self._values[key]
        except KeyError:
            raise UnknownKeyError(key) from None

    def set(self, key: str, value: Any) -> None:
        if key not in self._values:
            raise UnknownKeyError(key)
        self._values[key] = value

    def __getattr__(self, name: str) -> Any:
        # only called when normal lookup fails, so methods and slots win
        try:
            values = object.__getattribute__(self, "_values")
        except AttributeError:
            # unpickling or copying before __init__/__setstate__ ran
            raise AttributeError(name) from None
        if name in values:
            return values[name]
        if name.startswith("_"):
            raise AttributeError(name)
        raise UnknownKeyError(name)

    def __setattr__(self, name: str, value: Any) -> None:
        self.set(name, value)

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Cannot delete config key {name!r}")

    def __delitem__(self, key: str) -> None:
        raise TypeError(f"Cannot delete config key {key!r}")

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ConfigView):
            return self._values == other._values
        if isinstance(other, Mapping):
            return self._values == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ConfigView(keys={list(self._values)!r})"

    def __getstate__(self) -> dict[str, Any]:
        return dict(self._values)

    def __setstate__(self, state: Mapping[str, Any]) -> None:
        object.__setattr__(self, "_values", dict(state))

    def keys(self) -> KeysView[str]:
        return self._values.keys()

    def items(self) -> ItemsView[str, Any]:
        return self._values.items()

    def to_dict(self) -> dict[str, Any]:
        """Return a shallow copy of the resolved values."""
        return dict(self._values)
