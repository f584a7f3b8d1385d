"""Raw value sources and their merge order."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from dotenv import dotenv_values

LOGGER = logging.getLogger(__name__)

EnvFileOption = Union[bool, str, os.PathLike, None]


def resolve_env_file(from_env_file: EnvFileOption) -> Optional[Path]:
    """Return the dotenv path selected by ``from_env_file`` (``None`` if disabled)."""
    if from_env_file is None or from_env_file is False:
        return None
    if from_env_file is True:
        return Path.cwd() / ".env"
    return Path(from_env_file).expanduser()


def read_env_file(path: Path) -> dict[str, str]:
    """Parse a dotenv file if it exists."""
    if not path.exists():
        LOGGER.debug("Env file %s not found; skipping.", path)
        return {}
    values = dotenv_values(path, interpolate=False)
    LOGGER.debug("Read %d value(s) from env file %s.", len(values), path)
    # keys declared without "=" come back as None
    return {key: value for key, value in values.items() if value is not None}


def collect_sources(
    env_object: Optional[Mapping[str, Any]] = None,
    from_env_file: EnvFileOption = True,
    from_process_env: bool = True,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> dict[str, Any]:
    """Merge raw values; later layers override earlier ones.

    Order: ``env_object`` -> dotenv file -> process environment.
    """
    merged: dict[str, Any] = dict(env_object or {})

    env_path = resolve_env_file(from_env_file)
    if env_path is not None:
        merged.update(read_env_file(env_path))

    if from_process_env:
        merged.update(os.environ if environ is None else environ)

    return merged
