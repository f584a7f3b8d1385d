"""Entry point that turns a schema into a resolved configuration."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from .engine import resolve
from .schema import Schema
from .sources import EnvFileOption, collect_sources
from .view import ConfigView

LOGGER = logging.getLogger(__name__)


def load(
    schema: Optional[Schema] = None,
    *,
    from_env_file: EnvFileOption = True,
    from_process_env: bool = True,
    env_object: Optional[Mapping[str, Any]] = None,
) -> ConfigView:
    """Load configuration for ``schema``.

    Raw values are merged from ``env_object``, then the dotenv file selected
    by ``from_env_file`` (``True`` means ``./.env``), then the process
    environment. Any failure raises a :class:`~envschema.errors.ConfigError`
    and no configuration is returned.
    """
    raw = collect_sources(
        env_object,
        from_env_file=from_env_file,
        from_process_env=from_process_env,
    )
    config = resolve(schema or {}, raw)
    LOGGER.debug("Resolved %d configuration key(s).", len(config))
    return ConfigView(config)
