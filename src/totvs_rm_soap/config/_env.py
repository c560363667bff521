"""
Low-level environment reading for totvs-rm-soap.

Merges a ``.env`` file (parsed with python-dotenv) with the process
environment and converts raw strings to typed values.  Used by
``config.py``; never writes to ``os.environ``.
"""

from __future__ import annotations

__all__ = ["load_env", "parse_bool"]

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import dotenv_values, find_dotenv

from ..errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Mapping

_logger = logging.getLogger(__name__)

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _read_env_file(env_file: str | os.PathLike[str] | None) -> dict[str, str]:
    """Parse a .env file, dropping keys declared without a value.

    Raises:
        ConfigError: If an explicit ``env_file`` does not exist.
    """
    if env_file is None:
        found = find_dotenv(usecwd=True)
        if not found:
            _logger.debug("No .env file found from %s upwards", Path.cwd())
            return {}
        path = Path(found)
    else:
        path = Path(env_file)
        if not path.is_file():
            raise ConfigError(f"Environment file not found: {path}")

    _logger.debug("Loading environment file %s", path)
    values = dotenv_values(path)
    return {key: value for key, value in values.items() if value is not None}


def load_env(
    env_file: str | os.PathLike[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """
    Resolve raw configuration strings.

    Priority: process environment > .env file.

    Args:
        env_file: Explicit .env path. When None, the nearest .env from the
            current directory upwards is used, if any.
        environ: Mapping used instead of ``os.environ`` (for tests and
            embedding applications).

    Returns:
        Merged mapping of variable name to raw string value.
    """
    merged = _read_env_file(env_file)
    source = os.environ if environ is None else environ
    merged.update({key: value for key, value in source.items() if value is not None})
    return merged


def parse_bool(name: str, raw: str | None, default: bool) -> bool:
    """Parse a boolean flag; empty or missing values yield ``default``.

    Raises:
        ConfigError: If the value is not a recognised boolean spelling.
    """
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean (true/false, 1/0, yes/no, on/off), got {raw!r}")
