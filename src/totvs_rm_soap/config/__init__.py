"""
Connection configuration.

Import from this package directly instead of the individual submodules.
"""

from __future__ import annotations

from ._env import load_env, parse_bool
from .config import ConnectionConfig, load_config

__all__ = [
    "ConnectionConfig",
    "load_config",
    "load_env",
    "parse_bool",
]
