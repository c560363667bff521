"""
Connection configuration for the Totvs RM web services.

Values come from the process environment and an optional ``.env`` file
(see ``_env.py``).  The resulting :class:`ConnectionConfig` is immutable
and is passed explicitly to :class:`~totvs_rm_soap.network.WebService`.
"""

from __future__ import annotations

__all__ = ["ConnectionConfig", "load_config"]

import logging
import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from urllib.parse import urlparse

from ..constants import (
    DEFAULT_TIMEOUT,
    ENV_ALLOW_SELF_SIGNED,
    ENV_CA_BUNDLE,
    ENV_PASS,
    ENV_TIMEOUT,
    ENV_URL,
    ENV_USER,
    ENV_VERIFY_PEER,
    ENV_VERIFY_PEER_NAME,
    MAX_TIMEOUT,
    MIN_TIMEOUT,
)
from ..errors import ConfigError
from ._env import load_env, parse_bool

if TYPE_CHECKING:
    from collections.abc import Mapping

_logger = logging.getLogger(__name__)

_REQUIRED = (ENV_URL, ENV_USER, ENV_PASS)


@dataclass(frozen=True)
class ConnectionConfig:
    """Connection parameters for a Totvs RM host.

    Attributes:
        base_url: Host URL without trailing slash, e.g.
            ``https://rm.example.com:8051``. WSDL paths are appended to it.
        username: HTTP Basic auth user.
        password: HTTP Basic auth password (never shown in repr).
        verify_peer: Verify the server certificate chain.
        verify_peer_name: Verify that the certificate matches the hostname.
        allow_self_signed: Accept self-signed server certificates.
        ca_bundle: Optional CA bundle path used when verifying.
        timeout: HTTP timeout in seconds for WSDL loading and each call.
    """

    base_url: str
    username: str
    password: str = field(repr=False)
    verify_peer: bool = True
    verify_peer_name: bool = True
    allow_self_signed: bool = False
    ca_bundle: str | None = None
    timeout: int = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url.strip().rstrip("/"))

    @property
    def is_insecure(self) -> bool:
        """True if any TLS check is relaxed."""
        return not self.verify_peer or not self.verify_peer_name or self.allow_self_signed

    def wsdl_url(self, path: str) -> str:
        """Build a WSDL location by appending ``path`` to the base URL."""
        return f"{self.base_url}{path}"


def _parse_timeout(raw: str | None) -> int:
    """Parse WS_TIMEOUT, falling back to the default on bad input."""
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT
    try:
        timeout = int(raw.strip())
    except ValueError:
        _logger.warning("Invalid %s value %r, using default", ENV_TIMEOUT, raw)
        return DEFAULT_TIMEOUT
    if timeout < MIN_TIMEOUT or timeout > MAX_TIMEOUT:
        _logger.warning(
            "%s=%d out of range [%d, %d], using default",
            ENV_TIMEOUT,
            timeout,
            MIN_TIMEOUT,
            MAX_TIMEOUT,
        )
        return DEFAULT_TIMEOUT
    return timeout


def load_config(
    env_file: str | os.PathLike[str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> ConnectionConfig:
    """
    Load the connection configuration.

    Priority: process environment (or ``environ``) > .env file.

    Args:
        env_file: Explicit .env path; None searches from the working
            directory upwards.
        environ: Mapping used instead of ``os.environ``.

    Returns:
        ConnectionConfig.

    Raises:
        ConfigError: If required variables are missing, a boolean flag is
            invalid, or an explicit ``env_file`` does not exist.
    """
    values = load_env(env_file, environ)

    missing = [name for name in _REQUIRED if not values.get(name, "").strip()]
    if missing:
        raise ConfigError(f"Missing required configuration: {', '.join(missing)}")

    url = values[ENV_URL].strip()
    if urlparse(url).scheme.lower() != "https":
        _logger.warning(
            "%s is not an HTTPS URL; credentials will be sent unencrypted: %s", ENV_URL, url
        )

    config = ConnectionConfig(
        base_url=url,
        username=values[ENV_USER],
        password=values[ENV_PASS],
        verify_peer=parse_bool(ENV_VERIFY_PEER, values.get(ENV_VERIFY_PEER), default=True),
        verify_peer_name=parse_bool(
            ENV_VERIFY_PEER_NAME, values.get(ENV_VERIFY_PEER_NAME), default=True
        ),
        allow_self_signed=parse_bool(
            ENV_ALLOW_SELF_SIGNED, values.get(ENV_ALLOW_SELF_SIGNED), default=False
        ),
        ca_bundle=values.get(ENV_CA_BUNDLE, "").strip() or None,
        timeout=_parse_timeout(values.get(ENV_TIMEOUT)),
    )

    if config.is_insecure:
        _logger.warning(
            "TLS verification relaxed for %s (verify_peer=%s, verify_peer_name=%s, "
            "allow_self_signed=%s). Use only for local development.",
            config.base_url,
            config.verify_peer,
            config.verify_peer_name,
            config.allow_self_signed,
        )
    _logger.debug("Loaded configuration for %s (user=%s)", config.base_url, config.username)
    return config
