"""
HTTP session setup for the Totvs RM web services.

Builds the ``requests.Session`` that zeep uses for both WSDL loading and
SOAP calls: HTTP Basic authentication plus TLS trust derived from the
three configuration flags.

TLS modes:

- **Full verification** (default): certificate chain and hostname checked.
- **Hostname check off** (``verify_peer_name=False``): chain still checked
  against the system store or ``ca_bundle``; an adapter with a custom
  ``ssl.SSLContext`` skips hostname matching.
- **Chain check off** (``verify_peer=False`` or ``allow_self_signed=True``):
  Python's ``ssl`` cannot accept self-signed certificates selectively, so
  both disable chain verification.
"""

from __future__ import annotations

__all__ = ["build_session", "build_transport"]

import logging
import ssl
from typing import TYPE_CHECKING, Any

from requests import Session
from requests.adapters import HTTPAdapter
from requests.auth import HTTPBasicAuth
from zeep.transports import Transport

if TYPE_CHECKING:
    from ..config import ConnectionConfig

_logger = logging.getLogger(__name__)


class _HostnameIgnoringAdapter(HTTPAdapter):
    """Verify the certificate chain but skip hostname matching."""

    def __init__(self, cafile: str | None = None, **kwargs: Any) -> None:
        self._cafile = cafile
        super().__init__(**kwargs)

    def init_poolmanager(self, *args: Any, **kwargs: Any) -> None:
        ctx = ssl.create_default_context(cafile=self._cafile)
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_REQUIRED
        kwargs["ssl_context"] = ctx
        kwargs["assert_hostname"] = False
        super().init_poolmanager(*args, **kwargs)


def build_session(config: ConnectionConfig) -> Session:
    """
    Create an authenticated session with the configured TLS trust.

    Args:
        config: Connection configuration.

    Returns:
        requests.Session with Basic auth and TLS settings applied.
    """
    session = Session()
    session.auth = HTTPBasicAuth(config.username, config.password)

    if not config.verify_peer or config.allow_self_signed:
        _logger.warning(
            "Certificate verification disabled for %s (verify_peer=%s, allow_self_signed=%s)",
            config.base_url,
            config.verify_peer,
            config.allow_self_signed,
        )
        session.verify = False
        return session

    if config.ca_bundle:
        session.verify = config.ca_bundle

    if not config.verify_peer_name:
        _logger.warning("Hostname verification disabled for %s", config.base_url)
        session.mount("https://", _HostnameIgnoringAdapter(cafile=config.ca_bundle))

    return session


def build_transport(config: ConnectionConfig) -> Transport:
    """Wrap a configured session in a zeep Transport with the configured timeouts."""
    _logger.debug("Building transport for %s (timeout=%ds)", config.base_url, config.timeout)
    return Transport(
        session=build_session(config),
        timeout=config.timeout,
        operation_timeout=config.timeout,
    )
