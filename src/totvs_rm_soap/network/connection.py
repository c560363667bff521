"""
Connection factory for Totvs RM SOAP endpoints.

Loads a service WSDL through zeep and binds the SOAP 1.1 port, which is
the binding the RM application server answers reliably (its MEX documents
also advertise SOAP 1.2 ports).
"""

from __future__ import annotations

__all__ = ["WebService"]

import logging
from typing import TYPE_CHECKING

from zeep import Client, Settings
from zeep.exceptions import Error as ZeepError
from zeep.wsdl.bindings.soap import Soap11Binding

from ..errors import ServiceConnectionError
from .transport import build_transport

if TYPE_CHECKING:
    from zeep.proxy import ServiceProxy

    from ..config import ConnectionConfig

_logger = logging.getLogger(__name__)


def _bind_soap11(client: Client, url: str) -> ServiceProxy:
    """Bind the first SOAP 1.1 port declared in the loaded WSDL.

    Raises:
        ServiceConnectionError: If the WSDL declares no SOAP 1.1 port.
    """
    for service in client.wsdl.services.values():
        for port in service.ports.values():
            if isinstance(port.binding, Soap11Binding):
                _logger.debug("Binding %s port %s (SOAP 1.1)", service.name, port.name)
                return client.bind(service.name, port.name)
    raise ServiceConnectionError(f"WSDL declares no SOAP 1.1 port: {url}", url=url)


class WebService:
    """Builds SOAP clients for the RM web services of one host.

    Args:
        config: Connection configuration (base URL, credentials, TLS flags).
    """

    def __init__(self, config: ConnectionConfig) -> None:
        self.config = config

    def get_client(self, path: str) -> ServiceProxy:
        """
        Load the WSDL at ``base_url + path`` and return its SOAP 1.1 service.

        Args:
            path: WSDL path, e.g. ``/wsReport/MEX?wsdl``.

        Returns:
            zeep ServiceProxy whose attributes are the remote operations.

        Raises:
            ServiceConnectionError: If the WSDL cannot be fetched or parsed,
                the transport fails, or no SOAP 1.1 port exists.
        """
        url = self.config.wsdl_url(path)
        _logger.debug("Loading WSDL: %s", url)
        try:
            client = Client(
                wsdl=url,
                transport=build_transport(self.config),
                settings=Settings(xml_huge_tree=True),
            )
        except (ZeepError, OSError) as exc:
            _logger.exception("Could not connect to the RM server: %s", url)
            raise ServiceConnectionError(
                f"Could not connect to the RM server at {url}: {exc}", url=url
            ) from exc

        service = _bind_soap11(client, url)
        _logger.info("SOAP client ready: %s", url)
        return service
