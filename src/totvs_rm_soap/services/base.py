"""
Shared plumbing for the RM service wrappers.

Every wrapper owns one bound SOAP client and funnels its remote calls
through :meth:`BaseService._call`, which unwraps the ``<Operation>Result``
field and turns transport and SOAP faults into :class:`RemoteCallError`.
"""

from __future__ import annotations

__all__ = ["BaseService"]

import logging
from typing import TYPE_CHECKING, Any, ClassVar

from zeep.exceptions import Error as ZeepError
from zeep.exceptions import Fault

from ..errors import MalformedResponseError, RemoteCallError

if TYPE_CHECKING:
    from ..network import WebService

_logger = logging.getLogger(__name__)

_SCALAR_TYPES = (str, bytes, int, float, bool)


def _unwrap_result(response: Any, operation: str) -> Any:
    """Return ``response.<operation>Result`` if present, else the response itself.

    zeep already unwraps single-part responses; some WSDL shapes still
    come back as the wrapper object.
    """
    if response is None or isinstance(response, _SCALAR_TYPES):
        return response
    result_name = f"{operation}Result"
    try:
        return getattr(response, result_name)
    except (AttributeError, KeyError):
        return response


class BaseService:
    """Base class for service wrappers bound to one WSDL endpoint.

    Args:
        web_service: Connection factory used to build the client.
        client: Already-bound client (a zeep ServiceProxy or compatible
            object). Mutually exclusive with ``web_service``.
    """

    wsdl_path: ClassVar[str]

    def __init__(self, web_service: WebService | None = None, *, client: Any = None) -> None:
        if (web_service is None) == (client is None):
            raise TypeError("Provide exactly one of 'web_service' or 'client'.")
        if client is None:
            client = web_service.get_client(self.wsdl_path)  # type: ignore[union-attr]  # checked above
        self._client = client

    def _call(self, operation: str, **params: Any) -> Any:
        """
        Invoke a remote operation and return its unwrapped result.

        Raises:
            RemoteCallError: If the server returned a fault or the
                transport failed.
        """
        _logger.debug("SOAP call %s.%s", type(self).__name__, operation)
        method = getattr(self._client, operation)
        try:
            response = method(**params)
        except Fault as exc:
            _logger.error("SOAP fault from %s in %s: %s", operation, type(self).__name__, exc.message)
            raise RemoteCallError(
                f"SOAP fault from {operation}: {exc.message}", operation=operation
            ) from exc
        except (ZeepError, OSError) as exc:
            _logger.error("Error calling %s in %s: %s", operation, type(self).__name__, exc)
            raise RemoteCallError(f"Error calling {operation}: {exc}", operation=operation) from exc
        return _unwrap_result(response, operation)

    def _call_int(self, operation: str, **params: Any) -> int:
        """:meth:`_call` for operations whose result is an integer.

        Raises:
            MalformedResponseError: If the result is missing or not an integer.
        """
        result = self._call(operation, **params)
        if isinstance(result, bool) or result is None:
            raise MalformedResponseError(f"{operation} returned no integer result: {result!r}")
        if isinstance(result, float) and not result.is_integer():
            raise MalformedResponseError(f"{operation} returned a non-integer result: {result!r}")
        try:
            return int(result)
        except (TypeError, ValueError) as exc:
            raise MalformedResponseError(
                f"{operation} returned a non-integer result: {result!r}"
            ) from exc

    def _call_str(self, operation: str, **params: Any) -> str:
        """:meth:`_call` for operations whose result is a string.

        Raises:
            MalformedResponseError: If the result is missing or not a string.
        """
        result = self._call(operation, **params)
        if not isinstance(result, str):
            raise MalformedResponseError(f"{operation} returned no string result: {result!r}")
        return result
