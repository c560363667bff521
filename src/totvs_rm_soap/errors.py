"""totvs-rm-soap error types."""

from __future__ import annotations

from typing import Any

__all__ = [
    "ConfigError",
    "MalformedResponseError",
    "RemoteCallError",
    "SchemaViolationError",
    "ServiceConnectionError",
    "TotvsRmError",
]


class TotvsRmError(Exception):
    """Base error for Totvs RM web service operations."""


class ConfigError(TotvsRmError):
    """Configuration is missing or invalid."""


class ServiceConnectionError(TotvsRmError):
    """WSDL could not be fetched or parsed, or the transport failed.

    Args:
        message: Human-readable error description.
        url: WSDL location that was being loaded, if known.
    """

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url

    def __reduce__(self) -> tuple[type[ServiceConnectionError], tuple[str], dict[str, Any]]:
        """Preserve url across pickle/unpickle."""
        return (type(self), (str(self),), {"url": self.url})

    def __setstate__(self, state: dict[str, Any] | None) -> None:
        if state is None:
            return
        self.url = state.get("url")


class RemoteCallError(TotvsRmError):
    """A remote SOAP operation failed or returned a fault.

    Args:
        message: Human-readable error description.
        operation: Name of the SOAP operation that failed.
    """

    def __init__(self, message: str, *, operation: str | None = None) -> None:
        super().__init__(message)
        self.operation = operation

    def __reduce__(self) -> tuple[type[RemoteCallError], tuple[str], dict[str, Any]]:
        """Preserve operation across pickle/unpickle."""
        return (type(self), (str(self),), {"operation": self.operation})

    def __setstate__(self, state: dict[str, Any] | None) -> None:
        if state is None:
            return
        self.operation = state.get("operation")


class MalformedResponseError(TotvsRmError):
    """Server response could not be parsed."""


class SchemaViolationError(TotvsRmError):
    """Report parameter does not match the schema the server expects."""
