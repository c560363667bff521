"""Connection factory and HTTP transport layer."""

from __future__ import annotations

from .connection import WebService
from .transport import build_session, build_transport

__all__ = ["WebService", "build_session", "build_transport"]
