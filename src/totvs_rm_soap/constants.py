"""
Library-wide constants for totvs-rm-soap.

Environment variable names, WSDL paths, timeouts and parser limits are
centralized here.
"""

from __future__ import annotations

import importlib.metadata

try:
    __version__ = importlib.metadata.version("totvs-rm-soap")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"

__all__ = [
    "DEFAULT_TIMEOUT",
    "ENV_ALLOW_SELF_SIGNED",
    "ENV_CA_BUNDLE",
    "ENV_PASS",
    "ENV_TIMEOUT",
    "ENV_URL",
    "ENV_USER",
    "ENV_VERIFY_PEER",
    "ENV_VERIFY_PEER_NAME",
    "MAX_TIMEOUT",
    "MIN_TIMEOUT",
    "PROCESS_WSDL_PATH",
    "REPORT_LIST_MIN_FIELDS",
    "REPORT_WSDL_PATH",
    "XML_PREVIEW_LENGTH",
    "__version__",
]

# ── Environment variable names ──────────────────────────────────────

ENV_URL = "WS_URL"
ENV_USER = "WS_USER"
ENV_PASS = "WS_PASS"
ENV_VERIFY_PEER = "WS_SSL_VERIFY_PEER"
ENV_VERIFY_PEER_NAME = "WS_SSL_VERIFY_PEER_NAME"
ENV_ALLOW_SELF_SIGNED = "WS_SSL_ALLOW_SELF_SIGNED"
ENV_CA_BUNDLE = "WS_CA_BUNDLE"
ENV_TIMEOUT = "WS_TIMEOUT"


# ── WSDL endpoints (appended to WS_URL) ─────────────────────────────

PROCESS_WSDL_PATH = "/wsProcess/MEX?wsdl"
REPORT_WSDL_PATH = "/wsReport/MEX?wsdl"


# ── Timeout values (seconds) ────────────────────────────────────────

# HTTP timeout for WSDL loading and each SOAP operation.
# Report generation on large companies routinely takes over a minute.
DEFAULT_TIMEOUT = 120

MIN_TIMEOUT = 1
MAX_TIMEOUT = 3600


# ── Protocol constants ──────────────────────────────────────────────

# XML preview truncation length for log and error messages (characters)
XML_PREVIEW_LENGTH = 300

# coligada, sistema, id, codigo, data, uuid (nome may be empty)
REPORT_LIST_MIN_FIELDS = 6
