"""
totvs_rm_soap -- Python client for the Totvs RM Process and Report SOAP services.

Loads connection settings from the environment, builds SOAP 1.1 clients
against the RM ``MEX`` WSDL endpoints, and returns plain Python data.
"""

from __future__ import annotations

from .config import ConnectionConfig, load_config
from .constants import __version__
from .errors import (
    ConfigError,
    MalformedResponseError,
    RemoteCallError,
    SchemaViolationError,
    ServiceConnectionError,
    TotvsRmError,
)
from .network import WebService
from .serialize import parse_xml, to_map
from .services import (
    DelimitedReportListParser,
    ParameterType,
    ProcessService,
    ReportListEntry,
    ReportListParser,
    ReportParameter,
    ReportRequest,
    ReportService,
    build_parameter_xml,
    parse_report_list,
)

__all__ = [
    "ConfigError",
    "ConnectionConfig",
    "DelimitedReportListParser",
    "MalformedResponseError",
    "ParameterType",
    "ProcessService",
    "RemoteCallError",
    "ReportListEntry",
    "ReportListParser",
    "ReportParameter",
    "ReportRequest",
    "ReportService",
    "SchemaViolationError",
    "ServiceConnectionError",
    "TotvsRmError",
    "WebService",
    "__version__",
    "build_parameter_xml",
    "load_config",
    "parse_report_list",
    "parse_xml",
    "to_map",
]
