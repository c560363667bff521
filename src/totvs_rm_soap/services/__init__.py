"""Service wrappers for the RM Process and Report web services."""

from __future__ import annotations

from .process import ProcessService
from .report import ReportRequest, ReportService
from .report_list import (
    DelimitedReportListParser,
    ReportListEntry,
    ReportListParser,
    parse_report_list,
)
from .report_parameters import ParameterType, ReportParameter, build_parameter_xml

__all__ = [
    "DelimitedReportListParser",
    "ParameterType",
    "ProcessService",
    "ReportListEntry",
    "ReportListParser",
    "ReportParameter",
    "ReportRequest",
    "ReportService",
    "build_parameter_xml",
    "parse_report_list",
]
