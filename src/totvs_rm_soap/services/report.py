"""
Report service wrapper (``wsReport``).

Lists reports, generates them synchronously or asynchronously, and fetches
the generated file in chunks.

Asynchronous generation is two-phase: :meth:`ReportService.generate_report_asynchronous`
returns a handle, :meth:`ReportService.get_generated_report_status` polls
it.  Generated files are addressed by GUID for size, hash and chunk calls.

Operations annotated to return a string or integer raise
:class:`~totvs_rm_soap.errors.MalformedResponseError` when the server
sends a nil or mistyped result.
"""

from __future__ import annotations

__all__ = ["ReportRequest", "ReportService"]

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..constants import REPORT_WSDL_PATH
from ..serialize import to_map
from .base import BaseService
from .report_list import DelimitedReportListParser, ReportListEntry, ReportListParser
from .report_parameters import ParameterLike, build_parameter_xml

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..network import WebService

_logger = logging.getLogger(__name__)


@dataclass
class ReportRequest:
    """Arguments of a report generation call.

    Attributes:
        coligada: Company code.
        report_id: Report id within the company.
        nome_arquivo: Output file name; the extension selects the format
            (e.g. ``relatorio.pdf``).
        filtro: Report filter expression; empty means none.
        parametros: Parameter XML built by :meth:`set_parametros`; empty
            means none.
        contexto: Execution context string; empty means none.
    """

    coligada: int
    report_id: int
    nome_arquivo: str
    filtro: str = ""
    parametros: str = ""
    contexto: str = ""

    def set_parametros(self, params: Iterable[ParameterLike]) -> None:
        """Build and store the parameter XML for ``params``.

        Raises:
            SchemaViolationError: If a parameter type is not recognized.
        """
        self.parametros = build_parameter_xml(params)

    def to_soap(self) -> dict[str, Any]:
        """Map to ``GenerateReport`` arguments; empty optional fields are sent as absent."""
        return {
            "codColigada": self.coligada,
            "id": self.report_id,
            "filters": self.filtro or None,
            "parameters": self.parametros or None,
            "fileName": self.nome_arquivo,
            "contexto": self.contexto or None,
        }


class ReportService(BaseService):
    """Client for the RM report server.

    Args:
        web_service: Connection factory used to build the client.
        client: Already-bound client, instead of ``web_service``.
        list_parser: Parser for ``GetReportList`` results.
    """

    wsdl_path = REPORT_WSDL_PATH

    def __init__(
        self,
        web_service: WebService | None = None,
        *,
        client: Any = None,
        list_parser: ReportListParser | None = None,
    ) -> None:
        super().__init__(web_service, client=client)
        self.list_parser: ReportListParser = list_parser or DelimitedReportListParser()

    def get_report_list(self, coligada: int) -> list[ReportListEntry]:
        """
        List the reports available to a company.

        Returns:
            Entries with coligada, sistema, id, codigo, nome, data and uuid.

        Raises:
            RemoteCallError: If the call failed.
            MalformedResponseError: If the result cannot be parsed.
        """
        raw = self._call("GetReportList", codColigada=coligada)
        return self.list_parser.parse(raw)

    def generate_report(self, request: ReportRequest) -> str:
        """Generate a report and return the server's identifier for the file."""
        _logger.info(
            "Generating report %d (coligada=%d, file=%s)",
            request.report_id,
            request.coligada,
            request.nome_arquivo,
        )
        return self._call_str("GenerateReport", **request.to_soap())

    def generate_report_asynchronous(self, request: ReportRequest) -> str:
        """
        Submit a report for background generation.

        Returns:
            Handle to poll with :meth:`get_generated_report_status`.
        """
        _logger.info(
            "Submitting report %d (coligada=%d, file=%s)",
            request.report_id,
            request.coligada,
            request.nome_arquivo,
        )
        return self._call_str("GenerateReportAsynchronous", **request.to_soap())

    def get_report_meta_data(self, coligada: int, report_id: int) -> str:
        """Return the report's metadata document as the raw XML string."""
        return self._call_str("GetReportMetaData", codColigada=coligada, id=report_id)

    def get_report_meta_data_map(self, coligada: int, report_id: int) -> dict[str, Any]:
        """Return the report's metadata as nested dicts (see :func:`~totvs_rm_soap.serialize.to_map`)."""
        return to_map(self.get_report_meta_data(coligada, report_id))

    def get_report_info(self, coligada: int, id_report: int) -> list[str]:
        """Return the report's info strings, or an empty list if there are none."""
        result = self._call("GetReportInfo", codColigada=coligada, idReport=id_report)
        if result is None:
            return []
        if isinstance(result, list):
            return result
        strings = getattr(result, "string", None)
        if strings is None:
            _logger.debug("GetReportInfo returned no strings for report %d", id_report)
            return []
        return list(strings)

    def get_generated_report_status(self, report_handle: str) -> str:
        """Return the status of an asynchronously generated report."""
        return self._call_str("GetGeneratedReportStatus", id=report_handle)

    def get_generated_report_size(self, guid: str) -> int:
        """Return the generated file's size in bytes."""
        return self._call_int("GetGeneratedReportSize", guid=guid)

    def get_file_hash(self, guid: str) -> str:
        """Return the generated file's hash as computed by the server."""
        return self._call_str("GetFileHash", guid=guid)

    def get_file_chunk(self, guid: str, offset: int, length: int) -> bytes:
        """
        Fetch ``length`` bytes of the generated file starting at ``offset``.

        Raises:
            ValueError: If offset is negative or length is not positive.
            RemoteCallError: If the call failed.
        """
        if offset < 0:
            raise ValueError(f"offset must be >= 0, got {offset}")
        if length <= 0:
            raise ValueError(f"length must be > 0, got {length}")
        _logger.debug("Fetching chunk of %s: offset=%d, length=%d", guid, offset, length)
        return self._call("GetFileChunk", guid=guid, offset=offset, length=length)
