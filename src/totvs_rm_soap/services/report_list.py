"""
Parser for the ``GetReportList`` result.

The RM server answers ``GetReportList`` with one large string rather than
structured XML.  Grammar, as observed on RM 12.1:

    result  := [ 's:' DIGITS ':"' ] record { ';,' record } [ '"' [ ';' ] ]
    record  := coligada ',' sistema ',' id ',' codigo ',' nome ',' data ',' uuid
    nome    := text that may itself contain ','

The envelope is a PHP length-prefixed string serialization.  ``nome`` is
recovered as every field between ``codigo`` and the trailing ``data`` and
``uuid`` fields, re-joined with ``", "``.

The format is undocumented; :class:`ReportListParser` lets callers swap in
another parser without touching :class:`~totvs_rm_soap.services.ReportService`.
"""

from __future__ import annotations

__all__ = [
    "FIELD_SEPARATOR",
    "NAME_SEPARATOR",
    "RECORD_SEPARATOR",
    "DelimitedReportListParser",
    "ReportListEntry",
    "ReportListParser",
    "parse_report_list",
]

import logging
import re
from typing import Protocol, TypedDict

from ..constants import REPORT_LIST_MIN_FIELDS, XML_PREVIEW_LENGTH
from ..errors import MalformedResponseError

_logger = logging.getLogger(__name__)

RECORD_SEPARATOR = ";,"
FIELD_SEPARATOR = ","
NAME_SEPARATOR = ", "

_ENVELOPE_PREFIX = re.compile(r'^\s*s:\d+:"')
_ENVELOPE_SUFFIX = re.compile(r'"\s*;?\s*$')


class ReportListEntry(TypedDict):
    """One report returned by ``GetReportList``."""

    coligada: str
    sistema: str
    id: str
    codigo: str
    nome: str
    data: str
    uuid: str


class ReportListParser(Protocol):
    """Protocol for ``GetReportList`` result parsers."""

    def parse(self, raw: str | None) -> list[ReportListEntry]:
        """
        Parse the raw ``GetReportListResult`` string.

        Returns:
            Reports in server order; empty for empty input.

        Raises:
            MalformedResponseError: If a record cannot be parsed.
        """
        ...


def _strip_envelope(raw: str) -> str:
    """Remove the ``s:<len>:"`` prefix and closing quote, if present."""
    body = _ENVELOPE_PREFIX.sub("", raw, count=1)
    if body != raw:
        body = _ENVELOPE_SUFFIX.sub("", body, count=1)
    return body


def _parse_record(record: str) -> ReportListEntry:
    fields = [field.strip() for field in record.split(FIELD_SEPARATOR)]
    if len(fields) < REPORT_LIST_MIN_FIELDS:
        raise MalformedResponseError(
            f"Report list record has {len(fields)} fields, expected at least "
            f"{REPORT_LIST_MIN_FIELDS}: {record[:XML_PREVIEW_LENGTH]!r}"
        )
    return {
        "coligada": fields[0],
        "sistema": fields[1],
        "id": fields[2],
        "codigo": fields[3],
        "nome": NAME_SEPARATOR.join(fields[4:-2]).strip(),
        "data": fields[-2],
        "uuid": fields[-1],
    }


class DelimitedReportListParser:
    """Default :class:`ReportListParser` for the delimited string format."""

    def parse(self, raw: str | None) -> list[ReportListEntry]:
        if not raw:
            return []
        entries: list[ReportListEntry] = []
        for record in _strip_envelope(raw).split(RECORD_SEPARATOR):
            record = record.strip()  # noqa: PLW2901 -- normalized in place
            if not record:
                continue
            entries.append(_parse_record(record))
        _logger.debug("Parsed report list: %d record(s)", len(entries))
        return entries


def parse_report_list(raw: str | None) -> list[ReportListEntry]:
    """Parse a ``GetReportList`` result with :class:`DelimitedReportListParser`."""
    return DelimitedReportListParser().parse(raw)
