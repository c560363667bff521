"""Tests for totvs_rm_soap.services.report_list -- GetReportList result parser."""

import pytest

from totvs_rm_soap.errors import MalformedResponseError
from totvs_rm_soap.services.report_list import DelimitedReportListParser, parse_report_list

from .conftest import REPORT_LIST_RAW


def test_single_record_with_comma_in_name():
    entries = parse_report_list('s:7625:"BR01,ERP,10,RPT10,My Report, with comma,2024-01-01,uuid-123;,')
    assert entries == [
        {
            "coligada": "BR01",
            "sistema": "ERP",
            "id": "10",
            "codigo": "RPT10",
            "nome": "My Report, with comma",
            "data": "2024-01-01",
            "uuid": "uuid-123",
        }
    ]


def test_captured_server_result():
    entries = parse_report_list(REPORT_LIST_RAW)
    assert len(entries) == 2
    assert entries[0]["nome"] == "Extrato de lançamentos"
    assert entries[0]["uuid"] == "6f1c2a9e-0b7d-4d7e-9a51-3c2f0e1b2a10"
    assert entries[1]["nome"] == "Ficha, cadastral, completa"
    assert entries[1]["data"] == "2023-11-20"


@pytest.mark.parametrize(
    "raw",
    [
        's:120:"1,F,1,A,Um,2024-01-01,u1;,1,F,2,B,Dois,2024-01-02,u2"',
        's:120:"1,F,1,A,Um,2024-01-01,u1;,1,F,2,B,Dois,2024-01-02,u2";',
        "1,F,1,A,Um,2024-01-01,u1;,1,F,2,B,Dois,2024-01-02,u2",
    ],
    ids=["closing_quote", "closing_quote_semicolon", "no_envelope"],
)
def test_envelope_variants(raw):
    entries = parse_report_list(raw)
    assert [e["uuid"] for e in entries] == ["u1", "u2"]
    assert [e["nome"] for e in entries] == ["Um", "Dois"]


def test_quote_kept_without_envelope():
    """Without the s:<len>: prefix a trailing quote belongs to the uuid field."""
    (entry,) = parse_report_list('1,F,1,A,Um,2024-01-01,u1"')
    assert entry["uuid"] == 'u1"'


def test_fields_are_trimmed():
    (entry,) = parse_report_list(" 1 , F ,3, C ,  Nome  ,2024-01-01 , u3 ;,")
    assert entry == {
        "coligada": "1",
        "sistema": "F",
        "id": "3",
        "codigo": "C",
        "nome": "Nome",
        "data": "2024-01-01",
        "uuid": "u3",
    }


@pytest.mark.parametrize("raw", [None, "", "   ", 's:0:""'], ids=["none", "empty", "blank", "empty_envelope"])
def test_empty_input(raw):
    assert parse_report_list(raw) == []


def test_too_few_fields():
    with pytest.raises(MalformedResponseError, match="fields"):
        parse_report_list("1,F,1,A,2024-01-01;,")


def test_parser_instance():
    parser = DelimitedReportListParser()
    assert parser.parse(REPORT_LIST_RAW) == parse_report_list(REPORT_LIST_RAW)
